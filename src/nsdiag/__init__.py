"""nsdiag — rule-driven diagnostics for NetScaler configuration text."""

__version__ = "0.1.0"

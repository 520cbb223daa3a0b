"""Diagnostic engine — text units, findings, and the scanner."""

from nsdiag.engine.models import Finding, Group, Leaf, Position, Range, TextUnit, leaves, text_unit
from nsdiag.engine.scanner import DiagnosticEngine, compile_rule, scan

__all__ = [
    "DiagnosticEngine",
    "Finding",
    "Group",
    "Leaf",
    "Position",
    "Range",
    "TextUnit",
    "compile_rule",
    "leaves",
    "scan",
    "text_unit",
]

"""Global configuration — XDG paths, env vars, defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

_FALSY = {"0", "false", "no", "off"}

DEFAULT_DOCUMENT_NAMES = ("app.ns.conf", "app.ns.json")


def _default_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "nsdiag"
    return Path.home() / ".config" / "nsdiag"


@dataclass
class NsDiagConfig:
    """Application-wide configuration."""

    config_dir: Path = field(default_factory=_default_config_dir)
    catalog_path: Path | None = None  # None → bundled catalog
    enabled: bool = True
    document_names: tuple[str, ...] = DEFAULT_DOCUMENT_NAMES
    verbose: bool = False

    @classmethod
    def load(cls) -> NsDiagConfig:
        """Load config from environment variables with XDG defaults."""
        config = cls()

        env_enabled = os.environ.get("NSDIAG_ENABLED")
        if env_enabled:
            config.enabled = env_enabled.strip().lower() not in _FALSY

        env_catalog = os.environ.get("NSDIAG_CATALOG")
        if env_catalog:
            config.catalog_path = Path(env_catalog)
        else:
            # A user catalog in the config dir overrides the bundled one
            user_catalog = config.config_dir / "diagnostics.json"
            if user_catalog.is_file():
                config.catalog_path = user_catalog

        return config

"""Load RuleCatalog values from JSON or YAML files."""

from __future__ import annotations

import importlib.resources
import json
import logging
from pathlib import Path
from typing import Any

import yaml

from nsdiag.catalog.models import Category, Rule, RuleCatalog, Severity, Technology
from nsdiag.errors import CatalogLoadError

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = {".yaml", ".yml"}
_REQUIRED = ("code", "severity", "title", "message")


def default_catalog_path() -> Path:
    """Path of the catalog bundled with the package."""
    resource = importlib.resources.files("nsdiag.catalog").joinpath(
        "presets/diagnostics.json"
    )
    return Path(str(resource))


def load_catalog(path: str | Path) -> RuleCatalog:
    """Load a rule catalog from a file. Patterns are not compiled here."""
    path = Path(path)
    logger.info("Loading diagnostic rules from %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CatalogLoadError(f"Cannot read rule catalog {path}: {e}") from e

    fmt = "yaml" if path.suffix.lower() in _YAML_SUFFIXES else "json"
    catalog = _build_catalog(_parse(text, fmt, str(path)), source=str(path))
    logger.info("Loaded %d rules from %s", len(catalog), path)
    return catalog


def load_catalog_from_string(text: str, fmt: str = "json") -> RuleCatalog:
    """Parse catalog text (``json`` or ``yaml``) into a RuleCatalog."""
    return _build_catalog(_parse(text, fmt, "<string>"), source="<string>")


def reload_catalog(catalog: RuleCatalog) -> RuleCatalog:
    """Re-read a catalog's source file and return a new catalog value."""
    if catalog.source == "<string>":
        raise CatalogLoadError("Catalog was not loaded from a file and cannot be reloaded")
    return load_catalog(catalog.source)


def _parse(text: str, fmt: str, origin: str) -> Any:
    try:
        if fmt == "yaml":
            return yaml.safe_load(text)
        if fmt == "json":
            return json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CatalogLoadError(f"Rule catalog {origin} is not valid {fmt}: {e}") from e
    raise CatalogLoadError(f"Unsupported catalog format: {fmt}")


def _build_catalog(data: Any, source: str) -> RuleCatalog:
    if not isinstance(data, list):
        raise CatalogLoadError(f"Rule catalog {source} must contain a list of rules")
    rules = tuple(_parse_rule(item, index) for index, item in enumerate(data))
    return RuleCatalog(entries=rules, source=source)


def _parse_rule(item: Any, index: int) -> Rule:
    if not isinstance(item, dict):
        raise CatalogLoadError(f"Rule #{index} must be an object")

    missing = [key for key in _REQUIRED if key not in item]
    if missing:
        raise CatalogLoadError(f"Rule #{index} is missing {', '.join(missing)}")

    code = str(item["code"])
    # "regex" is the catalog key; "pattern" is accepted as an alias
    pattern = item.get("regex", item.get("pattern"))

    try:
        severity = Severity.from_label(item["severity"])
        category = Category(item["category"]) if item.get("category") else None
        technology = Technology(item["technology"]) if item.get("technology") else None
    except ValueError as e:
        raise CatalogLoadError(f"Rule {code}: {e}") from e

    return Rule(
        code=code,
        severity=severity,
        title=_text(item["title"]),
        message=_text(item["message"]),
        pattern=_text(pattern),
        category=category,
        technology=technology,
        description=_text(item.get("description")),
    )


def _text(value: Any) -> str:
    """Explicit null in the catalog reads as an empty string."""
    return "" if value is None else str(value)

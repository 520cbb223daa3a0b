"""Rule catalog models and loading."""

from nsdiag.catalog.loader import (
    default_catalog_path,
    load_catalog,
    load_catalog_from_string,
    reload_catalog,
)
from nsdiag.catalog.models import Category, Rule, RuleCatalog, Severity, Technology

__all__ = [
    "Category",
    "Rule",
    "RuleCatalog",
    "Severity",
    "Technology",
    "default_catalog_path",
    "load_catalog",
    "load_catalog_from_string",
    "reload_catalog",
]

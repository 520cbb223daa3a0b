"""Exception types shared across the package."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nsdiag.catalog.models import Rule


class NsDiagError(Exception):
    """Base class for all nsdiag errors."""


class CatalogLoadError(NsDiagError):
    """The rule catalog is missing, unreadable, or structurally invalid."""


class RulePatternError(NsDiagError):
    """A single rule's regex failed to compile."""

    def __init__(self, rule: Rule, error: Exception) -> None:
        self.rule = rule
        self.error = error
        super().__init__(
            f"Diagnostic rule {rule.code} has invalid regex: {rule.pattern}. Error: {error}"
        )

"""Statistics rollups over findings and over the rule catalog."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from nsdiag.catalog.models import Category, RuleCatalog, Severity, Technology
from nsdiag.engine.models import Finding


@dataclass
class SeverityCounts:
    """One counter per severity level."""

    error: int = 0
    warning: int = 0
    information: int = 0
    hint: int = 0

    def add(self, severity: Severity) -> None:
        if severity is Severity.ERROR:
            self.error += 1
        elif severity is Severity.WARNING:
            self.warning += 1
        elif severity is Severity.INFORMATION:
            self.information += 1
        else:
            self.hint += 1

    def get(self, severity: Severity) -> int:
        return {
            Severity.ERROR: self.error,
            Severity.WARNING: self.warning,
            Severity.INFORMATION: self.information,
            Severity.HINT: self.hint,
        }[severity]

    def to_dict(self, include_zero: bool = True) -> dict[str, int]:
        """Counts keyed by severity label, in severity order."""
        return {
            s.label: self.get(s)
            for s in Severity
            if include_zero or self.get(s)
        }


def _zero_technologies() -> dict[Technology, int]:
    return {t: 0 for t in Technology}


def _zero_categories() -> dict[Category, int]:
    return {c: 0 for c in Category}


@dataclass
class CatalogStats:
    """Summary of a rule catalog."""

    total: int = 0
    by_technology: dict[Technology, int] = field(default_factory=_zero_technologies)
    by_category: dict[Category, int] = field(default_factory=_zero_categories)
    by_severity: SeverityCounts = field(default_factory=SeverityCounts)
    active_rules: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "byTechnology": {t.value: n for t, n in self.by_technology.items()},
            "byCategory": {c.value: n for c, n in self.by_category.items()},
            "bySeverity": self.by_severity.to_dict(),
            "activeRules": self.active_rules,
        }


def finding_stats(findings: Iterable[Finding]) -> dict[str, int]:
    """Count findings per severity label. Unobserved severities are omitted."""
    counts = SeverityCounts()
    for finding in findings:
        counts.add(finding.severity)
    return counts.to_dict(include_zero=False)


def catalog_stats(catalog: RuleCatalog) -> CatalogStats:
    """Summarize a catalog by technology, category, severity and activity.

    Technology is inferred from the title prefix, not from the rule's own
    ``technology`` field.
    """
    stats = CatalogStats(total=len(catalog))
    for rule in catalog.rules():
        stats.by_severity.add(rule.severity)
        if rule.is_active:
            stats.active_rules += 1
        stats.by_technology[Technology.from_title(rule.title)] += 1
        if rule.category is not None:
            stats.by_category[rule.category] += 1
    return stats

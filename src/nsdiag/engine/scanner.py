"""Diagnostic engine — matches catalog rules against text, line by line."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from nsdiag.catalog.models import Rule, RuleCatalog
from nsdiag.engine.models import Finding, Group, Leaf, Position, Range, TextUnit, text_unit
from nsdiag.errors import RulePatternError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _CompiledRule:
    """A rule with its pattern compiled once per scan."""

    rule: Rule
    regex: re.Pattern[str]


def compile_rule(rule: Rule) -> re.Pattern[str]:
    """Compile a rule's pattern, raising RulePatternError if it is malformed."""
    try:
        return re.compile(rule.pattern)
    except re.error as e:
        raise RulePatternError(rule, e) from e


def scan(unit: TextUnit | str | list[Any], catalog: RuleCatalog) -> list[Finding]:
    """Scan a text unit against every rule in the catalog.

    Findings come back in leaf order (depth-first, left to right), then line
    order, then catalog order within a line. A rule whose pattern does not
    compile is logged and skipped; it never aborts the scan.
    """
    compiled = _compile_catalog(catalog)
    findings: list[Finding] = []
    _scan_unit(text_unit(unit), compiled, findings)
    return findings


def _compile_catalog(catalog: RuleCatalog) -> list[_CompiledRule]:
    compiled: list[_CompiledRule] = []
    for rule in catalog.rules():
        # Only an exactly empty pattern is inactive here
        if rule.pattern == "":
            continue
        try:
            compiled.append(_CompiledRule(rule=rule, regex=compile_rule(rule)))
        except RulePatternError as e:
            logger.warning("%s", e)
    return compiled


def _scan_unit(unit: TextUnit, compiled: list[_CompiledRule], findings: list[Finding]) -> None:
    if isinstance(unit, Group):
        for child in unit.units:
            _scan_unit(child, compiled, findings)
        return
    _scan_leaf(unit, compiled, findings)


def _scan_leaf(leaf: Leaf, compiled: list[_CompiledRule], findings: list[Finding]) -> None:
    if not leaf.text:
        return

    for index, line in enumerate(leaf.text.split("\n")):
        for cr in compiled:
            # First match only, even if the pattern occurs again later in the line
            match = cr.regex.search(line)
            if match is None:
                continue
            start = match.start()
            findings.append(
                Finding(
                    code=cr.rule.code,
                    message=cr.rule.message,
                    severity=cr.rule.severity,
                    range=Range(
                        start=Position(index, start),
                        end=Position(index, start + len(match.group(0))),
                    ),
                )
            )


class DiagnosticEngine:
    """Binds a catalog value to the scan function."""

    def __init__(self, catalog: RuleCatalog) -> None:
        self._catalog = catalog

    @property
    def catalog(self) -> RuleCatalog:
        return self._catalog

    def scan(self, unit: TextUnit | str | list[Any]) -> list[Finding]:
        return scan(unit, self._catalog)

    def with_catalog(self, catalog: RuleCatalog) -> DiagnosticEngine:
        """Return a new engine over ``catalog``; this one is left untouched."""
        return DiagnosticEngine(catalog)

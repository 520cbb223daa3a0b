"""Tests for the diagnostic engine."""

from __future__ import annotations

import logging

import pytest

from nsdiag.catalog.models import Rule, RuleCatalog, Severity
from nsdiag.engine.models import Group, Leaf, Position, Range, leaves, text_unit
from nsdiag.engine.scanner import DiagnosticEngine, compile_rule, scan
from nsdiag.errors import RulePatternError


def _rule(code: str, pattern: str, severity: Severity = Severity.WARNING) -> Rule:
    return Rule(code=code, severity=severity, title=code, message=f"{code} msg", pattern=pattern)


class TestLeafScan:
    def test_single_match_position(self):
        catalog = RuleCatalog(entries=(_rule("W1", "bar"),))
        findings = scan("foo bar baz", catalog)

        assert len(findings) == 1
        f = findings[0]
        assert f.code == "W1"
        assert f.message == "W1 msg"
        assert f.severity == Severity.WARNING
        assert f.range == Range(Position(0, 4), Position(0, 7))

    def test_first_match_only_per_line(self):
        catalog = RuleCatalog(entries=(_rule("W1", "ab"),))
        findings = scan("ab ab ab", catalog)
        assert len(findings) == 1
        assert findings[0].range.start.character == 0

    def test_line_numbers_are_zero_based(self):
        catalog = RuleCatalog(entries=(_rule("W1", "x"),))
        findings = scan("a\nb\n  x", catalog)
        assert len(findings) == 1
        assert findings[0].range == Range(Position(2, 2), Position(2, 3))

    def test_order_is_line_then_catalog(self):
        catalog = RuleCatalog(entries=(_rule("A", "a"), _rule("B", "b")))
        findings = scan("ba\nab", catalog)
        assert [(f.range.start.line, f.code) for f in findings] == [
            (0, "A"),
            (0, "B"),
            (1, "A"),
            (1, "B"),
        ]

    def test_empty_pattern_never_fires(self, simple_catalog: RuleCatalog):
        findings = scan("foo bar\n\nanything at all", simple_catalog)
        assert not [f for f in findings if f.code == "H1"]

    def test_empty_text_yields_nothing(self):
        catalog = RuleCatalog(entries=(_rule("ANY", ".*"),))
        assert scan("", catalog) == []
        assert scan([], catalog) == []

    def test_whitespace_lines_are_scanned(self):
        catalog = RuleCatalog(entries=(_rule("WS", r"^\s+$"),))
        findings = scan("a\n   \nb", catalog)
        assert len(findings) == 1
        assert findings[0].range == Range(Position(1, 0), Position(1, 3))

    def test_zero_width_match(self):
        catalog = RuleCatalog(entries=(_rule("Z", "$"),))
        findings = scan("abc", catalog)
        assert findings[0].range == Range(Position(0, 3), Position(0, 3))

    def test_severity_ordinals(self):
        assert [s.value for s in Severity] == [0, 1, 2, 3]


class TestBadRules:
    def test_invalid_pattern_is_skipped(self, caplog: pytest.LogCaptureFixture):
        catalog = RuleCatalog(entries=(_rule("BAD", "foo["), _rule("OK", "line")))
        with caplog.at_level(logging.WARNING, logger="nsdiag.engine.scanner"):
            findings = scan("line one\nline two\nline three", catalog)

        assert len(findings) == 3
        assert {f.code for f in findings} == {"OK"}
        assert "BAD" in caplog.text

    def test_invalid_pattern_logged_once_per_scan(self, caplog: pytest.LogCaptureFixture):
        catalog = RuleCatalog(entries=(_rule("BAD", "("),))
        with caplog.at_level(logging.WARNING, logger="nsdiag.engine.scanner"):
            scan("a\nb\nc", catalog)
        assert len(caplog.records) == 1

    def test_compile_rule_raises(self):
        rule = _rule("BAD", "[unclosed")
        with pytest.raises(RulePatternError) as exc_info:
            compile_rule(rule)
        assert exc_info.value.rule is rule
        assert "BAD" in str(exc_info.value)


class TestTextUnits:
    def test_nested_scan_equals_concatenation(self, simple_catalog: RuleCatalog):
        unit = text_unit(["foo bar", ["bar", "nothing"], "fooo\nbar foo"])
        combined = scan(unit, simple_catalog)

        per_leaf = []
        for leaf in leaves(unit):
            per_leaf.extend(scan(leaf, simple_catalog))

        assert combined == per_leaf
        assert len(combined) == 6

    def test_text_unit_coercion(self):
        unit = text_unit(["a", ("b", ["c"])])
        assert unit == Group((Leaf("a"), Group((Leaf("b"), Group((Leaf("c"),))))))
        assert [leaf.text for leaf in leaves(unit)] == ["a", "b", "c"]

    def test_text_unit_rejects_other_types(self):
        with pytest.raises(TypeError):
            text_unit(["ok", 3])

    def test_nested_positions_are_leaf_local(self):
        catalog = RuleCatalog(entries=(_rule("W1", "bar"),))
        findings = scan(["x\nbar", "bar"], catalog)
        assert [f.range.start.line for f in findings] == [1, 0]


class TestEngine:
    def test_idempotent(self, simple_catalog: RuleCatalog):
        engine = DiagnosticEngine(simple_catalog)
        text = "foo bar\nbaz\nbar foo"
        assert engine.scan(text) == engine.scan(text)

    def test_with_catalog_returns_new_engine(self, simple_catalog: RuleCatalog):
        engine = DiagnosticEngine(simple_catalog)
        empty = engine.with_catalog(RuleCatalog())
        assert empty is not engine
        assert engine.catalog is simple_catalog
        assert empty.scan("foo bar") == []

    def test_finding_to_dict(self):
        catalog = RuleCatalog(entries=(_rule("W1", "bar"),))
        data = scan("foo bar", catalog)[0].to_dict()
        assert data == {
            "code": "W1",
            "message": "W1 msg",
            "severity": "Warning",
            "range": {
                "start": {"line": 0, "character": 4},
                "end": {"line": 0, "character": 7},
            },
        }

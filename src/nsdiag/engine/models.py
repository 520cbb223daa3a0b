"""Engine data models — text units in, positioned findings out."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Union

from nsdiag.catalog.models import Severity


@dataclass(frozen=True)
class Position:
    """Zero-based line/character position."""

    line: int
    character: int


@dataclass(frozen=True)
class Range:
    start: Position
    end: Position


@dataclass(frozen=True)
class Finding:
    """A single diagnostic produced by one rule matching one line.

    Positions are local to the leaf text that was scanned; a finding does
    not record which leaf of a group it came from.
    """

    code: str
    message: str
    severity: Severity
    range: Range

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "severity": self.severity.label,
            "range": {
                "start": {"line": self.range.start.line, "character": self.range.start.character},
                "end": {"line": self.range.end.line, "character": self.range.end.character},
            },
        }


@dataclass(frozen=True)
class Leaf:
    """A single blob of newline-separated text."""

    text: str


@dataclass(frozen=True)
class Group:
    """An ordered collection of text units, e.g. one per application."""

    units: tuple[TextUnit, ...] = ()


TextUnit = Union[Leaf, Group]


def text_unit(value: Any) -> TextUnit:
    """Coerce a string or a (nested) list of strings into a TextUnit."""
    if isinstance(value, (Leaf, Group)):
        return value
    if isinstance(value, str):
        return Leaf(value)
    if isinstance(value, (list, tuple)):
        return Group(tuple(text_unit(v) for v in value))
    raise TypeError(f"Cannot build a text unit from {type(value).__name__}")


def leaves(unit: TextUnit) -> Iterator[Leaf]:
    """Yield leaves depth-first, left to right."""
    if isinstance(unit, Leaf):
        yield unit
        return
    for child in unit.units:
        yield from leaves(child)

"""Rule catalog data models — immutable dataclasses loaded once and shared by every scan."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass


class Severity(enum.IntEnum):
    """Finding severity. Values are the fixed ordinal encoding used by stats."""

    ERROR = 0
    WARNING = 1
    INFORMATION = 2
    HINT = 3

    @property
    def label(self) -> str:
        """Catalog spelling, e.g. ``"Error"``."""
        return self.name.capitalize()

    @classmethod
    def from_label(cls, label: str) -> Severity:
        for member in cls:
            if member.label == label:
                return member
        raise ValueError(f"Unknown severity: {label!r}")


class Category(enum.Enum):
    """Rule category."""

    SSL_TLS = "ssl_tls"
    LOAD_BALANCING = "load_balancing"
    PERSISTENCE = "persistence"
    MONITORING = "monitoring"
    SECURITY = "security"
    PERFORMANCE = "performance"
    COMPATIBILITY = "compatibility"
    NETWORKING = "networking"
    POLICIES = "policies"


class Technology(enum.Enum):
    """Target technology of a rule."""

    XC = "XC"
    TMOS = "TMOS"
    NGINX = "NGINX"
    GENERAL = "General"

    @classmethod
    def from_title(cls, title: str) -> Technology:
        """Infer technology from the ``XC-``/``TMOS-``/``NGINX-`` title prefix."""
        for member in (cls.XC, cls.TMOS, cls.NGINX):
            if title.startswith(f"{member.value}-"):
                return member
        return cls.GENERAL


@dataclass(frozen=True)
class Rule:
    """A single pattern rule. An empty pattern marks the rule inactive."""

    code: str
    severity: Severity
    title: str
    message: str
    pattern: str = ""
    category: Category | None = None
    technology: Technology | None = None
    description: str = ""

    @property
    def is_active(self) -> bool:
        return bool(self.pattern.strip())


@dataclass(frozen=True)
class RuleCatalog:
    """An ordered, read-only collection of rules."""

    entries: tuple[Rule, ...] = ()
    source: str = "<string>"

    def rules(self) -> tuple[Rule, ...]:
        return self.entries

    def find(self, code: str) -> list[Rule]:
        """All rules carrying ``code``. Codes are not required to be unique."""
        return [r for r in self.entries if r.code == code]

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

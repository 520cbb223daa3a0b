"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from nsdiag.catalog.models import Category, Rule, RuleCatalog, Severity, Technology


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def catalog_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "catalog.json"


@pytest.fixture
def yaml_catalog_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "catalog.yaml"


@pytest.fixture
def bad_regex_catalog_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "bad_regex_catalog.json"


@pytest.fixture
def simple_catalog() -> RuleCatalog:
    return RuleCatalog(
        entries=(
            Rule(
                code="W1",
                severity=Severity.WARNING,
                title="XC-Bar",
                message="bar found",
                pattern="bar",
                category=Category.SECURITY,
                technology=Technology.TMOS,
            ),
            Rule(
                code="E1",
                severity=Severity.ERROR,
                title="TMOS-Foo",
                message="foo found",
                pattern="fo+",
                category=Category.POLICIES,
            ),
            Rule(
                code="H1",
                severity=Severity.HINT,
                title="Inactive",
                message="never fires",
                pattern="",
            ),
        ),
    )

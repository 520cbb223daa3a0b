"""Update coordinator — rescans documents on change and keeps published findings."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import PurePath
from typing import Any

from nsdiag.catalog.loader import reload_catalog
from nsdiag.catalog.models import RuleCatalog
from nsdiag.config import DEFAULT_DOCUMENT_NAMES
from nsdiag.engine.models import Finding, TextUnit
from nsdiag.engine.scanner import DiagnosticEngine

logger = logging.getLogger(__name__)


class UpdateCoordinator:
    """Clears and rebuilds findings for a document each time its text changes.

    Calls are expected serially from the host's event dispatch; the last call
    for a document wins.
    """

    def __init__(
        self,
        catalog: RuleCatalog,
        enabled: bool = True,
        document_names: tuple[str, ...] = DEFAULT_DOCUMENT_NAMES,
        on_publish: Callable[[str, list[Finding]], None] | None = None,
    ) -> None:
        self._engine = DiagnosticEngine(catalog)
        self._document_names = frozenset(document_names)
        self._on_publish = on_publish
        self._published: dict[str, list[Finding]] = {}
        self.enabled = enabled
        self.last_document: str | None = None

    @property
    def catalog(self) -> RuleCatalog:
        return self._engine.catalog

    @property
    def catalog_location(self) -> str:
        """Where the catalog was loaded from, for opening it in an editor."""
        return self._engine.catalog.source

    def is_recognized(self, document_id: str) -> bool:
        return PurePath(document_id).name in self._document_names

    def rescan(self, document_id: str, text: TextUnit | str | list[Any]) -> list[Finding]:
        """Replace the findings published for ``document_id`` with a fresh scan."""
        if not self.is_recognized(document_id):
            return []

        self._publish(document_id, [])
        if not self.enabled:
            return []

        self.last_document = document_id
        findings = self._engine.scan(text)
        logger.debug("Scanned %s: %d findings", document_id, len(findings))
        self._publish(document_id, findings)
        return findings

    def close(self, document_id: str) -> None:
        """Forget findings for a closed document and tell the host."""
        self._publish(document_id, [])

    def published(self, document_id: str) -> list[Finding]:
        return list(self._published.get(document_id, []))

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def toggle(self) -> bool:
        self.enabled = not self.enabled
        logger.info("Diagnostics %s", "enabled" if self.enabled else "disabled")
        return self.enabled

    def reload_catalog(self) -> RuleCatalog:
        """Swap in a freshly loaded copy of the catalog file."""
        catalog = reload_catalog(self._engine.catalog)
        self._engine = self._engine.with_catalog(catalog)
        return catalog

    def _publish(self, document_id: str, findings: list[Finding]) -> None:
        if findings:
            self._published[document_id] = findings
        else:
            self._published.pop(document_id, None)
        if self._on_publish:
            self._on_publish(document_id, list(findings))

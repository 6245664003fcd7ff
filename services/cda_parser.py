# Purpose: Public facade for parsing CDA documents and reading corpus statistics.
# Date: 2026-10-19
# Related tests: tests/test_cda_parser.py
# AI-assisted: Portions of this file were generated with AI assistance.

"""Stateful CDA parser facade.

``CDAParser`` owns a :class:`DocumentStore` and exposes the operations used by
the CLI and the dashboard: single and batch parsing, statistics, document
listing and clearing.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Iterable, Optional

from parsers.document import parse_cda_document
from parsers.errors import BatchCancelled, XmlStructureError
from parsers.heuristics import DEFAULT_REFERENCE_YEAR
from parsers.records import CDADocument, Statistics
from services.common import iter_file_entries
from services.config import load_config
from services.document_store import DocumentStore
from services.statistics import DEFAULT_TOP_N, calculate_statistics

__all__ = ["CDAParser"]

logger = logging.getLogger(__name__)

ParseOutcome = tuple[str, Optional[CDADocument], Optional[str]]


class CDAParser:
    """Parse CDA documents into an in-memory store and summarise them."""

    def __init__(self, *, reference_year: int = DEFAULT_REFERENCE_YEAR, top_n: int = DEFAULT_TOP_N) -> None:
        self.reference_year = reference_year
        self.top_n = top_n
        self.last_batch_errors: dict[str, str] = {}
        self._store = DocumentStore()

    @classmethod
    def from_config(cls, path: Path | None = None) -> "CDAParser":
        config = load_config(path)
        return cls(reference_year=config["reference_year"], top_n=config["top_n"])

    def parse_one(self, name: str, xml: str | bytes) -> None:
        """Parse one document and append it to the store.

        Raises:
            XmlStructureError: If the markup is malformed. The store is left
                unchanged.
        """
        document = parse_cda_document(name, xml, reference_year=self.reference_year)
        self._store.append(document)
        logger.info("Parsed %s.", name)

    def parse_batch(
        self,
        files: Iterable[Any],
        *,
        max_workers: int | None = None,
        cancel_event: threading.Event | None = None,
    ) -> Statistics:
        """Parse ``files`` and replace the store with the documents that parsed.

        Args:
            files: ``(name, content)`` pairs or mappings with ``name`` and
                ``content`` keys.
            max_workers: Parse in a thread pool of this size when greater
                than one.
            cancel_event: Checked before each document; once set the batch
                stops and the store keeps its previous contents.

        Returns:
            Statistics: Statistics over the replacement set, with
            ``processing_time_ms`` covering the whole batch.

        Raises:
            BatchCancelled: If ``cancel_event`` was set before completion.
        """
        started = time.perf_counter()
        entries = list(iter_file_entries(files))

        if max_workers and max_workers > 1 and len(entries) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                futures = [
                    pool.submit(self._attempt, name, content, cancel_event)
                    for name, content in entries
                ]
                outcomes = [future.result() for future in futures]
        else:
            outcomes = [self._attempt(name, content, cancel_event) for name, content in entries]

        documents: list[CDADocument] = []
        errors: dict[str, str] = {}
        for name, document, error in outcomes:
            if document is not None:
                documents.append(document)
            elif error is not None:
                errors[name] = error

        self._store.replace(documents)
        self.last_batch_errors = errors
        elapsed_ms = int((time.perf_counter() - started) * 1000)

        stats = calculate_statistics(documents, top_n=self.top_n)
        stats["processing_time_ms"] = elapsed_ms
        logger.info(
            "Batch parsed %d of %d files (%d failed) in %d ms.",
            len(documents),
            len(entries),
            len(errors),
            elapsed_ms,
        )
        return stats

    def _attempt(
        self,
        name: str,
        content: str | bytes,
        cancel_event: threading.Event | None,
    ) -> ParseOutcome:
        if cancel_event is not None and cancel_event.is_set():
            raise BatchCancelled(f"Batch cancelled before parsing {name}.")
        try:
            document = parse_cda_document(name, content, reference_year=self.reference_year)
        except XmlStructureError as exc:
            logger.warning("Skipping malformed XML %s: %s", name, exc.description)
            return name, None, exc.description
        return name, document, None

    def get_statistics(self) -> Statistics:
        return calculate_statistics(self._store.snapshot(), top_n=self.top_n)

    def get_documents(self) -> list[CDADocument]:
        """Return copies of the stored documents in insertion order."""
        return self._store.snapshot()

    def clear(self) -> None:
        self._store.clear()
        self.last_batch_errors = {}
        logger.debug("Document store cleared.")

# Purpose: Hold parsed CDA documents for statistics aggregation.
# Date: 2026-10-19
# Related tests: tests/test_document_store.py
# AI-assisted: Portions of this file were generated with AI assistance.

"""In-memory document store.

Every mutation and read takes the store lock, so a batch replacement is seen
by readers either entirely or not at all.
"""

from __future__ import annotations

import copy
import threading
from typing import Iterable

from parsers.records import CDADocument

__all__ = ["DocumentStore"]


class DocumentStore:
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._documents: list[CDADocument] = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)

    def append(self, document: CDADocument) -> None:
        with self._lock:
            self._documents.append(document)

    def replace(self, documents: Iterable[CDADocument]) -> None:
        """Swap the whole store contents for ``documents``."""
        replacement = list(documents)
        with self._lock:
            self._documents = replacement

    def clear(self) -> None:
        with self._lock:
            self._documents = []

    def snapshot(self) -> list[CDADocument]:
        """Return a deep copy of the stored documents in insertion order."""
        with self._lock:
            return copy.deepcopy(self._documents)

# Purpose: Shared helper utilities for the document store and facade.
# Date: 2026-10-19
# Related tests: tests/test_cda_parser.py, tests/test_config.py
# AI-assisted: Portions of this file were generated with AI assistance.

"""Common helpers for service modules."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Mapping

logger = logging.getLogger(__name__)

FileEntry = tuple[str, "str | bytes"]


def clean_str(value: Any) -> str | None:
    """Return a trimmed string for any input, or None when empty."""
    if value is None:
        return None
    if isinstance(value, str):
        cleaned = value.strip()
    else:
        cleaned = str(value).strip()
    return cleaned or None


def coerce_int(value: Any) -> int | None:
    """Return an int for numeric inputs, otherwise None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.isdigit():
            return int(stripped)
        return None
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def iter_file_entries(items: Iterable[Any]) -> Iterator[FileEntry]:
    """Yield ``(name, content)`` pairs from a heterogeneous batch payload.

    Accepts two-item tuples/lists or mappings with ``name`` and ``content``
    keys. Entries missing a string name or a text/bytes content are skipped.
    """
    for item in items:
        if isinstance(item, Mapping):
            name, content = item.get("name"), item.get("content")
        elif isinstance(item, (tuple, list)) and len(item) == 2:
            name, content = item
        else:
            logger.debug("Skipping unrecognised batch entry of type %s.", type(item).__name__)
            continue
        if not isinstance(name, str) or not isinstance(content, (str, bytes)):
            logger.debug("Skipping batch entry without name or content.")
            continue
        yield name, content

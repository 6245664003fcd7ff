from __future__ import annotations

# Purpose: Provide shared helper utilities for CDA parser modules.
# Date: 2026-10-19
# Related tests: tests/test_tokenizer.py, tests/test_rules.py
# AI-assisted: Portions of this file were generated with AI assistance.

"""Common helper functions for CDA parsing routines."""

from typing import Iterable, Sequence

from lxml import etree

from .records import CDADocument

DIAGNOSIS_CONTEXT_MARKERS = ("observation", "diagnosis", "condition", "problem")


def local_name(name: str) -> str:
    """Return the lower-cased local part of an element or attribute name.

    lxml reports namespaced names in Clark notation (``{uri}local``); prefixed
    names are reduced as well so ``hl7:patient`` and ``patient`` compare equal.
    """
    if name.startswith("{"):
        name = etree.QName(name).localname
    elif ":" in name:
        name = name.rsplit(":", 1)[1]
    return name.lower()


def path_contains(path: Sequence[str], element: str) -> bool:
    """Return True when an element with exactly this name encloses the cursor."""
    return element in path


def path_matches_any(path: Sequence[str], fragments: Iterable[str]) -> bool:
    """Return True when any path element name contains any of ``fragments``."""
    fragments = tuple(fragments)
    return any(fragment in part for part in path for fragment in fragments)


def is_diagnosis_context(path: Sequence[str]) -> bool:
    return path_matches_any(path, DIAGNOSIS_CONTEXT_MARKERS)


def collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


def has_medication(document: CDADocument, name: str) -> bool:
    """Return True when the document already lists ``name`` (case-insensitive)."""
    needle = name.lower()
    return any(med["name"].lower() == needle for med in document["medications"])


def has_diagnosis(document: CDADocument, name: str) -> bool:
    """Return True when the document already lists ``name`` (case-insensitive)."""
    needle = name.lower()
    return any(diag["name"].lower() == needle for diag in document["diagnoses"])

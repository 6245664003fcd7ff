# Purpose: Map element character data onto structured CDA document fields.
# Date: 2026-10-19
# Related tests: tests/test_rules.py
# AI-assisted: Portions of this file were generated with AI assistance.

"""Text extraction rules keyed by the closing element name."""

from __future__ import annotations

from typing import Callable, Sequence

from .common import has_medication, path_contains
from .heuristics import extract_diagnoses_from_title, extract_from_text, normalize_medication_name
from .records import MEDICATION_STRUCTURED, CDADocument, make_medication

TextRule = Callable[[CDADocument, str, Sequence[str]], None]

MEDICATION_CONTAINERS = ("manufacturedmaterial", "medication")


def _append_patient_name(document: CDADocument, text: str, path: Sequence[str]) -> None:
    if not path_contains(path, "patient"):
        return
    current = document["patient"]["name"] or ""
    document["patient"]["name"] = f"{current} {text}".strip()


def _handle_name(document: CDADocument, text: str, path: Sequence[str]) -> None:
    if path_contains(path, "assignedperson"):
        document["author"] = text
        return
    if not any(path_contains(path, container) for container in MEDICATION_CONTAINERS):
        return
    med_name = normalize_medication_name(text)
    if med_name and not has_medication(document, med_name):
        document["medications"].append(make_medication(med_name, MEDICATION_STRUCTURED))


def _handle_title(document: CDADocument, text: str, path: Sequence[str]) -> None:
    extract_diagnoses_from_title(document, text)
    extract_from_text(document, text)


def _handle_text(document: CDADocument, text: str, path: Sequence[str]) -> None:
    extract_from_text(document, text)


TEXT_RULES: dict[str, TextRule] = {
    "given": _append_patient_name,
    "family": _append_patient_name,
    "name": _handle_name,
    "title": _handle_title,
    "text": _handle_text,
}


def apply_text(document: CDADocument, tag: str, text: str, path: Sequence[str]) -> bool:
    """Dispatch trimmed, non-empty ``text`` closing ``tag`` to its rule.

    Returns ``True`` when ``tag`` has a registered rule.
    """
    rule = TEXT_RULES.get(tag)
    if rule is None:
        return False
    rule(document, text, path)
    return True

# Purpose: Map element attributes onto structured CDA document fields.
# Date: 2026-10-19
# Related tests: tests/test_rules.py
# AI-assisted: Portions of this file were generated with AI assistance.

"""Attribute extraction rules keyed by ``(tag, attribute)``.

Handlers for a single element run in document attribute order and may mutate
the most recently appended diagnosis. A ``<code displayName=".." code=".."/>``
therefore yields one coded diagnosis, while the reverse attribute order
attaches the code to whichever diagnosis was appended before.
"""

from __future__ import annotations

from typing import Callable, Sequence

from .common import is_diagnosis_context, path_contains
from .heuristics import DEFAULT_REFERENCE_YEAR, age_from_hl7_date, normalize_gender
from .records import CDADocument, make_diagnosis

AttributeRule = Callable[[CDADocument, str, Sequence[str], int], None]

DOCUMENT_DATE_MAX_DEPTH = 3


def _set_gender(document: CDADocument, value: str, path: Sequence[str], reference_year: int) -> None:
    document["patient"]["gender"] = normalize_gender(value)


def _set_birth_time(document: CDADocument, value: str, path: Sequence[str], reference_year: int) -> None:
    document["patient"]["birth_date"] = value
    document["patient"]["age"] = age_from_hl7_date(value, reference_year)


def _set_document_date(document: CDADocument, value: str, path: Sequence[str], reference_year: int) -> None:
    # Nested acts and entries carry their own effectiveTime.
    if len(path) <= DOCUMENT_DATE_MAX_DEPTH:
        document["document_date"] = value


def _add_diagnosis(document: CDADocument, value: str, path: Sequence[str], reference_year: int) -> None:
    if is_diagnosis_context(path):
        document["diagnoses"].append(make_diagnosis(value))


def _set_diagnosis_code(document: CDADocument, value: str, path: Sequence[str], reference_year: int) -> None:
    if is_diagnosis_context(path) and document["diagnoses"]:
        document["diagnoses"][-1]["code"] = value


def _set_patient_id(document: CDADocument, value: str, path: Sequence[str], reference_year: int) -> None:
    if path_contains(path, "patient"):
        document["patient"]["id"] = value


ATTRIBUTE_RULES: dict[tuple[str, str], AttributeRule] = {
    ("administrativegendercode", "code"): _set_gender,
    ("birthtime", "value"): _set_birth_time,
    ("effectivetime", "value"): _set_document_date,
    ("code", "displayname"): _add_diagnosis,
    ("code", "code"): _set_diagnosis_code,
    ("id", "extension"): _set_patient_id,
}


def apply_attribute(
    document: CDADocument,
    tag: str,
    attribute: str,
    value: str,
    path: Sequence[str],
    *,
    reference_year: int = DEFAULT_REFERENCE_YEAR,
) -> bool:
    """Apply the rule registered for ``(tag, attribute)``, if any.

    Args:
        document: Document under construction.
        tag: Lower-cased element name.
        attribute: Lower-cased attribute name.
        value: Raw attribute value.
        path: Current element path, including ``tag``.
        reference_year: Year used to derive ages from birth dates.

    Returns:
        bool: ``True`` when a rule was registered for the pair. Path guards may
        still have declined to change the document.
    """
    rule = ATTRIBUTE_RULES.get((tag, attribute))
    if rule is None:
        return False
    rule(document, value, path, reference_year)
    return True

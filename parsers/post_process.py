# Purpose: Normalise a fully walked CDA document before it is stored.
# Date: 2026-10-19
# Related tests: tests/test_post_process.py
# AI-assisted: Portions of this file were generated with AI assistance.

"""Post-processing for extracted CDA documents."""

from __future__ import annotations

from typing import Iterable, TypeVar

from .common import collapse_whitespace, has_diagnosis
from .records import (
    DIAGNOSIS_MEDICATION_INFERRED,
    CDADocument,
    Diagnosis,
    Medication,
    make_diagnosis,
)

MEDICATION_DIAGNOSES: tuple[tuple[str, str], ...] = (
    ("metformina", "Diabetes mellitus tipo 2"),
    ("metformin", "Diabetes mellitus tipo 2"),
    ("enalapril", "Hipertensión arterial"),
    ("atorvastatina", "Hipercolesterolemia"),
    ("atorvastatin", "Hipercolesterolemia"),
    ("salbutamol", "Asma bronquial"),
    ("budesonida", "Asma bronquial"),
    ("budesonide", "Asma bronquial"),
    ("warfarina", "Trastorno de coagulación"),
    ("warfarin", "Trastorno de coagulación"),
)

Named = TypeVar("Named", Diagnosis, Medication)


def infer_diagnoses_from_medications(document: CDADocument) -> None:
    """Append ``medication_inferred`` diagnoses implied by the medication list."""
    for medication in document["medications"]:
        med_lower = medication["name"].lower()
        for keyword, diagnosis in MEDICATION_DIAGNOSES:
            if keyword in med_lower and not has_diagnosis(document, diagnosis):
                document["diagnoses"].append(
                    make_diagnosis(diagnosis, code_system=DIAGNOSIS_MEDICATION_INFERRED)
                )


def sort_and_dedupe(items: Iterable[Named]) -> list[Named]:
    """Sort by name and drop adjacent case-insensitive repeats.

    The sort is stable and ordinal, so ``"Aspirin"`` sorts before
    ``"aspirin"`` and is the entry that survives.
    """
    result: list[Named] = []
    for item in sorted(items, key=lambda entry: entry["name"]):
        if result and result[-1]["name"].lower() == item["name"].lower():
            continue
        result.append(item)
    return result


def post_process_document(document: CDADocument) -> CDADocument:
    """Finalise ``document`` in place and return it."""
    patient = document["patient"]
    if patient["name"] is not None:
        patient["name"] = collapse_whitespace(patient["name"]) or None

    if not document["diagnoses"]:
        infer_diagnoses_from_medications(document)

    document["diagnoses"] = sort_and_dedupe(document["diagnoses"])
    document["medications"] = sort_and_dedupe(document["medications"])
    return document

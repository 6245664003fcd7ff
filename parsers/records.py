# Purpose: Define the record shapes produced by the CDA extraction engine.
# Date: 2026-10-19
# Related tests: tests/test_document.py, tests/test_statistics.py
# AI-assisted: Portions of this file were generated with AI assistance.

"""Typed record definitions shared by parsers and services."""

from __future__ import annotations

from typing import Optional, TypedDict

MEDICATION_STRUCTURED = "structured"
MEDICATION_TEXT_EXTRACTED = "text_extracted"

DIAGNOSIS_TEXT_EXTRACTED = "text_extracted"
DIAGNOSIS_TITLE_INFERRED = "title_inferred"
DIAGNOSIS_MEDICATION_INFERRED = "medication_inferred"


class Patient(TypedDict):
    id: Optional[str]
    name: Optional[str]
    gender: Optional[str]
    birth_date: Optional[str]
    age: Optional[int]


class Diagnosis(TypedDict):
    code: Optional[str]
    name: str
    code_system: Optional[str]


class Medication(TypedDict):
    name: str
    medication_type: str


class CDADocument(TypedDict):
    file_name: str
    patient: Patient
    diagnoses: list[Diagnosis]
    medications: list[Medication]
    document_date: Optional[str]
    author: Optional[str]


class NameCount(TypedDict):
    name: str
    count: int


class Statistics(TypedDict):
    total_documents: int
    total_patients: int
    average_age: float
    gender_distribution: dict[str, int]
    top_diagnoses: list[NameCount]
    top_medications: list[NameCount]
    processing_time_ms: int


def new_document(file_name: str) -> CDADocument:
    """Return an empty document ready to be filled during a parse pass."""
    return {
        "file_name": file_name,
        "patient": {
            "id": None,
            "name": None,
            "gender": None,
            "birth_date": None,
            "age": None,
        },
        "diagnoses": [],
        "medications": [],
        "document_date": None,
        "author": None,
    }


def make_diagnosis(
    name: str,
    *,
    code: Optional[str] = None,
    code_system: Optional[str] = None,
) -> Diagnosis:
    return {"code": code, "name": name, "code_system": code_system}


def make_medication(name: str, medication_type: str) -> Medication:
    return {"name": name, "medication_type": medication_type}

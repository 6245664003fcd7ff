# Purpose: Expose CDA parser entry points for convenient imports.
# Date: 2026-10-19
# Related tests: tests/test_document.py
# AI-assisted: Portions of this file were generated with AI assistance.

"""Parser package exports."""

from __future__ import annotations

from .document import parse_cda_document
from .errors import BatchCancelled, CDAParseError, XmlStructureError
from .heuristics import age_from_hl7_date, normalize_gender
from .post_process import post_process_document
from .records import CDADocument, Diagnosis, Medication, Patient, Statistics

__all__ = [
    "parse_cda_document",
    "post_process_document",
    "normalize_gender",
    "age_from_hl7_date",
    "CDAParseError",
    "XmlStructureError",
    "BatchCancelled",
    "CDADocument",
    "Diagnosis",
    "Medication",
    "Patient",
    "Statistics",
]

# Purpose: Heuristic mining of diagnoses and medications from CDA free text.
# Date: 2026-10-19
# Related tests: tests/test_heuristics.py
# AI-assisted: Portions of this file were generated with AI assistance.

"""Best-effort text mining and value normalisation for CDA documents.

All tables in this module are read-only and compiled once at import time.
Matching is plain pattern/keyword matching; none of it is terminology-backed
coding.
"""

from __future__ import annotations

import logging
import re

from .common import has_diagnosis, has_medication
from .records import (
    DIAGNOSIS_TEXT_EXTRACTED,
    DIAGNOSIS_TITLE_INFERRED,
    MEDICATION_TEXT_EXTRACTED,
    CDADocument,
    make_diagnosis,
    make_medication,
)

logger = logging.getLogger(__name__)

DEFAULT_REFERENCE_YEAR = 2024
MAX_AGE = 150

GENDER_MALE = "M"
GENDER_FEMALE = "F"
GENDER_UNKNOWN = "Unknown"

_YEAR_RE = re.compile(r"[+-]?[0-9]+")

_GENDER_CODES = {
    "M": GENDER_MALE,
    "MALE": GENDER_MALE,
    "F": GENDER_FEMALE,
    "FEMALE": GENDER_FEMALE,
}

MEDICATION_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b\w+(?:cillin|mycin|prazole|statin|tide|pine|zole|pril|sartan)\b", re.IGNORECASE),
    re.compile(r"\b\w+\s*(?:mg|tablet|capsule|injection)\b", re.IGNORECASE),
    re.compile(
        r"\baspirin\b|\bibuprofen\b|\bparacetamol\b|\bmetformin\b|\benalapril\b"
        r"|\batorvastatin\b|\bsalbutamol\b|\bbudesonida\b|\bwarfarin\b",
        re.IGNORECASE,
    ),
)

DIAGNOSIS_KEYWORDS: tuple[str, ...] = (
    "diabetes",
    "diabético",
    "hipertension",
    "hipertenso",
    "asma",
    "pneumonia",
    "infection",
    "fracture",
    "cancer",
    "depression",
    "anxiety",
    "arthritis",
    "hipercolesterolemia",
    "bronchitis",
    "gastritis",
    "dermatitis",
    "nephritis",
    "controlada",
    "crónico",
    "agudo",
    "estable",
    "compensado",
)

# Order matters: "control anticoagulación" also contains "anticoagulación".
TITLE_DIAGNOSES: tuple[tuple[str, str], ...] = (
    ("hipertenso", "Hipertensión"),
    ("diabético", "Diabetes"),
    ("hipercolesterolemia", "Hipercolesterolemia"),
    ("asma", "Asma"),
    ("múltiples condiciones", "Múltiples patologías"),
    ("anticoagulación", "Trastorno de coagulación"),
    ("control anticoagulación", "Anticoagulación"),
)

MEDICATION_NAMES: dict[str, str] = {
    "metformina": "Metformina",
    "metformin": "Metformina",
    "enalapril": "Enalapril",
    "atorvastatina": "Atorvastatina",
    "atorvastatin": "Atorvastatina",
    "salbutamol": "Salbutamol",
    "budesonida": "Budesonida",
    "budesonide": "Budesonida",
    "warfarina": "Warfarina",
    "warfarin": "Warfarina",
}


def normalize_gender(code: str) -> str:
    """Map an administrative gender code onto ``M``, ``F`` or ``Unknown``."""
    return _GENDER_CODES.get(code.upper(), GENDER_UNKNOWN)


def age_from_hl7_date(value: str, reference_year: int = DEFAULT_REFERENCE_YEAR) -> int | None:
    """Derive an age from an HL7 date relative to ``reference_year``.

    Only the first four characters are considered, so reduced-precision dates
    such as ``1980`` or ``198001`` work. Values with a non-numeric year, or
    yielding an age outside ``[0, 150]`` return ``None``.
    """
    year_text = value[:4]
    if not _YEAR_RE.fullmatch(year_text):
        return None
    age = reference_year - int(year_text)
    if 0 <= age <= MAX_AGE:
        return age
    return None


def normalize_medication_name(name: str) -> str:
    """Return the canonical spelling for well-known medications.

    Unknown names are returned trimmed but otherwise untouched.
    """
    trimmed = name.strip()
    return MEDICATION_NAMES.get(trimmed.lower(), trimmed)


def extract_diagnoses_from_title(document: CDADocument, text: str) -> None:
    """Append ``title_inferred`` diagnoses for known title phrases."""
    text_lower = text.lower()
    for keyword, diagnosis in TITLE_DIAGNOSES:
        if keyword in text_lower and not has_diagnosis(document, diagnosis):
            document["diagnoses"].append(
                make_diagnosis(diagnosis, code_system=DIAGNOSIS_TITLE_INFERRED)
            )


def extract_medications_from_text(document: CDADocument, text: str) -> None:
    """Append ``text_extracted`` medications matched by the drug patterns."""
    text_lower = text.lower()
    for pattern in MEDICATION_PATTERNS:
        for match in pattern.finditer(text_lower):
            med_name = match.group(0)
            if len(med_name) > 3 and not has_medication(document, med_name):
                document["medications"].append(
                    make_medication(med_name, MEDICATION_TEXT_EXTRACTED)
                )


def extract_keyword_diagnoses(document: CDADocument, text: str) -> None:
    """Append ``text_extracted`` diagnoses for every keyword found in ``text``."""
    text_lower = text.lower()
    for keyword in DIAGNOSIS_KEYWORDS:
        if keyword in text_lower and not has_diagnosis(document, keyword):
            document["diagnoses"].append(
                make_diagnosis(keyword, code_system=DIAGNOSIS_TEXT_EXTRACTED)
            )


def extract_from_text(document: CDADocument, text: str) -> None:
    """Mine a free-text block for diagnoses and medications.

    Title phrases are checked first, then the medication patterns, then the
    diagnosis keywords.
    """
    before = (len(document["diagnoses"]), len(document["medications"]))
    extract_diagnoses_from_title(document, text)
    extract_medications_from_text(document, text)
    extract_keyword_diagnoses(document, text)
    logger.debug(
        "Free text mining added %d diagnoses and %d medications.",
        len(document["diagnoses"]) - before[0],
        len(document["medications"]) - before[1],
    )

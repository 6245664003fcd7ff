# Purpose: Reduce a set of parsed CDA documents into corpus statistics.
# Date: 2026-10-19
# Related tests: tests/test_statistics.py
# AI-assisted: Portions of this file were generated with AI assistance.

"""Corpus statistics for parsed CDA documents."""

from __future__ import annotations

import time
from collections import Counter
from typing import Iterable

from parsers.heuristics import GENDER_UNKNOWN
from parsers.records import CDADocument, NameCount, Statistics

DEFAULT_TOP_N = 5


def rank_counts(counts: Counter[str], limit: int = DEFAULT_TOP_N) -> list[NameCount]:
    """Return the ``limit`` most frequent names, ties broken by name."""
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [{"name": name, "count": count} for name, count in ranked[:limit]]


def empty_statistics() -> Statistics:
    return {
        "total_documents": 0,
        "total_patients": 0,
        "average_age": 0.0,
        "gender_distribution": {},
        "top_diagnoses": [],
        "top_medications": [],
        "processing_time_ms": 0,
    }


def calculate_statistics(
    documents: Iterable[CDADocument],
    *,
    top_n: int = DEFAULT_TOP_N,
) -> Statistics:
    """Compute statistics in a single pass over ``documents``.

    Documents without a gender count towards ``Unknown``. The average age only
    considers patients with a known age and is ``0.0`` when there are none.
    ``processing_time_ms`` reports how long the reduction itself took.
    """
    started = time.perf_counter()
    genders: Counter[str] = Counter()
    diagnoses: Counter[str] = Counter()
    medications: Counter[str] = Counter()
    total_age = 0
    age_count = 0
    total_documents = 0

    for document in documents:
        total_documents += 1
        patient = document["patient"]
        genders[patient["gender"] or GENDER_UNKNOWN] += 1
        if patient["age"] is not None:
            total_age += patient["age"]
            age_count += 1
        diagnoses.update(diagnosis["name"] for diagnosis in document["diagnoses"])
        medications.update(medication["name"] for medication in document["medications"])

    stats = empty_statistics()
    stats["total_documents"] = total_documents
    # One patient per document; identities are not resolved across documents.
    stats["total_patients"] = total_documents
    stats["average_age"] = total_age / age_count if age_count else 0.0
    stats["gender_distribution"] = dict(genders)
    stats["top_diagnoses"] = rank_counts(diagnoses, top_n)
    stats["top_medications"] = rank_counts(medications, top_n)
    stats["processing_time_ms"] = int((time.perf_counter() - started) * 1000)
    return stats

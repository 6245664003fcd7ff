# Purpose: Shape statistics and documents into tables for the CLI and dashboard.
# Date: 2026-10-19
# Related tests: tests/test_reporting.py
# AI-assisted: Portions of this file were generated with AI assistance.

"""pandas views over parsed CDA documents and statistics."""

from __future__ import annotations

import json
from typing import Iterable

import pandas as pd

from parsers.heuristics import GENDER_FEMALE, GENDER_MALE
from parsers.records import CDADocument, Statistics

GENDER_LABELS = {
    GENDER_MALE: "Male",
    GENDER_FEMALE: "Female",
}

DOCUMENT_COLUMNS = [
    "file_name",
    "patient_id",
    "patient_name",
    "gender",
    "age",
    "document_date",
    "author",
    "diagnoses",
    "medications",
]


def gender_label(code: str) -> str:
    return GENDER_LABELS.get(code, "Not specified")


def gender_frame(stats: Statistics) -> pd.DataFrame:
    """Return gender counts with their share of all patients."""
    total = stats["total_patients"]
    rows = [
        (gender_label(code), count, round(count / total * 100, 1) if total else 0.0)
        for code, count in sorted(stats["gender_distribution"].items())
    ]
    return pd.DataFrame(rows, columns=["gender", "count", "percent"])


def statistics_frames(stats: Statistics) -> dict[str, pd.DataFrame]:
    """Return the statistics as named tables for display."""
    summary = pd.DataFrame(
        [
            ("Documents", stats["total_documents"]),
            ("Patients", stats["total_patients"]),
            ("Average age", round(stats["average_age"], 1)),
            ("Processing time (ms)", stats["processing_time_ms"]),
        ],
        columns=["metric", "value"],
    )
    return {
        "Summary": summary,
        "Gender distribution": gender_frame(stats),
        "Top diagnoses": pd.DataFrame(stats["top_diagnoses"], columns=["name", "count"]),
        "Top medications": pd.DataFrame(stats["top_medications"], columns=["name", "count"]),
    }


def documents_frame(documents: Iterable[CDADocument]) -> pd.DataFrame:
    """Flatten documents into one row each, joining diagnosis/medication names."""
    rows = []
    for document in documents:
        patient = document["patient"]
        rows.append(
            {
                "file_name": document["file_name"],
                "patient_id": patient["id"],
                "patient_name": patient["name"],
                "gender": patient["gender"],
                "age": patient["age"],
                "document_date": document["document_date"],
                "author": document["author"],
                "diagnoses": ", ".join(d["name"] for d in document["diagnoses"]),
                "medications": ", ".join(m["name"] for m in document["medications"]),
            }
        )
    return pd.DataFrame(rows, columns=DOCUMENT_COLUMNS)


def render_statistics(stats: Statistics, output_format: str = "table") -> str:
    """Render statistics as plain-text tables or JSON."""
    if output_format == "json":
        return json.dumps(stats, ensure_ascii=False, indent=2)
    blocks: list[str] = []
    for title, frame in statistics_frames(stats).items():
        body = frame.to_string(index=False) if not frame.empty else "(none)"
        blocks.append(f"{title}\n{body}")
    return "\n\n".join(blocks)

# Purpose: Exception types raised by the CDA extraction engine.
# Date: 2026-10-19
# Related tests: tests/test_tokenizer.py, tests/test_cda_parser.py
# AI-assisted: Portions of this file were generated with AI assistance.

"""Exception hierarchy for CDA parsing."""

from __future__ import annotations


class CDAParseError(Exception):
    """Base class for errors surfaced by the parsing engine."""


class XmlStructureError(CDAParseError):
    """Raised when a document's markup cannot be read.

    Args:
        file_name: Name of the document that failed.
        description: Underlying parser error description.
    """

    def __init__(self, file_name: str, description: str) -> None:
        self.file_name = file_name
        self.description = description
        super().__init__(f"Error parsing {file_name}: {description}")


class BatchCancelled(CDAParseError):
    """Raised when a batch parse is cancelled before completion."""

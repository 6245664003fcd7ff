# Purpose: Assemble a CDA document from tokenizer events and extraction rules.
# Date: 2026-10-19
# Related tests: tests/test_document.py
# AI-assisted: Portions of this file were generated with AI assistance.

"""Single-document extraction pipeline.

References
----------
- HL7 CDA R2 Standard (Clinical Document Architecture)
  https://www.hl7.org/implement/standards/product_brief.cfm?product_id=7
- HL7 Version 3 Standard: Data Types
  https://www.hl7.org/implement/standards/product_brief.cfm?product_id=185
"""

from __future__ import annotations

import logging
from typing import Sequence

from .attributes import apply_attribute
from .heuristics import DEFAULT_REFERENCE_YEAR
from .post_process import post_process_document
from .records import CDADocument, new_document
from .text_content import apply_text
from .tokenizer import Attribute, tokenize

logger = logging.getLogger(__name__)


class DocumentBuilder:
    """Tokenizer handler that fills one document during a parse pass."""

    def __init__(self, file_name: str, *, reference_year: int = DEFAULT_REFERENCE_YEAR) -> None:
        self.document = new_document(file_name)
        self.reference_year = reference_year

    def on_open(self, tag: str, attributes: Sequence[Attribute], path: Sequence[str]) -> None:
        for name, value in attributes:
            apply_attribute(
                self.document,
                tag,
                name,
                value,
                path,
                reference_year=self.reference_year,
            )

    def on_close(self, tag: str, text: str, path: Sequence[str]) -> None:
        apply_text(self.document, tag, text, path)


def parse_cda_document(
    file_name: str,
    xml: str | bytes,
    *,
    reference_year: int = DEFAULT_REFERENCE_YEAR,
) -> CDADocument:
    """Extract patient, diagnosis and medication facts from one CDA document.

    Args:
        file_name: Name recorded on the resulting document.
        xml: Raw CDA markup.
        reference_year: Year used to derive the patient's age.

    Returns:
        CDADocument: The post-processed document.

    Raises:
        XmlStructureError: If the markup is malformed.
    """
    builder = DocumentBuilder(file_name, reference_year=reference_year)
    tokenize(file_name, xml, builder)
    document = post_process_document(builder.document)
    logger.debug(
        "Parsed %s: %d diagnoses, %d medications.",
        file_name,
        len(document["diagnoses"]),
        len(document["medications"]),
    )
    return document

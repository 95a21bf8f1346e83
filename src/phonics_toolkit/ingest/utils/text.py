"""
Module: ingest.utils.text

Purpose:
    Text extraction utilities for layout-based word extraction.
    Extracts text fragments with their rendered font size from PDF pages.

Key Functions:
    - open_pdf(): Open PDF bytes, mapping read failures to ingestion errors
    - extract_text_fragments(): Get non-empty text spans with sizes for a page

Dependencies:
    - fitz (pymupdf): PDF text extraction

Used By:
    - ingest.pdf_words: Font-size clustering and token filtering
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

import fitz

from phonics_toolkit.core.errors import UnreadableInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TextFragment:
    """
    A run of text as laid out on a page.

    Attributes:
        text: The span's text (not stripped)
        size: Rendered font size in points
    """
    text: str
    size: float

    @property
    def size_class(self) -> int:
        """Font size rounded to the nearest point."""
        return int(round(self.size))


def open_pdf(data: bytes) -> fitz.Document:
    """
    Open PDF content held in memory.

    Raises:
        UnreadableInputError: If the bytes are empty, not a readable PDF,
            or a document without pages.
    """
    if not data:
        raise UnreadableInputError("File could not be read: it is empty.")
    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except (RuntimeError, ValueError) as e:
        raise UnreadableInputError(f"Failed to parse PDF file: {e}") from e

    if doc.page_count == 0:
        doc.close()
        raise UnreadableInputError("Failed to parse PDF file: it contains no pages.")
    return doc


def extract_text_fragments(page: fitz.Page) -> List[TextFragment]:
    """
    Extract non-empty text spans from a PDF page in content order.

    Args:
        page: PDF page to extract from

    Returns:
        List of TextFragment, one per span with visible text. Empty on
        extraction failure.

    Example:
        >>> fragments = extract_text_fragments(doc[0])
        >>> fragments[0]
        TextFragment(text='pim', size=28.0)
    """
    fragments: List[TextFragment] = []

    try:
        data = page.get_text("dict")
    except (RuntimeError, ValueError) as e:
        logger.warning(f"Failed to extract text from page {page.number + 1}: {e}")
        return fragments

    for block in data.get("blocks", []):
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                text = span.get("text", "")
                if not text.strip():
                    continue
                fragments.append(TextFragment(text=text, size=float(span.get("size", 0.0))))

    return fragments

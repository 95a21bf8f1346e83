"""Ingestion utilities."""

from .text import TextFragment, extract_text_fragments, open_pdf

__all__ = ["TextFragment", "extract_text_fragments", "open_pdf"]

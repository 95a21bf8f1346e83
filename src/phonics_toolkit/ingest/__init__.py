"""
Module: ingest

Purpose:
    Ingestion pipeline converting uploaded spreadsheets and PDFs into
    validated, bounded-size term set drafts.

Key Functions:
    - ingest_file(): Dispatch by extension
    - ingest_spreadsheet(): Column detection and row validation
    - extract_words_from_pdf(): Layout-based word extraction
    - find_column(): Header matching

Key Classes:
    - IngestConfig: Word-count bounds and column candidates
    - PdfConfig: Layout heuristics

Dependencies:
    - pandas (openpyxl, xlrd engines): Spreadsheet parsing
    - fitz (PyMuPDF): PDF text extraction
"""

from .config import IngestConfig, PdfConfig
from .columns import find_column
from .spreadsheet import ingest_spreadsheet
from .pdf_words import extract_words_from_pdf
from .pipeline import ingest_file, ingest_term_set

__all__ = [
    "ingest_file",
    "ingest_term_set",
    "ingest_spreadsheet",
    "extract_words_from_pdf",
    "find_column",
    "IngestConfig",
    "PdfConfig",
]

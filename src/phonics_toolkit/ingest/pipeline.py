"""
Module: ingest.pipeline

Purpose:
    Entry point for uploads. Routes a file to the spreadsheet ingestor or
    the PDF extractor by extension and returns a term set draft.

Key Functions:
    - ingest_file(): Ingest a path or in-memory upload
    - ingest_term_set(): Ingest and promote to a stored TermSet

Used By:
    - phonics_toolkit.cli: ``ingest`` command
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from phonics_toolkit.common.path_utils import PDF_EXTENSIONS, SPREADSHEET_EXTENSIONS, file_extension
from phonics_toolkit.core.errors import UnreadableInputError, UnsupportedFileError
from phonics_toolkit.core.models.words import TermSet, TermSetDraft

from .config import IngestConfig, PdfConfig
from .pdf_words import extract_words_from_pdf
from .spreadsheet import ingest_spreadsheet

logger = logging.getLogger(__name__)


def ingest_file(
    source: Path | bytes,
    filename: Optional[str] = None,
    *,
    config: Optional[IngestConfig] = None,
    pdf_config: Optional[PdfConfig] = None,
) -> TermSetDraft:
    """
    Ingest an uploaded spreadsheet or PDF.

    Args:
        source: Path to the file, or its raw content.
        filename: Original filename. Required for raw content; defaults to
            the path's name otherwise.
        config: Optional ingestion configuration.
        pdf_config: Optional PDF layout heuristics.

    Returns:
        TermSetDraft named after the file.

    Raises:
        UnsupportedFileError: If the extension isn't xlsx, xls, csv or pdf.
        UnreadableInputError: If the file can't be read.
        IngestionError: Any other ingestion failure (see subclasses).
    """
    if isinstance(source, Path):
        filename = filename or source.name
        try:
            data = source.read_bytes()
        except OSError as e:
            raise UnreadableInputError(f"Error reading the file: {e}") from e
    else:
        data = source
        if not filename:
            raise ValueError("filename is required when ingesting raw content")

    extension = file_extension(filename)
    logger.info(f"Ingesting '{filename}' ({len(data)} bytes)")

    if extension in PDF_EXTENSIONS:
        return extract_words_from_pdf(data, filename, config=config, pdf_config=pdf_config)
    if extension in SPREADSHEET_EXTENSIONS:
        return ingest_spreadsheet(data, filename, config=config)

    raise UnsupportedFileError(
        "Unsupported file type. Please upload an Excel (.xlsx, .xls), "
        "CSV (.csv) or PDF (.pdf) file."
    )


def ingest_term_set(
    source: Path | bytes,
    filename: Optional[str] = None,
    *,
    name: Optional[str] = None,
    config: Optional[IngestConfig] = None,
    pdf_config: Optional[PdfConfig] = None,
) -> TermSet:
    """Ingest a file and promote the draft to a TermSet, optionally renamed."""
    draft = ingest_file(source, filename, config=config, pdf_config=pdf_config)
    return TermSet.create(draft, name=name)

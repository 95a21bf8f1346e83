"""
Module: ingest.spreadsheet

Purpose:
    Turn an uploaded spreadsheet (xlsx, xls or csv) into a term set
    draft. The first worksheet is read with its first row as headers,
    the word and grapheme type columns are located heuristically, and
    rows are validated and filtered into an ordered word list.

Key Functions:
    - ingest_spreadsheet(): Main entry point

Dependencies:
    - pandas: Workbook and CSV parsing (openpyxl / xlrd engines)
    - ingest.columns: Header matching

Used By:
    - ingest.pipeline: Upload dispatch
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

from phonics_toolkit.common.path_utils import SPREADSHEET_EXTENSIONS, derive_term_name, file_extension
from phonics_toolkit.core.errors import (
    ColumnNotFoundError,
    InvalidStructureError,
    UnreadableInputError,
    WordCountError,
)
from phonics_toolkit.core.models.words import TermSetDraft, Word

from .columns import find_column
from .config import IngestConfig

logger = logging.getLogger(__name__)


def ingest_spreadsheet(
    data: bytes,
    filename: str | Path,
    *,
    config: Optional[IngestConfig] = None,
) -> TermSetDraft:
    """
    Parse spreadsheet content into a term set draft.

    Steps:
    1. Read the workbook (or CSV) and take the first worksheet
    2. Locate the item and grapheme type columns
    3. Keep rows whose trimmed item is non-empty and not too long
    4. Check the valid row count against the accepted range
    5. Name the set after the file

    Args:
        data: Raw file content.
        filename: Original filename, used for the format and the set name.
        config: Optional ingestion configuration.

    Returns:
        TermSetDraft with words in sheet row order.

    Raises:
        UnreadableInputError: If the content can't be parsed at all.
        InvalidStructureError: If there are no worksheets, no data rows,
            or no valid rows.
        ColumnNotFoundError: If no item column is found.
        WordCountError: If the valid row count is out of range.

    Example:
        >>> draft = ingest_spreadsheet(Path("Term 1.xlsx").read_bytes(), "Term 1.xlsx")
        >>> draft.name, len(draft.words)
        ('Term 1', 40)
    """
    config = config or IngestConfig()
    frame = _read_first_sheet(data, filename)

    if frame.empty:
        raise InvalidStructureError("The spreadsheet has no data rows.")

    headers = [str(c) for c in frame.columns]
    frame.columns = headers
    item_column = find_column(headers, config.item_columns)
    if item_column is None:
        raise ColumnNotFoundError(
            "Could not find a word column (expected one of: "
            f"{', '.join(config.item_columns)}). "
            f"Available columns: {', '.join(headers)}",
            headers=headers,
        )
    grapheme_column = find_column(
        [h for h in headers if h != item_column], config.grapheme_columns
    )
    logger.info(
        f"Using column '{item_column}' for words and "
        f"'{grapheme_column or '(none)'}' for grapheme types"
    )

    words: List[Word] = []
    for position, (_, row) in enumerate(frame.iterrows(), start=2):
        item = _cell_text(row[item_column])
        if not item:
            logger.debug(f"Row {position}: empty item, skipped")
            continue
        if len(item) > config.max_item_length:
            logger.debug(f"Row {position}: item longer than {config.max_item_length} chars, skipped")
            continue
        grapheme = _cell_text(row[grapheme_column]) if grapheme_column else ""
        words.append(Word(item=item, grapheme_type=grapheme or config.spreadsheet_marker))

    if not words:
        raise InvalidStructureError(
            f"No valid words found in column '{item_column}'."
        )

    count = len(words)
    if not (config.min_words <= count <= config.max_words):
        sample = [w.item for w in words[: config.error_sample_size]]
        raise WordCountError(
            f"File must contain between {config.min_words} and {config.max_words} "
            f"words, but found {count}. First words: {', '.join(sample)}",
            count=count,
            sample=sample,
        )

    name = derive_term_name(filename, SPREADSHEET_EXTENSIONS)
    logger.info(f"Parsed {count} words from '{name}'")
    return TermSetDraft(name=name, words=tuple(words))


def _read_first_sheet(data: bytes, filename: str | Path) -> pd.DataFrame:
    """Read the first worksheet (or the CSV table) as string cells."""
    if file_extension(filename) == ".csv":
        try:
            return pd.read_csv(io.BytesIO(data), dtype=str, keep_default_na=False)
        except pd.errors.EmptyDataError as e:
            raise InvalidStructureError("The spreadsheet has no data rows.") from e
        except (ValueError, UnicodeDecodeError, pd.errors.ParserError) as e:
            raise UnreadableInputError(f"File could not be read: {e}") from e

    try:
        workbook = pd.ExcelFile(io.BytesIO(data))
    except Exception as e:
        # Engines raise a mix of zipfile, xlrd and ValueError types
        raise UnreadableInputError(f"File could not be read: {e}") from e

    with workbook:
        if not workbook.sheet_names:
            raise InvalidStructureError("The workbook contains no worksheets.")
        sheet = workbook.sheet_names[0]
        logger.debug(f"Reading worksheet '{sheet}'")
        return workbook.parse(sheet_name=sheet, dtype=str, keep_default_na=False)


def _cell_text(value: object) -> str:
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    return str(value).strip()

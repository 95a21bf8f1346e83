"""Path and filename utilities.

Provides shared functions for deriving term names from uploaded
filenames and building export filenames.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

SPREADSHEET_EXTENSIONS = (".xlsx", ".xls", ".csv")
PDF_EXTENSIONS = (".pdf",)


def derive_term_name(filename: str | Path, extensions: Iterable[str]) -> str:
    """Strip a trailing known extension from an uploaded filename.

    Matching is case-insensitive and only one extension is removed.
    Unknown extensions are left in place.

    Args:
        filename: Uploaded filename or Path.
        extensions: Extensions to strip, including the leading dot.

    Returns:
        Term name derived from the filename.

    Examples:
        >>> derive_term_name("Term 1 2025.XLSX", SPREADSHEET_EXTENSIONS)
        'Term 1 2025'
        >>> derive_term_name("check.pdf.pdf", PDF_EXTENSIONS)
        'check.pdf'
        >>> derive_term_name("notes.txt", PDF_EXTENSIONS)
        'notes.txt'
    """
    if isinstance(filename, Path):
        filename = filename.name

    alternatives = "|".join(re.escape(ext.lstrip(".")) for ext in extensions)
    if not alternatives:
        return filename
    return re.sub(rf"\.(?:{alternatives})$", "", filename, flags=re.IGNORECASE)


def file_extension(filename: str | Path) -> str:
    """Return the lowercased final extension of a filename (with dot)."""
    return Path(str(filename)).suffix.lower()


def export_filename(student_name: str, iso_date: str) -> str:
    """Build the download filename for an exported marking sheet.

    Each whitespace character in the student name becomes an underscore and
    only the date portion of an ISO timestamp is used, whether the time is
    separated by "T" or a space.

    Examples:
        >>> export_filename("Aroha Ngata", "2025-03-14T09:30:00+13:00")
        'Phonics-Check-Marking-Sheet-Aroha_Ngata-2025-03-14.xlsx'
    """
    name = re.sub(r"\s", "_", student_name.strip())
    date_part = re.split(r"[T\s]", iso_date.strip(), maxsplit=1)[0]
    return f"Phonics-Check-Marking-Sheet-{name}-{date_part}.xlsx"

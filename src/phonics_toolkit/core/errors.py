"""
Exception types for ingestion and export.

Ingestion errors are descriptive: their message is meant to be shown to
the person who uploaded the file so they can fix it, and structured
attributes carry the context (available headers, counts, sample words).

Export errors are deliberately generic. The detailed cause is logged and
chained via ``__cause__``; the user only ever sees ``ExportError``.
"""

from __future__ import annotations

from typing import Sequence


class IngestionError(Exception):
    """Raised when an uploaded file cannot be turned into a term set."""


class UnreadableInputError(IngestionError):
    """The file content could not be read at all."""


class UnsupportedFileError(IngestionError):
    """The file extension is not one of the accepted upload formats."""


class InvalidStructureError(IngestionError):
    """The file was read but has no usable structure (no sheets, no rows, no words)."""


class ColumnNotFoundError(IngestionError):
    """A required spreadsheet column could not be located."""

    def __init__(self, message: str, headers: Sequence[str] = ()):
        super().__init__(message)
        self.headers = list(headers)


class WordCountError(IngestionError):
    """The number of valid words falls outside the accepted range."""

    def __init__(self, message: str, count: int, sample: Sequence[str] = ()):
        super().__init__(message)
        self.count = count
        self.sample = list(sample)


class TemplateError(Exception):
    """Internal failure while loading or patching the marking sheet template."""


class TemplateNotFoundError(TemplateError):
    """None of the candidate template locations could be read."""

    def __init__(self, message: str, attempts: Sequence[tuple[str, str]] = ()):
        super().__init__(message)
        self.attempts = list(attempts)


class TemplateStructureError(TemplateError):
    """The template archive is missing an entry or holds unparseable XML."""


class ExportError(Exception):
    """The single user-facing export failure."""

    USER_MESSAGE = "Could not export the marking sheet. Please try again."

    def __init__(self, message: str = USER_MESSAGE):
        super().__init__(message)

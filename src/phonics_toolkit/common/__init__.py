"""Common utilities shared across the toolkit."""

from __future__ import annotations

from .graphemes import (
    NOT_APPLICABLE,
    NOT_APPLICABLE_PDF,
    NOT_APPLICABLE_SPREADSHEET,
    display_grapheme_type,
    infer_grapheme_type,
    is_not_applicable,
)
from .path_utils import derive_term_name, export_filename

__all__ = [
    # graphemes
    "NOT_APPLICABLE",
    "NOT_APPLICABLE_PDF",
    "NOT_APPLICABLE_SPREADSHEET",
    "display_grapheme_type",
    "infer_grapheme_type",
    "is_not_applicable",
    # paths
    "derive_term_name",
    "export_filename",
]

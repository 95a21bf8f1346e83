"""Centralized threshold and magic number configuration.

This module contains the word-count bounds, token filters and layout
ratios used by ingestion. Having these in one place makes tuning easier
when a new revision of the check materials shifts the layout.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class WordCountThresholds:
    """Bounds on the size of an accepted term set."""

    min_words: int = 20  # Shortest supported check (20-week)
    max_words: int = 40  # Full check (40-week)
    error_sample_size: int = 5  # Words quoted back in count errors


@dataclass
class SpreadsheetThresholds:
    """Thresholds for spreadsheet row validation."""

    max_item_length: int = 50  # Longer cells are notes, not words


@dataclass
class PdfLayoutThresholds:
    """Thresholds for layout-based PDF word extraction."""

    # Page filtering
    min_page_text_chars: int = 50  # Shorter pages are covers or blank
    header_phrase_max_repeats: int = 1  # More repeats marks an instruction page
    header_token_ratio: float = 0.8  # Header phrases covering more of the page

    # Font-size clustering
    size_class_count: int = 2  # Heading size + body size

    # Token shape
    min_token_length: int = 2
    max_token_length: int = 20

    # Practice word trimming
    practice_window: int = 4  # Leading practice words printed before the scored set
    overrun_threshold: int = 44  # practice_window + max_words


# Global instances for easy import
WORD_COUNT_THRESHOLDS = WordCountThresholds()
SPREADSHEET_THRESHOLDS = SpreadsheetThresholds()
PDF_LAYOUT_THRESHOLDS = PdfLayoutThresholds()

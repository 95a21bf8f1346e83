"""
Module: ingest.config

Purpose:
    Configuration dataclasses for ingestion. Provides immutable settings
    for word-count bounds, spreadsheet column detection and PDF layout
    heuristics.

Key Classes:
    - IngestConfig: Settings shared by every ingestion path
    - PdfConfig: Settings for layout-based PDF word extraction

Dependencies:
    - dataclasses: For frozen dataclass support
    - phonics_toolkit.common.thresholds: Default values

Used By:
    - ingest.spreadsheet: Column candidates and row validation
    - ingest.pdf_words: Page filtering and token shape
"""

from dataclasses import dataclass, field

from phonics_toolkit.common.graphemes import NOT_APPLICABLE_PDF, NOT_APPLICABLE_SPREADSHEET
from phonics_toolkit.common.thresholds import (
    PDF_LAYOUT_THRESHOLDS,
    SPREADSHEET_THRESHOLDS,
    WORD_COUNT_THRESHOLDS,
)

ITEM_COLUMN_CANDIDATES = ("item", "word", "text", "content", "value")
GRAPHEME_COLUMN_CANDIDATES = ("grapheme", "type", "category", "group", "class")

HEADER_PHRASES = ("published by", "practice sheet", "instructions", "teacher guide")

# Ultra-common two-letter words printed as practice items before the scored set
PRACTICE_WORDS = frozenset({
    "it", "on", "in", "at", "up", "if", "is", "as", "by", "or", "so",
    "no", "go", "do", "to", "me", "my", "he", "she", "we", "be",
})

# Short function words and template/instruction vocabulary
EXCLUDED_WORDS = frozenset({
    "the", "and", "for", "with", "you", "your", "this", "that", "are", "was",
    "from", "not", "all", "can", "will", "each", "has", "have", "page",
    "practice", "sheet", "sheets", "student", "students", "materials",
    "teacher", "teachers", "guide", "instructions", "published", "phonics",
    "check", "word", "words", "section", "score", "name", "date", "school",
    "marking", "version", "copyright", "ministry", "education", "crown",
    "read", "reading", "example", "examples", "total", "term", "week",
})


@dataclass(frozen=True)
class IngestConfig:
    """
    Configuration shared by spreadsheet and PDF ingestion.

    Attributes:
        min_words: Smallest accepted term set (default 20)
        max_words: Largest accepted term set (default 40)
        max_item_length: Spreadsheet cells longer than this are skipped (default 50)
        item_columns: Candidate names for the word column, in priority order
        grapheme_columns: Candidate names for the grapheme type column
        spreadsheet_marker: Grapheme type used when no grapheme column exists
        error_sample_size: Number of parsed words quoted in count errors
    """
    min_words: int = WORD_COUNT_THRESHOLDS.min_words
    max_words: int = WORD_COUNT_THRESHOLDS.max_words
    max_item_length: int = SPREADSHEET_THRESHOLDS.max_item_length
    item_columns: tuple[str, ...] = ITEM_COLUMN_CANDIDATES
    grapheme_columns: tuple[str, ...] = GRAPHEME_COLUMN_CANDIDATES
    spreadsheet_marker: str = NOT_APPLICABLE_SPREADSHEET
    error_sample_size: int = WORD_COUNT_THRESHOLDS.error_sample_size


@dataclass(frozen=True)
class PdfConfig:
    """
    Configuration for layout-based PDF word extraction.

    These values are tuned to one document family; they are heuristics,
    not general PDF understanding.

    Attributes:
        header_phrases: Lowercase phrases that identify instruction pages
        min_page_text_chars: Pages with less concatenated text are skipped
        header_phrase_max_repeats: A phrase seen more often skips the page
        header_token_ratio: Skip pages whose tokens are mostly header phrases
        size_class_count: Most frequent rounded heights kept per page
        min_token_length: Shortest accepted token
        max_token_length: Longest accepted token
        practice_window: Leading positions where practice words are suppressed
        overrun_threshold: Candidate count above which leading words are dropped
        practice_words: Two-letter words suppressed inside the practice window
        excluded_words: Vocabulary never accepted as a word
        marker: Grapheme type given to every extracted word
    """
    header_phrases: tuple[str, ...] = HEADER_PHRASES
    min_page_text_chars: int = PDF_LAYOUT_THRESHOLDS.min_page_text_chars
    header_phrase_max_repeats: int = PDF_LAYOUT_THRESHOLDS.header_phrase_max_repeats
    header_token_ratio: float = PDF_LAYOUT_THRESHOLDS.header_token_ratio
    size_class_count: int = PDF_LAYOUT_THRESHOLDS.size_class_count
    min_token_length: int = PDF_LAYOUT_THRESHOLDS.min_token_length
    max_token_length: int = PDF_LAYOUT_THRESHOLDS.max_token_length
    practice_window: int = PDF_LAYOUT_THRESHOLDS.practice_window
    overrun_threshold: int = PDF_LAYOUT_THRESHOLDS.overrun_threshold
    practice_words: frozenset[str] = field(default_factory=lambda: PRACTICE_WORDS)
    excluded_words: frozenset[str] = field(default_factory=lambda: EXCLUDED_WORDS)
    marker: str = NOT_APPLICABLE_PDF

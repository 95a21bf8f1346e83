"""
Module: ingest.pdf_words

Purpose:
    Extract the scored word list from a phonics check PDF using text
    layout alone. PDF text carries no semantic tagging, so words are told
    apart from headings and instructions with page-level heuristics
    (density of instruction phrases) and type-level heuristics (the most
    common font sizes on each page), tuned to one document family.

Key Functions:
    - extract_words_from_pdf(): Main entry point
    - page_skip_reason(): Front matter / instruction page detection
    - body_size_classes(): Font-size clustering for one page
    - trim_practice_words(): Positional practice-word trimming

Key Classes:
    - WordAccumulator: Cross-page dedupe and practice suppression state

Dependencies:
    - fitz (PyMuPDF): via ingest.utils.text

Used By:
    - ingest.pipeline: Upload dispatch
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Set

from phonics_toolkit.common.path_utils import PDF_EXTENSIONS, derive_term_name
from phonics_toolkit.core.errors import InvalidStructureError, WordCountError
from phonics_toolkit.core.models.words import TermSetDraft, Word

from .config import IngestConfig, PdfConfig
from .utils.text import TextFragment, extract_text_fragments, open_pdf

logger = logging.getLogger(__name__)

_ALPHA_RE = re.compile(r"^[A-Za-z]+$")


@dataclass
class WordAccumulator:
    """
    Words accepted so far, across all pages, in document order.

    Pages must be fed in order: deduplication and practice-word
    suppression both depend on what earlier pages contributed.

    Attributes:
        config: PDF heuristics in use
        words: Accepted words in order
        seen: Lowercased accepted words
        suppressed: Practice words dropped inside the practice window
    """
    config: PdfConfig
    words: List[str] = field(default_factory=list)
    seen: Set[str] = field(default_factory=set)
    suppressed: List[str] = field(default_factory=list)

    def offer(self, token: str) -> bool:
        """Accept a candidate token unless it's a repeat or a leading practice word."""
        key = token.lower()
        if key in self.seen:
            return False
        if key in self.config.practice_words and len(self.words) < self.config.practice_window:
            logger.debug(f"Suppressed practice word '{token}' at position {len(self.words) + 1}")
            self.suppressed.append(token)
            return False
        self.seen.add(key)
        self.words.append(token)
        return True


def extract_words_from_pdf(
    data: bytes,
    filename: str | Path,
    *,
    config: Optional[IngestConfig] = None,
    pdf_config: Optional[PdfConfig] = None,
) -> TermSetDraft:
    """
    Extract a term set draft from phonics check PDF content.

    Pipeline:
    1. For each page in order:
       a. Collect text fragments with font sizes
       b. Skip front matter and instruction pages
       c. Keep fragments in the page's most common size classes
       d. Offer shape-valid, non-excluded tokens to the accumulator
    2. Trim leading practice words by position
    3. Check the remaining count against the minimum

    Args:
        data: Raw PDF content.
        filename: Original filename, used for the set name.
        config: Optional ingestion configuration (word-count bounds).
        pdf_config: Optional layout heuristics.

    Returns:
        TermSetDraft whose words all carry the PDF N/A grapheme marker.

    Raises:
        UnreadableInputError: If the content isn't a readable PDF.
        InvalidStructureError: If no candidate words are found.
        WordCountError: If fewer than the minimum words survive trimming.
    """
    config = config or IngestConfig()
    pdf_config = pdf_config or PdfConfig()
    accumulator = WordAccumulator(config=pdf_config)

    with open_pdf(data) as doc:
        for page in doc:
            fragments = extract_text_fragments(page)
            added = scan_page(fragments, accumulator, pdf_config, page_number=page.number + 1)
            logger.debug(f"Page {page.number + 1}: {added} words accepted")

    candidates = accumulator.words
    if not candidates:
        raise InvalidStructureError(
            "Could not find any words in the PDF. Please ensure it is a valid "
            "phonics check document in the expected format."
        )

    words = trim_practice_words(
        candidates,
        max_words=config.max_words,
        practice_window=pdf_config.practice_window,
        overrun_threshold=pdf_config.overrun_threshold,
    )
    logger.info(f"Found {len(candidates)} candidate words, kept {len(words)}")

    if len(words) < config.min_words:
        sample = words[: config.error_sample_size]
        raise WordCountError(
            f"PDF must contain at least {config.min_words} words, but found "
            f"{len(words)}. The PDF may be in an unrecognized format. "
            f"First words: {', '.join(sample)}",
            count=len(words),
            sample=sample,
        )

    name = derive_term_name(filename, PDF_EXTENSIONS)
    return TermSetDraft(
        name=name,
        words=tuple(Word(item=w, grapheme_type=pdf_config.marker) for w in words),
    )


def scan_page(
    fragments: Sequence[TextFragment],
    accumulator: WordAccumulator,
    config: PdfConfig,
    *,
    page_number: int = 0,
) -> int:
    """
    Offer one page's candidate tokens to the accumulator.

    Args:
        fragments: The page's text fragments in content order.
        accumulator: Cross-page state, updated in place.
        config: PDF heuristics.
        page_number: 1-based page number for log messages.

    Returns:
        Number of words the accumulator accepted from this page.
    """
    fragments = [f for f in fragments if f.text.strip()]
    if not fragments:
        return 0

    page_text = " ".join(f.text for f in fragments).lower()
    reason = page_skip_reason(page_text, config)
    if reason:
        logger.info(f"Skipping page {page_number}: {reason}")
        return 0

    sizes = body_size_classes(fragments, config.size_class_count)
    before = len(accumulator.words)
    page_seen: Set[str] = set()

    for fragment in fragments:
        if fragment.size_class not in sizes:
            continue
        for token in fragment.text.split():
            key = token.lower()
            if not (config.min_token_length <= len(token) <= config.max_token_length):
                continue
            if not _ALPHA_RE.match(token):
                continue
            if key in page_seen or key in config.excluded_words:
                continue
            page_seen.add(key)
            accumulator.offer(token)

    return len(accumulator.words) - before


def page_skip_reason(page_text: str, config: PdfConfig) -> Optional[str]:
    """
    Decide whether a page is front matter or instructions.

    Args:
        page_text: Lowercased concatenated page text.
        config: PDF heuristics.

    Returns:
        Human-readable reason to skip the page, or None to keep it.

    Example:
        >>> page_skip_reason("practice sheet ... practice sheet ...", PdfConfig())
        "header phrase 'practice sheet' repeated 2 times"
    """
    counts = {phrase: page_text.count(phrase) for phrase in config.header_phrases}
    for phrase, count in counts.items():
        if count > config.header_phrase_max_repeats:
            return f"header phrase '{phrase}' repeated {count} times"

    if len(page_text) < config.min_page_text_chars:
        return f"only {len(page_text)} characters of text"

    tokens = page_text.split()
    header_tokens = sum(count * len(phrase.split()) for phrase, count in counts.items())
    if tokens and header_tokens / len(tokens) > config.header_token_ratio:
        return f"{header_tokens} of {len(tokens)} tokens are header phrases"

    return None


def body_size_classes(fragments: Sequence[TextFragment], count: int) -> Set[int]:
    """
    Find the most frequent rounded font sizes on a page.

    Keeping two classes captures both the heading size and the body size,
    since practice and scored words may print at different sizes across
    documents. Ties keep the size seen first.
    """
    tally = Counter(f.size_class for f in fragments)
    return {size for size, _ in tally.most_common(count)}


def trim_practice_words(
    candidates: Sequence[str],
    *,
    max_words: int,
    practice_window: int,
    overrun_threshold: int,
) -> List[str]:
    """
    Separate the scored words from leading practice words by position.

    - More than ``overrun_threshold`` candidates: drop the first
      ``practice_window`` and keep the next ``max_words``.
    - At least ``max_words``: keep the last ``max_words``.
    - Otherwise keep everything.

    Example:
        >>> trim_practice_words([f"w{i}" for i in range(46)], max_words=40,
        ...                     practice_window=4, overrun_threshold=44)[0]
        'w4'
    """
    total = len(candidates)
    if total > overrun_threshold:
        words = list(candidates[practice_window:practice_window + max_words])
    elif total >= max_words:
        words = list(candidates[-max_words:])
    else:
        words = list(candidates)
    return words[:max_words]

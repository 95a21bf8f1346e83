"""
Module: ingest.columns

Purpose:
    Locate the spreadsheet column that best matches a list of candidate
    names. Header rows in uploaded files vary ("Item", "Word list",
    "Grapheme Type", "Type"), so matching falls back from exact to
    substring to symmetric fuzzy matching.

Key Functions:
    - find_column(): Best-matching header for a candidate list

Used By:
    - ingest.spreadsheet: Item and grapheme type columns
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

logger = logging.getLogger(__name__)

_Rule = Callable[[str, str], bool]


def _exact(header: str, candidate: str) -> bool:
    return header == candidate


def _contains(header: str, candidate: str) -> bool:
    return candidate in header


def _either_contains(header: str, candidate: str) -> bool:
    return header in candidate or candidate in header


_RULES: tuple[tuple[str, _Rule], ...] = (
    ("exact", _exact),
    ("substring", _contains),
    ("fuzzy", _either_contains),
)


def find_column(headers: Sequence[str], candidates: Sequence[str]) -> Optional[str]:
    """
    Find the header that best matches any of the candidate names.

    Rules are tried in priority order and the first hit wins:

    1. Case-insensitive exact match.
    2. Header contains a candidate name.
    3. Header contains a candidate, or a candidate contains the header
       (covers abbreviations in either direction).

    Within a rule, candidates are tried in the caller's order, so an
    earlier candidate matching any header beats a later candidate.

    Args:
        headers: Column headers as they appear in the sheet.
        candidates: Candidate names in priority order.

    Returns:
        The matching header exactly as given, or None.

    Example:
        >>> find_column(["No.", "Word List", "Grapheme Type"], ["item", "word"])
        'Word List'
    """
    lowered = [(h, str(h).strip().lower()) for h in headers]
    names = [c.strip().lower() for c in candidates if c.strip()]

    for rule_name, rule in _RULES:
        for candidate in names:
            for original, header in lowered:
                if header and rule(header, candidate):
                    logger.debug(f"Column '{original}' matched '{candidate}' ({rule_name})")
                    return original
    return None

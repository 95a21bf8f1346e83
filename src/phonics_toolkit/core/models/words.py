"""
Module: words

Purpose:
    Provides the Word and TermSet dataclasses. A term set is the named,
    ordered list of words for one period's phonics check; word order is
    the assessment order.

Key Classes:
    - Word: A single assessment token with its grapheme type
    - TermSetDraft: Ingestion output (name + words, no identity yet)
    - TermSet: Stored, identified term set

Dependencies:
    - dataclasses (std)
    - datetime (std)
    - phonics_toolkit.common.thresholds: Word-count bounds

Used By:
    - phonics_toolkit.ingest: Produces TermSetDraft
    - phonics_toolkit.core.models.results: Outcomes reference Word
    - phonics_toolkit.core.utils.serialization
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from phonics_toolkit.common.graphemes import NOT_APPLICABLE
from phonics_toolkit.common.thresholds import WORD_COUNT_THRESHOLDS


@dataclass(frozen=True, slots=True)
class Word:
    """
    A single assessment word (immutable).

    Attributes:
        item: The literal token, already trimmed.
        grapheme_type: Category label (e.g. "CVC") or an N/A marker.

    Invariants:
        - item is non-empty and has no surrounding whitespace

    Example:
        >>> Word("pit", "CVC").item
        'pit'
    """

    item: str
    grapheme_type: str = NOT_APPLICABLE

    def __post_init__(self) -> None:
        if not self.item or self.item != self.item.strip():
            raise ValueError(f"Word item must be non-empty and trimmed: {self.item!r}")
        if not self.grapheme_type.strip():
            raise ValueError("Word grapheme_type must not be blank")

    def to_dict(self) -> dict[str, Any]:
        return {"item": self.item, "grapheme_type": self.grapheme_type}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Word:
        return cls(
            item=str(data["item"]).strip(),
            grapheme_type=str(data.get("grapheme_type") or NOT_APPLICABLE),
        )


@dataclass(frozen=True)
class TermSetDraft:
    """
    Result of a successful ingestion: a name and the ordered words.

    The draft has no id or timestamp until it is promoted with
    ``TermSet.create``.
    """

    name: str
    words: tuple[Word, ...]

    @property
    def items(self) -> list[str]:
        """The word texts in order."""
        return [w.item for w in self.words]


@dataclass(frozen=True)
class TermSet:
    """
    A named, ordered, reusable list of assessment words (immutable).

    Attributes:
        id: Identifier like "set_1736900000000"
        name: Display name, usually derived from the uploaded filename
        words: Words in assessment order
        created_at: ISO-8601 creation timestamp (UTC)

    Invariants:
        - min_words <= len(words) <= max_words
    """

    id: str
    name: str
    words: tuple[Word, ...]
    created_at: str

    def __post_init__(self) -> None:
        count = len(self.words)
        low, high = WORD_COUNT_THRESHOLDS.min_words, WORD_COUNT_THRESHOLDS.max_words
        if not (low <= count <= high):
            raise ValueError(f"Term set must contain {low}-{high} words, got {count}")

    @classmethod
    def create(cls, draft: TermSetDraft, name: Optional[str] = None) -> TermSet:
        """
        Promote an ingestion draft to a stored term set.

        Args:
            draft: Ingestion output.
            name: Optional display name; overrides the draft's
                filename-derived name when non-blank.

        Returns:
            New TermSet with a time-based id and current UTC timestamp.
        """
        chosen = (name or "").strip() or draft.name
        return cls(
            id=f"set_{int(time.time() * 1000)}",
            name=chosen,
            words=tuple(draft.words),
            created_at=datetime.now(timezone.utc).isoformat(),
        )

    def __len__(self) -> int:
        return len(self.words)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "words": [w.to_dict() for w in self.words],
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TermSet:
        return cls(
            id=data["id"],
            name=data["name"],
            words=_words_from_payload(data.get("words", [])),
            created_at=data.get("created_at", ""),
        )


def _words_from_payload(payload: Sequence[dict[str, Any]]) -> tuple[Word, ...]:
    return tuple(Word.from_dict(entry) for entry in payload)

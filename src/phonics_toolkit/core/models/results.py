"""
Module: results

Purpose:
    Provides the WordOutcome and AssessmentRecord dataclasses. A record
    captures one administered check: who, when, which term set, and one
    outcome per word in assessment order.

Key Functions:
    - AssessmentRecord.start(): New in-progress record for a term set
    - AssessmentRecord.complete(): Back-fill and finalise outcomes
    - AssessmentRecord.score / percentage: Always calculated from outcomes
    - grapheme_breakdown(): Correct/total tallies per grapheme type

Dependencies:
    - dataclasses (std)
    - .words.Word, .words.TermSet

Used By:
    - phonics_toolkit.export.marking_sheet
    - phonics_toolkit.core.utils.serialization

Design Note:
    score and percentage are never stored. Any edit to outcomes goes
    through ``dataclasses.replace`` and the derived values follow.
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Dict, Iterable, Literal, Optional, Sequence, Tuple

from .words import TermSet, Word

ResultMark = Literal["correct", "incorrect", "not_attempted"]
CheckStatus = Literal["in_progress", "completed", "not_done"]
CheckType = Literal["20-week", "40-week"]
ReasonNotDone = Literal["Absent", "Ill", "Other"]

RESULT_MARKS: tuple[str, ...] = ("correct", "incorrect", "not_attempted")
CHECK_STATUSES: tuple[str, ...] = ("in_progress", "completed", "not_done")
CHECK_TYPES: tuple[str, ...] = ("20-week", "40-week")
REASONS_NOT_DONE: tuple[str, ...] = ("Absent", "Ill", "Other")

STOPPED_EARLY_NOTE = "Assessment stopped early"


@dataclass(frozen=True, slots=True)
class WordOutcome:
    """
    The recorded outcome for one assessed word.

    Attributes:
        word: The word that was presented
        result: "correct", "incorrect" or "not_attempted"
        note: Optional free-text note from the teacher
    """

    word: Word
    result: ResultMark
    note: str = ""

    def __post_init__(self) -> None:
        if self.result not in RESULT_MARKS:
            raise ValueError(f"Invalid word result: {self.result!r}")

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"word": self.word.to_dict(), "result": self.result}
        if self.note:
            d["note"] = self.note
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WordOutcome:
        return cls(
            word=Word.from_dict(data["word"]),
            result=data["result"],
            note=data.get("note") or "",
        )


@dataclass(frozen=True)
class AssessmentRecord:
    """
    One administered phonics check (immutable).

    Attributes:
        id: Identifier like "check_1736900000000"
        student_name: Student's display name
        nsn: National Student Number
        teacher: Administering teacher
        school: School name
        location: Where the check took place
        date: ISO-8601 date or timestamp of the check
        term_set_id: Id of the TermSet used
        term_set_name: Name of the TermSet used (kept for display)
        check_type: "20-week" or "40-week"
        total_words: Number of words in the term set
        status: "in_progress", "completed" or "not_done"
        outcomes: Per-word outcomes in word order
        overall_comment: Free-text summary comment
        reason_not_done: Why a check was not done, if it wasn't

    Invariants:
        - score == count of outcomes with result "correct"
        - percentage == score / total_words * 100
        - len(outcomes) == total_words once status is "completed"
    """

    id: str
    student_name: str
    nsn: str
    date: str
    term_set_id: str
    term_set_name: str
    check_type: CheckType
    total_words: int
    teacher: str = ""
    school: str = ""
    location: str = ""
    status: CheckStatus = "in_progress"
    outcomes: Tuple[WordOutcome, ...] = ()
    overall_comment: str = ""
    reason_not_done: Optional[ReasonNotDone] = None

    def __post_init__(self) -> None:
        if self.check_type not in CHECK_TYPES:
            raise ValueError(f"Invalid check type: {self.check_type!r}")
        if self.status not in CHECK_STATUSES:
            raise ValueError(f"Invalid check status: {self.status!r}")
        if self.reason_not_done is not None and self.reason_not_done not in REASONS_NOT_DONE:
            raise ValueError(f"Invalid reason not done: {self.reason_not_done!r}")
        if self.total_words < 0:
            raise ValueError(f"total_words cannot be negative: {self.total_words}")
        if len(self.outcomes) > self.total_words:
            raise ValueError(
                f"{len(self.outcomes)} outcomes recorded for {self.total_words} words"
            )
        if self.status == "completed" and len(self.outcomes) != self.total_words:
            raise ValueError(
                f"Completed record must have {self.total_words} outcomes, "
                f"got {len(self.outcomes)}"
            )

    # ─────────────────────────────────────────────────────────────────────────
    # Derived values
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def score(self) -> int:
        """Number of outcomes marked correct."""
        return sum(1 for o in self.outcomes if o.result == "correct")

    @property
    def percentage(self) -> float:
        """Score as a percentage of the term set's word count."""
        if self.total_words == 0:
            return 0.0
        return self.score / self.total_words * 100

    @property
    def iso_date(self) -> str:
        """Date portion (YYYY-MM-DD) of the check date, or its first token if unparseable."""
        parsed = _parse_date(self.date)
        if parsed is None:
            return re.split(r"[T\s]", self.date.strip(), maxsplit=1)[0]
        return parsed.date().isoformat()

    @property
    def display_date(self) -> str:
        """Check date formatted as DD/MM/YYYY, or the raw value if unparseable."""
        parsed = _parse_date(self.date)
        if parsed is None:
            return self.date
        return parsed.strftime("%d/%m/%Y")

    # ─────────────────────────────────────────────────────────────────────────
    # Factory / transition methods
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def start(
        cls,
        term_set: TermSet,
        *,
        student_name: str,
        nsn: str,
        check_type: CheckType,
        date: Optional[str] = None,
        teacher: str = "",
        school: str = "",
        location: str = "",
    ) -> AssessmentRecord:
        """Create a new in-progress record for a term set."""
        return cls(
            id=f"check_{int(time.time() * 1000)}",
            student_name=student_name,
            nsn=nsn,
            date=date or datetime.now().astimezone().isoformat(),
            term_set_id=term_set.id,
            term_set_name=term_set.name,
            check_type=check_type,
            total_words=len(term_set.words),
            teacher=teacher,
            school=school,
            location=location,
        )

    def with_outcomes(self, outcomes: Iterable[WordOutcome]) -> AssessmentRecord:
        """Return a copy with replaced outcomes (derived values follow)."""
        return replace(self, outcomes=tuple(outcomes))

    def with_comment(self, comment: str) -> AssessmentRecord:
        """Return a copy with a new overall comment."""
        return replace(self, overall_comment=comment)

    def complete(
        self,
        outcomes: Sequence[WordOutcome],
        words: Sequence[Word],
        comment: str = "",
    ) -> AssessmentRecord:
        """
        Finalise the record.

        Words beyond the recorded outcomes (the check was stopped early)
        are back-filled as "not_attempted" with a standard note so that
        every word in the term set has exactly one outcome.

        Args:
            outcomes: Outcomes recorded so far, in word order.
            words: All words of the term set, in order.
            comment: Overall comment to store.

        Returns:
            New record with status "completed".
        """
        padded = list(outcomes)
        for word in words[len(padded):]:
            padded.append(WordOutcome(word=word, result="not_attempted", note=STOPPED_EARLY_NOTE))
        return replace(
            self,
            outcomes=tuple(padded),
            overall_comment=comment,
            status="completed",
            total_words=len(words),
        )

    def mark_not_done(self, reason: ReasonNotDone) -> AssessmentRecord:
        """Return a copy recording that the check was not done."""
        return replace(self, status="not_done", reason_not_done=reason)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "student_name": self.student_name,
            "nsn": self.nsn,
            "teacher": self.teacher,
            "school": self.school,
            "location": self.location,
            "date": self.date,
            "term_set_id": self.term_set_id,
            "term_set_name": self.term_set_name,
            "check_type": self.check_type,
            "total_words": self.total_words,
            "status": self.status,
            "outcomes": [o.to_dict() for o in self.outcomes],
            "overall_comment": self.overall_comment,
            # Convenience copies for readers; ignored by from_dict
            "score": self.score,
            "percentage": self.percentage,
        }
        if self.reason_not_done:
            d["reason_not_done"] = self.reason_not_done
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AssessmentRecord:
        outcomes = tuple(WordOutcome.from_dict(o) for o in data.get("outcomes", []))
        return cls(
            id=data["id"],
            student_name=data["student_name"],
            nsn=data["nsn"],
            date=data["date"],
            term_set_id=data["term_set_id"],
            term_set_name=data["term_set_name"],
            check_type=data["check_type"],
            total_words=data.get("total_words", len(outcomes)),
            teacher=data.get("teacher", ""),
            school=data.get("school", ""),
            location=data.get("location", ""),
            status=data.get("status", "in_progress"),
            outcomes=outcomes,
            overall_comment=data.get("overall_comment") or "",
            reason_not_done=data.get("reason_not_done") or None,
        )


def grapheme_breakdown(record: AssessmentRecord) -> list[tuple[str, int, int]]:
    """
    Tally correct and total outcomes per grapheme type.

    Args:
        record: Assessment record to summarise.

    Returns:
        List of (grapheme_type, correct, total) sorted by grapheme type.

    Example:
        >>> grapheme_breakdown(record)
        [('CCVC', 3, 5), ('CVC', 10, 12)]
    """
    tallies: Dict[str, list[int]] = {}
    for outcome in record.outcomes:
        counts = tallies.setdefault(outcome.word.grapheme_type, [0, 0])
        counts[1] += 1
        if outcome.result == "correct":
            counts[0] += 1
    return [(kind, correct, total) for kind, (correct, total) in sorted(tallies.items())]


def _parse_date(value: str) -> Optional[datetime]:
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None

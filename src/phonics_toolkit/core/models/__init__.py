"""
Core Models Package

Immutable data models that serve as the single source of truth.

All models in this package are frozen dataclasses. Derived values
(score, percentage) are properties and are never stored, so editing
outcomes through ``dataclasses.replace`` can never leave them stale.
"""

from .words import Word, TermSet, TermSetDraft
from .results import AssessmentRecord, WordOutcome, grapheme_breakdown

__all__ = [
    "Word",
    "TermSet",
    "TermSetDraft",
    "WordOutcome",
    "AssessmentRecord",
    "grapheme_breakdown",
]

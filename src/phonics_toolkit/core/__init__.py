"""
Phonics Toolkit Core Package

Shared data models, exceptions and serialization used by both the
ingestion side (uploaded files -> term sets) and the export side
(assessment records -> marking sheets).

1. **Immutable Data Models**
   - Frozen dataclasses; new instances are created for any change

2. **Calculated Scores (Never Stored)**
   - ``score`` and ``percentage`` are always calculated from outcomes

3. **All-or-Nothing Operations**
   - Ingestion returns a complete draft or raises ``IngestionError``
   - Export returns a complete file or raises ``ExportError``
"""

from .models import AssessmentRecord, TermSet, TermSetDraft, Word, WordOutcome
from .errors import ExportError, IngestionError

__all__ = [
    "Word",
    "TermSet",
    "TermSetDraft",
    "WordOutcome",
    "AssessmentRecord",
    "IngestionError",
    "ExportError",
]

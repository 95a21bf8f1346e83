"""
Serialization Utilities

Provides to/from JSON utilities for term sets and assessment records.

- Clean separation: ``serialize_*`` and ``deserialize_*`` functions
- All models have ``to_dict()`` and ``from_dict()`` methods
- Never trust stored calculated values (score, percentage)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..models.results import AssessmentRecord
from ..models.words import TermSet


# ─────────────────────────────────────────────────────────────────────────────
# Term sets
# ─────────────────────────────────────────────────────────────────────────────

def serialize_term_set(term_set: TermSet) -> dict[str, Any]:
    """Serialize a TermSet to a JSON-ready dictionary."""
    return term_set.to_dict()


def deserialize_term_set(data: dict[str, Any]) -> TermSet:
    """
    Deserialize a TermSet from a dictionary.

    Raises:
        KeyError: If a required field is missing
        ValueError: If the word count is out of range
    """
    return TermSet.from_dict(data)


# ─────────────────────────────────────────────────────────────────────────────
# Assessment records
# ─────────────────────────────────────────────────────────────────────────────

def serialize_record(record: AssessmentRecord) -> dict[str, Any]:
    """
    Serialize an AssessmentRecord to a dictionary.

    Note:
        score and percentage are included for readers of the JSON but
        are recalculated from outcomes on load.
    """
    return record.to_dict()


def deserialize_record(data: dict[str, Any]) -> AssessmentRecord:
    """
    Deserialize an AssessmentRecord from a dictionary.

    Stored ``score``/``percentage`` keys are ignored.

    Raises:
        KeyError: If a required field is missing
        ValueError: If a field holds an invalid value
        TypeError, AttributeError: If a field holds the wrong JSON type
    """
    return AssessmentRecord.from_dict(data)


# ─────────────────────────────────────────────────────────────────────────────
# File helpers
# ─────────────────────────────────────────────────────────────────────────────

def save_json(data: dict[str, Any], path: Path) -> None:
    """Write a dictionary as pretty-printed UTF-8 JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def load_json(path: Path) -> dict[str, Any]:
    """
    Read a JSON object from a file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the content is not a JSON object
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {path}")
    return data

"""Core utilities."""

from .serialization import (
    serialize_term_set,
    deserialize_term_set,
    serialize_record,
    deserialize_record,
    save_json,
    load_json,
)

__all__ = [
    "serialize_term_set",
    "deserialize_term_set",
    "serialize_record",
    "deserialize_record",
    "save_json",
    "load_json",
]

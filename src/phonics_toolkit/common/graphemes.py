"""Grapheme type helpers.

Words ingested from PDFs carry no grapheme type, only an ``N/A`` marker.
For display and breakdown purposes a rough letter-pattern label can be
inferred from the word itself.
"""

from __future__ import annotations

NOT_APPLICABLE = "N/A"
NOT_APPLICABLE_SPREADSHEET = "N/A (spreadsheet)"
NOT_APPLICABLE_PDF = "N/A (from PDF)"

VOWELS = frozenset("aeiou")
CONSONANTS = frozenset("bcdfghjklmnpqrstvwxyz")
DIGRAPHS = frozenset({"ch", "sh", "th", "wh", "ph", "ck", "ng", "qu"})


def is_not_applicable(grapheme_type: str) -> bool:
    """Return True if the grapheme type is one of the N/A markers."""
    return NOT_APPLICABLE in grapheme_type


def infer_grapheme_type(word: str) -> str:
    """
    Infer a basic grapheme pattern label from a word's letters.

    Counts vowels and consonants and looks for common consonant digraphs,
    then maps short words onto CVC-style labels. Longer words fall back
    to coarse descriptions.

    Args:
        word: The word to classify. N/A markers are returned unchanged.

    Returns:
        Pattern label such as "CVC", "CCVC" or "Contains Digraph".

    Example:
        >>> infer_grapheme_type("pit")
        'CVC'
        >>> infer_grapheme_type("chips")
        'Contains Digraph'
    """
    if is_not_applicable(word):
        return word

    lower = word.lower()
    vowel_count = sum(1 for ch in lower if ch in VOWELS)
    consonant_count = sum(1 for ch in lower if ch in CONSONANTS)
    has_digraph = any(
        lower[i] in CONSONANTS and lower[i:i + 2] in DIGRAPHS
        for i in range(len(lower) - 1)
    )

    if len(lower) == 1:
        return "Single Letter"
    if len(lower) == 2:
        if vowel_count == 1 and consonant_count == 1:
            return "VC"
        if consonant_count == 2:
            return "CC"
    if len(lower) == 3 and vowel_count == 1 and consonant_count == 2:
        return "Digraph CC" if has_digraph else "CVC"
    if len(lower) == 4:
        if vowel_count == 1 and consonant_count == 3:
            return "CCVC"
        if vowel_count == 2 and consonant_count == 2:
            return "CVCC"

    if has_digraph:
        return "Contains Digraph"
    if vowel_count > consonant_count:
        return "Vowel Heavy"
    if consonant_count > vowel_count + 1:
        return "Consonant Heavy"
    return "Complex Pattern"


def display_grapheme_type(item: str, grapheme_type: str) -> str:
    """Return the stored grapheme type, or an inferred one for N/A markers."""
    if is_not_applicable(grapheme_type):
        return infer_grapheme_type(item)
    return grapheme_type

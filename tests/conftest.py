import io
import sys
from pathlib import Path

import pytest

# Add src to sys.path so we can import phonics_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from phonics_toolkit.core.models.words import TermSet, TermSetDraft, Word  # noqa: E402

# Letters chosen so generated words never collide with the PDF exclusion
# list or the two-letter practice words
_CONSONANTS = "bdgkmpt"
_VOWELS = "aiou"


def pseudo_words(count: int, start: int = 0) -> list[str]:
    """Distinct consonant-vowel-consonant nonsense words (up to 196)."""
    words = []
    for i in range(start, start + count):
        first = _CONSONANTS[i % 7]
        vowel = _VOWELS[(i // 7) % 4]
        last = _CONSONANTS[(i // 28) % 7]
        words.append(f"{first}{vowel}{last}")
    return words


def build_pdf(pages: list[list[str]], fontsize: float = 12) -> bytes:
    """One line of text per entry, 16pt apart, one PDF page per list."""
    import fitz

    doc = fitz.open()
    for lines in pages:
        page = doc.new_page()
        for index, text in enumerate(lines):
            page.insert_text((72, 60 + 16 * index), text, fontsize=fontsize)
    data = doc.tobytes()
    doc.close()
    return data


def build_xlsx(rows: list[list[str]]) -> bytes:
    """Single-sheet workbook whose first row is the header."""
    from openpyxl import Workbook

    workbook = Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


# Common test fixtures
@pytest.fixture
def forty_words() -> list[Word]:
    """Forty CVC words in assessment order."""
    return [Word(item, "CVC") for item in pseudo_words(40)]


@pytest.fixture
def term_set(forty_words) -> TermSet:
    """A stored 40-word term set."""
    return TermSet(
        id="set_1736900000000",
        name="Term 1 2025",
        words=tuple(forty_words),
        created_at="2025-01-15T00:00:00+00:00",
    )


@pytest.fixture
def draft(forty_words) -> TermSetDraft:
    return TermSetDraft(name="Term 1 2025", words=tuple(forty_words))


@pytest.fixture
def make_words():
    """Factory for distinct nonsense words: make_words(count, start=0)."""
    return pseudo_words


@pytest.fixture
def make_pdf():
    """Factory for synthetic PDFs: make_pdf([[line, ...], ...], fontsize=12)."""
    return build_pdf


@pytest.fixture
def make_xlsx():
    """Factory for synthetic workbooks: make_xlsx([[header, ...], [cell, ...], ...])."""
    return build_xlsx

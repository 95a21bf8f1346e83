"""
Tests for ingest.spreadsheet.ingest_spreadsheet().

Workbooks are synthesized in-test with openpyxl; CSV content is built
as text.
"""

import pytest

from phonics_toolkit.core.errors import (
    ColumnNotFoundError,
    InvalidStructureError,
    UnreadableInputError,
    WordCountError,
)
from phonics_toolkit.ingest.config import IngestConfig
from phonics_toolkit.ingest.spreadsheet import ingest_spreadsheet


def _sheet(words, header=("Item", "Grapheme Type"), grapheme="CVC"):
    return [list(header)] + [[w, grapheme] for w in words]


class TestIngestSpreadsheetHappyPath:
    """Well-formed workbooks."""

    def test_ingest_when_40_rows_then_words_in_row_order(self, make_xlsx, make_words):
        # Arrange
        words = make_words(40)
        data = make_xlsx(_sheet(words))

        # Act
        draft = ingest_spreadsheet(data, "Term 1 2025.xlsx")

        # Assert
        assert draft.name == "Term 1 2025"
        assert draft.items == words
        assert all(w.grapheme_type == "CVC" for w in draft.words)

    def test_ingest_when_exactly_20_rows_then_accepted(self, make_xlsx, make_words):
        draft = ingest_spreadsheet(make_xlsx(_sheet(make_words(20))), "twenty.xlsx")

        assert len(draft.words) == 20

    def test_ingest_when_no_grapheme_column_then_spreadsheet_marker(self, make_xlsx, make_words):
        rows = [["Word"]] + [[w] for w in make_words(25)]

        draft = ingest_spreadsheet(make_xlsx(rows), "list.xlsx")

        assert {w.grapheme_type for w in draft.words} == {"N/A (spreadsheet)"}

    def test_ingest_when_grapheme_cell_blank_then_spreadsheet_marker(self, make_xlsx, make_words):
        rows = _sheet(make_words(20))
        rows[1][1] = ""

        draft = ingest_spreadsheet(make_xlsx(rows), "list.xlsx")

        assert draft.words[0].grapheme_type == "N/A (spreadsheet)"
        assert draft.words[1].grapheme_type == "CVC"

    def test_ingest_when_cells_padded_then_trimmed(self, make_xlsx, make_words):
        rows = _sheet(make_words(20))
        rows[1] = ["  pit  ", " CVC "]

        draft = ingest_spreadsheet(make_xlsx(rows), "list.xlsx")

        assert draft.words[0].item == "pit"
        assert draft.words[0].grapheme_type == "CVC"

    def test_ingest_when_blank_and_overlong_rows_then_skipped(self, make_xlsx, make_words):
        # Arrange
        words = make_words(20)
        rows = _sheet(words)
        rows.insert(3, ["   ", "CVC"])
        rows.insert(6, ["x" * 51, "CVC"])

        # Act
        draft = ingest_spreadsheet(make_xlsx(rows), "list.xlsx")

        # Assert
        assert draft.items == words

    def test_ingest_when_csv_then_parsed(self, make_words):
        words = make_words(22)
        text = "Word,Category\n" + "\n".join(f"{w},CVC" for w in words)

        draft = ingest_spreadsheet(text.encode("utf-8"), "Week 20.CSV")

        assert draft.name == "Week 20"
        assert draft.items == words


class TestIngestSpreadsheetFailures:
    """Descriptive failures."""

    def test_ingest_when_19_rows_then_word_count_error(self, make_xlsx, make_words):
        with pytest.raises(WordCountError) as exc_info:
            ingest_spreadsheet(make_xlsx(_sheet(make_words(19))), "short.xlsx")

        assert exc_info.value.count == 19
        assert "19" in str(exc_info.value)

    def test_ingest_when_41_rows_then_word_count_error_with_sample(self, make_xlsx, make_words):
        words = make_words(41)

        with pytest.raises(WordCountError) as exc_info:
            ingest_spreadsheet(make_xlsx(_sheet(words)), "long.xlsx")

        assert exc_info.value.count == 41
        assert exc_info.value.sample == words[:5]

    def test_ingest_when_no_item_column_then_reports_headers(self, make_xlsx, make_words):
        rows = [["Student", "Score"]] + [[w, "1"] for w in make_words(20)]

        with pytest.raises(ColumnNotFoundError) as exc_info:
            ingest_spreadsheet(make_xlsx(rows), "scores.xlsx")

        assert exc_info.value.headers == ["Student", "Score"]
        assert "Student, Score" in str(exc_info.value)

    def test_ingest_when_header_only_then_invalid_structure(self, make_xlsx):
        with pytest.raises(InvalidStructureError, match="no data rows"):
            ingest_spreadsheet(make_xlsx([["Item", "Grapheme Type"]]), "empty.xlsx")

    def test_ingest_when_all_items_blank_then_invalid_structure(self, make_xlsx):
        rows = [["Item", "Grapheme Type"]] + [["", "CVC"]] * 5

        with pytest.raises(InvalidStructureError, match="No valid words"):
            ingest_spreadsheet(make_xlsx(rows), "blank.xlsx")

    def test_ingest_when_not_a_workbook_then_unreadable(self):
        with pytest.raises(UnreadableInputError):
            ingest_spreadsheet(b"definitely not a spreadsheet", "broken.xls")

    def test_ingest_when_custom_bounds_then_applied(self, make_xlsx, make_words):
        config = IngestConfig(min_words=40, max_words=40)

        with pytest.raises(WordCountError):
            ingest_spreadsheet(make_xlsx(_sheet(make_words(39))), "strict.xlsx", config=config)

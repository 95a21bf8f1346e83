"""
Tests for common.path_utils.
"""

from pathlib import Path

from phonics_toolkit.common.path_utils import (
    PDF_EXTENSIONS,
    SPREADSHEET_EXTENSIONS,
    derive_term_name,
    export_filename,
    file_extension,
)


class TestDeriveTermName:
    """Tests for derive_term_name()."""

    def test_derive_when_uppercase_extension_then_stripped(self):
        assert derive_term_name("Term 1 2025.XLSX", SPREADSHEET_EXTENSIONS) == "Term 1 2025"

    def test_derive_when_csv_then_stripped(self):
        assert derive_term_name("week20.csv", SPREADSHEET_EXTENSIONS) == "week20"

    def test_derive_when_double_extension_then_only_last_removed(self):
        assert derive_term_name("check.pdf.pdf", PDF_EXTENSIONS) == "check.pdf"

    def test_derive_when_other_extension_then_unchanged(self):
        assert derive_term_name("notes.txt", PDF_EXTENSIONS) == "notes.txt"

    def test_derive_when_path_given_then_uses_file_name(self):
        assert derive_term_name(Path("/uploads/Term 2.xls"), SPREADSHEET_EXTENSIONS) == "Term 2"


class TestFileExtension:

    def test_file_extension_when_mixed_case_then_lowercased(self):
        assert file_extension("Words.PDF") == ".pdf"


class TestExportFilename:
    """Tests for export_filename()."""

    def test_export_filename_when_timestamp_then_date_portion_only(self):
        result = export_filename("Aroha Ngata", "2025-03-14T09:30:00+13:00")

        assert result == "Phonics-Check-Marking-Sheet-Aroha_Ngata-2025-03-14.xlsx"

    def test_export_filename_when_repeated_spaces_then_each_replaced(self):
        result = export_filename(" Mere  Te Awa ", "2025-03-14")

        assert result == "Phonics-Check-Marking-Sheet-Mere__Te_Awa-2025-03-14.xlsx"

    def test_export_filename_when_space_separated_time_then_date_portion_only(self):
        result = export_filename("Aroha Ngata", "2025-03-14 09:30:00")

        assert result == "Phonics-Check-Marking-Sheet-Aroha_Ngata-2025-03-14.xlsx"

"""
Tests for export.workbook (recalculation forcing) and export.template.
"""

import io
import zipfile

import pytest

from phonics_toolkit.core.errors import TemplateNotFoundError, TemplateStructureError
from phonics_toolkit.export.cells import NS, find_cell, parse_xml
from phonics_toolkit.export.config import DEFAULT_TEMPLATE_PATH
from phonics_toolkit.export.template import TemplateArchive, load_template
from phonics_toolkit.export.workbook import (
    CONTENT_TYPES_PATH,
    WORKBOOK_RELS_PATH,
    force_full_calculation,
    remove_calc_chain,
    strip_cached_values,
)

WORKBOOK_NS = 'xmlns="http://schemas.openxmlformats.org/spreadsheetml/2006/main"'


@pytest.fixture
def archive() -> TemplateArchive:
    return TemplateArchive.from_bytes(DEFAULT_TEMPLATE_PATH.read_bytes())


class TestForceFullCalculation:
    """Tests for force_full_calculation()."""

    def test_force_when_calc_pr_present_then_flags_set_and_id_bumped(self, archive):
        # Arrange
        workbook = archive.read_xml("xl/workbook.xml")

        # Act
        calc_pr = force_full_calculation(workbook)

        # Assert
        assert calc_pr.get("calcMode") == "auto"
        assert calc_pr.get("fullCalcOnLoad") == "1"
        assert calc_pr.get("forceFullCalc") == "1"
        assert calc_pr.get("calcId") == "191030"

    def test_force_when_calc_pr_missing_then_created_after_sheets(self):
        workbook = parse_xml(
            f"<workbook {WORKBOOK_NS}><bookViews/><sheets/><extLst/></workbook>".encode(),
            "workbook.xml",
        )

        force_full_calculation(workbook)

        names = [child.tag.split("}")[1] for child in workbook]
        assert names == ["bookViews", "sheets", "calcPr", "extLst"]
        assert workbook.find("s:calcPr", NS).get("calcId") == "191029"


class TestRemoveCalcChain:
    """Tests for remove_calc_chain()."""

    def test_remove_when_present_then_entry_override_and_relationship_gone(self, archive):
        # Act
        removed = remove_calc_chain(archive, "xl/calcChain.xml")

        # Assert
        assert removed
        assert "xl/calcChain.xml" not in archive
        assert b"calcChain" not in archive.read(CONTENT_TYPES_PATH)
        assert b"calcChain" not in archive.read(WORKBOOK_RELS_PATH)

    def test_remove_when_absent_then_false(self, archive):
        remove_calc_chain(archive, "xl/calcChain.xml")

        assert not remove_calc_chain(archive, "xl/calcChain.xml")


class TestStripCachedValues:

    def test_strip_when_summary_region_then_formulas_kept_values_gone(self, archive):
        # Arrange
        summary = archive.read_xml("xl/worksheets/sheet3.xml")

        # Act
        cleaned = strip_cached_values(summary, "B4:B7")

        # Assert
        assert cleaned == 4
        for ref in ("B4", "B5", "B6", "B7"):
            cell = find_cell(summary, ref)
            assert cell.find("s:f", NS) is not None
            assert cell.find("s:v", NS) is None
            assert "t" not in cell.attrib


class TestTemplateArchive:
    """Tests for TemplateArchive and load_template()."""

    def test_from_bytes_when_not_zip_then_structure_error(self):
        with pytest.raises(TemplateStructureError, match="not a valid archive"):
            TemplateArchive.from_bytes(b"not a zip")

    def test_read_when_entry_missing_then_structure_error(self, archive):
        with pytest.raises(TemplateStructureError, match="xl/worksheets/sheet9.xml"):
            archive.read("xl/worksheets/sheet9.xml")

    def test_to_bytes_when_unchanged_then_same_entries_in_order(self, archive):
        data = archive.to_bytes()

        with zipfile.ZipFile(io.BytesIO(data)) as rezipped:
            assert rezipped.namelist() == archive.names

    def test_load_template_when_first_candidates_fail_then_falls_through(self, tmp_path):
        # Arrange
        empty = tmp_path / "empty.xlsx"
        empty.write_bytes(b"")
        candidates = [tmp_path / "missing.xlsx", empty, DEFAULT_TEMPLATE_PATH]

        # Act
        data, used = load_template(candidates)

        # Assert
        assert used == DEFAULT_TEMPLATE_PATH
        assert data[:2] == b"PK"

    def test_load_template_when_all_fail_then_reports_each_attempt(self, tmp_path):
        candidates = [tmp_path / "a.xlsx", tmp_path / "b.xlsx"]

        with pytest.raises(TemplateNotFoundError) as exc_info:
            load_template(candidates)

        assert [path for path, _ in exc_info.value.attempts] == [str(p) for p in candidates]
        assert "a.xlsx" in str(exc_info.value)

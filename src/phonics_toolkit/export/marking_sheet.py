"""
Module: export.marking_sheet

Purpose:
    Export a completed assessment into the standard marking sheet
    workbook. The packaged template is patched in place: only the fixed
    cells listed in ExportConfig change, everything else (styles, merged
    cells, formulas, other sheets) is carried over untouched, and the
    workbook is flagged to recalculate on open.

Key Functions:
    - export_assessment(): Main entry point, all-or-nothing
    - build_marking_sheet(): Patch the template and return the bytes
    - patch_cover_sheet() / patch_marking_sheet(): Sheet-level edits

Key Classes:
    - ExportResult: Filename, bytes and saved path

Dependencies:
    - export.template: Archive access
    - export.cells: Cell writes
    - export.workbook: Recalculation forcing

Used By:
    - phonics_toolkit.cli: ``export`` command
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from xml.etree import ElementTree as ET

from phonics_toolkit.common.path_utils import export_filename
from phonics_toolkit.core.errors import ExportError
from phonics_toolkit.core.models.results import AssessmentRecord

from .cells import write_cell
from .config import ExportConfig
from .template import TemplateArchive, load_template
from .workbook import force_full_calculation, remove_calc_chain, strip_cached_values

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportResult:
    """
    A generated marking sheet.

    Attributes:
        filename: Download filename
        data: Workbook bytes
        path: Where the file was saved, if it was saved
    """
    filename: str
    data: bytes
    path: Optional[Path] = None


def export_assessment(
    record: AssessmentRecord,
    output_dir: Optional[Path] = None,
    *,
    config: Optional[ExportConfig] = None,
) -> ExportResult:
    """
    Export an assessment record as a marking sheet workbook.

    Any failure is logged with full detail and re-raised as the single
    generic ExportError. When ``output_dir`` is given the file is written
    atomically, so a failed export never leaves a partial file behind.

    Args:
        record: Assessment to export.
        output_dir: Optional directory to save the workbook into.
        config: Optional export configuration.

    Returns:
        ExportResult with the filename and workbook bytes.

    Raises:
        ExportError: On any failure (template, XML, archive or disk).

    Example:
        >>> result = export_assessment(record, Path("exports"))
        >>> result.filename
        'Phonics-Check-Marking-Sheet-Aroha_Ngata-2025-03-14.xlsx'
    """
    config = config or ExportConfig()
    filename = export_filename(record.student_name, record.iso_date)

    try:
        data = build_marking_sheet(record, config=config)
        path = _save_atomically(data, output_dir / filename) if output_dir else None
    except Exception as e:
        logger.exception(f"Export failed for record {record.id}: {e}")
        raise ExportError() from e

    logger.info(f"Exported {filename} ({len(data)} bytes)")
    return ExportResult(filename=filename, data=data, path=path)


def build_marking_sheet(
    record: AssessmentRecord,
    *,
    config: Optional[ExportConfig] = None,
) -> bytes:
    """
    Patch the template with a record and return the workbook bytes.

    Pipeline:
    1. Load the first readable template candidate
    2. Parse the cover and marking sheets
    3. Patch cover details and word slots
    4. Force recalculation: calcPr flags, drop calcChain, strip cached
       summary values
    5. Re-zip

    Raises:
        TemplateError: If the template is missing, incomplete or malformed.
    """
    config = config or ExportConfig()
    template_bytes, template_path = load_template(config.template_candidates())
    logger.debug(f"Using template {template_path}")

    archive = TemplateArchive.from_bytes(template_bytes)
    cover = archive.read_xml(config.cover_sheet)
    marking = archive.read_xml(config.marking_sheet)
    workbook = archive.read_xml(config.workbook)

    patch_cover_sheet(cover, record, config)
    patch_marking_sheet(marking, record, config)
    force_full_calculation(workbook)
    remove_calc_chain(archive, config.calc_chain)

    if config.summary_sheet in archive:
        summary = archive.read_xml(config.summary_sheet)
        cleaned = strip_cached_values(summary, config.summary_formula_region)
        logger.debug(f"Stripped cached values from {cleaned} summary formulas")
        archive.write_xml(config.summary_sheet, summary)

    archive.write_xml(config.cover_sheet, cover)
    archive.write_xml(config.marking_sheet, marking)
    archive.write_xml(config.workbook, workbook)
    return archive.to_bytes()


def patch_cover_sheet(sheet: ET.Element, record: AssessmentRecord, config: ExportConfig) -> None:
    """Write check details to the cover sheet and clear the administrative cells."""
    cells = config.cover
    write_cell(sheet, cells.student_name, record.student_name)
    write_cell(sheet, cells.nsn, record.nsn)
    write_cell(sheet, cells.date, record.display_date)
    write_cell(sheet, cells.check_type, record.check_type)
    write_cell(sheet, cells.reason_not_done, record.reason_not_done or "")
    write_cell(sheet, cells.overall_comment, record.overall_comment)
    write_cell(sheet, cells.location, record.location)
    write_cell(sheet, cells.delivery_medium, config.delivery_medium)
    for ref in cells.cleared:
        write_cell(sheet, ref, "")


def patch_marking_sheet(sheet: ET.Element, record: AssessmentRecord, config: ExportConfig) -> None:
    """
    Write the term set name and one row per word slot.

    Slots without an outcome are blanked so no template or earlier
    content survives in them.
    """
    layout = config.marking
    write_cell(sheet, layout.name_cell, record.term_set_name)

    outcomes = record.outcomes
    if len(outcomes) > layout.slot_count:
        logger.warning(
            f"Record has {len(outcomes)} outcomes; only the first "
            f"{layout.slot_count} fit the marking sheet"
        )

    for slot in range(layout.slot_count):
        row = layout.first_row + slot
        outcome = outcomes[slot] if slot < len(outcomes) else None
        if outcome is None:
            word = grapheme = result = note = ""
        else:
            word = outcome.word.item
            grapheme = outcome.word.grapheme_type
            result = config.result_labels.get(outcome.result, "")
            note = outcome.note
        write_cell(sheet, f"{layout.word_column}{row}", word)
        write_cell(sheet, f"{layout.grapheme_column}{row}", grapheme)
        write_cell(sheet, f"{layout.result_column}{row}", result)
        write_cell(sheet, f"{layout.note_column}{row}", note)


def _save_atomically(data: bytes, path: Path) -> Path:
    """Write to a temporary file in the target directory, then rename over the target."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=".export-", suffix=".xlsx", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return path

"""
Module: export.config

Purpose:
    Configuration dataclasses for marking sheet export: where the
    template lives, which archive entries hold which sheets, and the
    fixed cell coordinates that get patched.

Key Classes:
    - CoverCells: Cover sheet coordinates
    - MarkingLayout: Marking sheet name cell and word slot rows/columns
    - ExportConfig: Main configuration for export

Dependencies:
    - dataclasses: For frozen dataclass support
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Tuple

RESOURCES_DIR = Path(__file__).resolve().parent / "resources"
DEFAULT_TEMPLATE_PATH = RESOURCES_DIR / "marking_sheet_template.xlsx"


@dataclass(frozen=True)
class CoverCells:
    """
    Cover sheet coordinates.

    Attributes:
        student_name, nsn, date, check_type: Check details
        reason_not_done, overall_comment: Left blank when not set
        location: Where the check was administered
        delivery_medium: Always written with ``ExportConfig.delivery_medium``
        cleared: Administrative cells blanked on every export
    """
    student_name: str = "C5"
    nsn: str = "E5"
    date: str = "C7"
    check_type: str = "E7"
    reason_not_done: str = "C9"
    overall_comment: str = "E9"
    location: str = "C24"
    delivery_medium: str = "E24"
    cleared: Tuple[str, ...] = ("C15", "E15", "G24")


@dataclass(frozen=True)
class MarkingLayout:
    """
    Marking sheet layout: one row per word slot starting at ``first_row``.

    Attributes:
        name_cell: Cell holding the term set name
        first_row: Row of the first word slot
        slot_count: Number of word slots (rows) in the sheet
        word_column: Column for the word text
        grapheme_column: Column for the grapheme type
        result_column: Column for "Got it" / "Not yet"
        note_column: Column for the per-word note
    """
    name_cell: str = "F2"
    first_row: int = 5
    slot_count: int = 40
    word_column: str = "B"
    grapheme_column: str = "C"
    result_column: str = "D"
    note_column: str = "E"


@dataclass(frozen=True)
class ExportConfig:
    """
    Configuration for marking sheet export.

    Attributes:
        template_paths: Extra template candidates, tried before the default
        use_default_template: Append the packaged template as last candidate
        cover_sheet: Archive entry for the cover worksheet
        marking_sheet: Archive entry for the marking worksheet
        summary_sheet: Archive entry for the formula summary worksheet
        summary_formula_region: Formula cells whose cached values are stripped
        workbook: Archive entry holding calculation properties
        calc_chain: Archive entry for the calculation chain (removed)
        cover: Cover sheet coordinates
        marking: Marking sheet layout
        delivery_medium: Value written to the delivery medium cell
        result_labels: Result value -> sheet text; other results are blank
    """
    template_paths: Tuple[Path, ...] = ()
    use_default_template: bool = True
    cover_sheet: str = "xl/worksheets/sheet1.xml"
    marking_sheet: str = "xl/worksheets/sheet2.xml"
    summary_sheet: str = "xl/worksheets/sheet3.xml"
    summary_formula_region: str = "B4:B7"
    workbook: str = "xl/workbook.xml"
    calc_chain: str = "xl/calcChain.xml"
    cover: CoverCells = field(default_factory=CoverCells)
    marking: MarkingLayout = field(default_factory=MarkingLayout)
    delivery_medium: str = "Digital"
    result_labels: Dict[str, str] = field(
        default_factory=lambda: {"correct": "Got it", "incorrect": "Not yet"}
    )

    def template_candidates(self) -> Tuple[Path, ...]:
        """Template paths in the order they should be tried."""
        candidates = tuple(Path(p) for p in self.template_paths)
        if self.use_default_template:
            candidates += (DEFAULT_TEMPLATE_PATH,)
        return candidates

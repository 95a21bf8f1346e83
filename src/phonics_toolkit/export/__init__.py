"""
Module: export

Purpose:
    Template-preserving marking sheet export. Patches fixed cells of a
    packaged workbook with an assessment's details and results, and
    forces formulas to recalculate when the file is opened.

Key Functions:
    - export_assessment(): Main entry point

Key Classes:
    - ExportConfig: Template location and cell coordinates
    - ExportResult: Generated file

Dependencies:
    - zipfile, xml.etree.ElementTree (std)
"""

from .config import CoverCells, ExportConfig, MarkingLayout
from .marking_sheet import ExportResult, build_marking_sheet, export_assessment

__all__ = [
    "export_assessment",
    "build_marking_sheet",
    "ExportConfig",
    "ExportResult",
    "CoverCells",
    "MarkingLayout",
]

"""
Module: export.workbook

Purpose:
    Make a patched workbook recalculate when it is opened. Cached formula
    results and the calculation chain describe the template's original
    cell values; once cells change they are stale and must go.

Key Functions:
    - force_full_calculation(): Set calcPr so Excel recalculates on load
    - remove_calc_chain(): Drop calcChain.xml and its references
    - strip_cached_values(): Remove <v> from formula cells in a region

Dependencies:
    - xml.etree.ElementTree (std)
"""

from __future__ import annotations

import logging
from xml.etree import ElementTree as ET

from .cells import (
    CONTENT_TYPES_NS,
    NS,
    PACKAGE_REL_NS,
    find_cell,
    iter_region,
    tag,
)
from .template import TemplateArchive

logger = logging.getLogger(__name__)

CONTENT_TYPES_PATH = "[Content_Types].xml"
WORKBOOK_RELS_PATH = "xl/_rels/workbook.xml.rels"
DEFAULT_CALC_ID = 191029

# Elements that precede calcPr in the workbook schema
_BEFORE_CALC_PR = (
    "fileVersion", "fileSharing", "workbookPr", "workbookProtection",
    "bookViews", "sheets", "functionGroups", "externalReferences", "definedNames",
)


def force_full_calculation(workbook: ET.Element) -> ET.Element:
    """
    Mark the workbook for a full recalculation on load.

    Sets ``calcMode="auto"``, ``fullCalcOnLoad="1"`` and
    ``forceFullCalc="1"`` and bumps ``calcId``. A missing calcPr element
    is created in its schema position.

    Args:
        workbook: Root of xl/workbook.xml.

    Returns:
        The calcPr element.
    """
    calc_pr = workbook.find("s:calcPr", NS)
    if calc_pr is None:
        position = 0
        for index, child in enumerate(list(workbook)):
            if child.tag in {tag(name) for name in _BEFORE_CALC_PR}:
                position = index + 1
        calc_pr = ET.Element(tag("calcPr"))
        workbook.insert(position, calc_pr)

    try:
        calc_id = int(calc_pr.get("calcId", "")) + 1
    except ValueError:
        calc_id = DEFAULT_CALC_ID
    calc_pr.set("calcId", str(calc_id))
    calc_pr.set("calcMode", "auto")
    calc_pr.set("fullCalcOnLoad", "1")
    calc_pr.set("forceFullCalc", "1")
    return calc_pr


def remove_calc_chain(archive: TemplateArchive, calc_chain_path: str) -> bool:
    """
    Remove the calculation chain part and every reference to it.

    Args:
        archive: Template archive, edited in place.
        calc_chain_path: Entry name, e.g. "xl/calcChain.xml".

    Returns:
        True if a calculation chain was present.
    """
    removed = archive.remove(calc_chain_path)
    part_name = "/" + calc_chain_path.lstrip("/")

    if CONTENT_TYPES_PATH in archive:
        types = archive.read_xml(CONTENT_TYPES_PATH)
        for override in types.findall(f"{{{CONTENT_TYPES_NS}}}Override"):
            if override.get("PartName") == part_name:
                types.remove(override)
        archive.write_xml(CONTENT_TYPES_PATH, types)

    if WORKBOOK_RELS_PATH in archive:
        rels = archive.read_xml(WORKBOOK_RELS_PATH)
        leaf = part_name.rsplit("/", 1)[-1]
        for rel in rels.findall(f"{{{PACKAGE_REL_NS}}}Relationship"):
            target = rel.get("Target", "")
            if target == part_name or target.rsplit("/", 1)[-1] == leaf:
                rels.remove(rel)
        archive.write_xml(WORKBOOK_RELS_PATH, rels)

    if removed:
        logger.debug(f"Removed {calc_chain_path}")
    return removed


def strip_cached_values(sheet: ET.Element, region: str) -> int:
    """
    Remove cached results from formula cells, keeping the formulas.

    Args:
        sheet: Worksheet root element.
        region: "B4:B7" style range to clean.

    Returns:
        Number of formula cells cleaned.
    """
    cleaned = 0
    for ref in iter_region(region):
        cell = find_cell(sheet, ref)
        if cell is None or cell.find("s:f", NS) is None:
            continue
        for value in cell.findall("s:v", NS):
            cell.remove(value)
        if "t" in cell.attrib:
            del cell.attrib["t"]
        cleaned += 1
    return cleaned

"""
Module: export.cells

Purpose:
    Cell-level editing of SpreadsheetML worksheet XML. Writes locate or
    create the owning row and cell, clear whatever the cell held before
    (shared string, number, formula, cached value) and attach an inline
    string only when there is something to write, so repeated writes to
    the same coordinate always leave the same result.

Key Functions:
    - split_cell_ref(): "C24" -> ("C", 24)
    - write_cell(): Overwrite one cell with text (or blank it)
    - read_cell_text(): Inline or cached text of a cell, for inspection
    - iter_region(): Cell refs inside an "A1:B2" range
    - parse_xml() / xml_bytes(): Namespace-preserving (de)serialization
    - namespace_declarations(): Prefix declarations to carry through a rewrite

Dependencies:
    - xml.etree.ElementTree (std)
"""

from __future__ import annotations

import io
import re
from typing import Iterable, Iterator, Optional
from xml.etree import ElementTree as ET
from xml.sax.saxutils import quoteattr

from phonics_toolkit.core.errors import TemplateStructureError

SPREADSHEET_NS = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
PACKAGE_REL_NS = "http://schemas.openxmlformats.org/package/2006/relationships"
CONTENT_TYPES_NS = "http://schemas.openxmlformats.org/package/2006/content-types"
XML_NS = "http://www.w3.org/XML/1998/namespace"

# Prefixes Excel writes
for _prefix, _uri in (
    ("r", REL_NS),
    ("mc", "http://schemas.openxmlformats.org/markup-compatibility/2006"),
    ("x14ac", "http://schemas.microsoft.com/office/spreadsheetml/2009/9/ac"),
    ("xr", "http://schemas.microsoft.com/office/spreadsheetml/2014/revision"),
    ("x14", "http://schemas.microsoft.com/office/spreadsheetml/2009/9/main"),
):
    ET.register_namespace(_prefix, _uri)

NS = {"s": SPREADSHEET_NS}

_CELL_REF_RE = re.compile(r"^([A-Z]+)(\d+)$")

# Characters outside the XML 1.0 Char production
_INVALID_XML_CHARS_RE = re.compile(r"[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")

# ElementTree reserves ns0, ns1, ... for generated prefixes
_RESERVED_PREFIX_RE = re.compile(r"ns\d+$")


def tag(name: str) -> str:
    """Qualified SpreadsheetML tag name."""
    return f"{{{SPREADSHEET_NS}}}{name}"


def split_cell_ref(ref: str) -> tuple[str, int]:
    """
    Split an A1-style reference into column letters and row number.

    Raises:
        ValueError: If the reference isn't a plain A1 reference.

    Example:
        >>> split_cell_ref("AB12")
        ('AB', 12)
    """
    match = _CELL_REF_RE.match(ref.strip().upper())
    if not match:
        raise ValueError(f"Invalid cell reference: {ref!r}")
    column, row = match.groups()
    return column, int(row)


def column_to_index(letters: str) -> int:
    """Column letters to 1-based index ("A" -> 1, "AA" -> 27)."""
    result = 0
    for char in letters:
        if not char.isalpha():
            break
        result = result * 26 + (ord(char.upper()) - ord("A") + 1)
    return result


def index_to_column(index: int) -> str:
    """1-based index to column letters (27 -> "AA")."""
    letters = ""
    while index > 0:
        index, rem = divmod(index - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def iter_region(region: str) -> Iterator[str]:
    """
    Yield every cell reference in an "A1:B2" style region, row by row.

    Example:
        >>> list(iter_region("B4:C5"))
        ['B4', 'C4', 'B5', 'C5']
    """
    start, _, end = region.partition(":")
    start_col, start_row = split_cell_ref(start)
    end_col, end_row = split_cell_ref(end or start)
    first, last = column_to_index(start_col), column_to_index(end_col)
    for row in range(start_row, end_row + 1):
        for col in range(first, last + 1):
            yield f"{index_to_column(col)}{row}"


# ─────────────────────────────────────────────────────────────────────────────
# XML (de)serialization
# ─────────────────────────────────────────────────────────────────────────────

def parse_xml(data: bytes, name: str) -> ET.Element:
    """
    Parse an archive entry as XML.

    Raises:
        TemplateStructureError: If the content is not well-formed XML.
    """
    try:
        return ET.fromstring(data)
    except ET.ParseError as e:
        raise TemplateStructureError(f"Could not parse {name}: {e}") from e


def namespace_declarations(data: bytes, name: str = "part") -> list[tuple[str, str]]:
    """
    Prefixed namespace declarations in a part, first declaration per prefix.

    ElementTree forgets declarations once parsed, and Excel lists prefixes
    in ``mc:Ignorable`` that no element uses, so they are read separately.

    Raises:
        TemplateStructureError: If the content is not well-formed XML.
    """
    declarations: dict[str, str] = {}
    try:
        for _, (prefix, uri) in ET.iterparse(io.BytesIO(data), events=("start-ns",)):
            if prefix:
                declarations.setdefault(prefix, uri)
    except ET.ParseError as e:
        raise TemplateStructureError(f"Could not parse {name}: {e}") from e
    return list(declarations.items())


def xml_bytes(root: ET.Element, declarations: Iterable[tuple[str, str]] = ()) -> bytes:
    """
    Serialize a part with its root namespace written as the default namespace.

    Only one URI can hold the empty prefix at a time, so it is re-registered
    for each part before serializing. ``declarations`` (from
    namespace_declarations) keep their prefixes and are written on the root
    element even when nothing in the tree uses them.
    """
    declarations = list(declarations)
    for prefix, uri in declarations:
        if not _RESERVED_PREFIX_RE.match(prefix):
            ET.register_namespace(prefix, uri)
    if root.tag.startswith("{"):
        ET.register_namespace("", root.tag[1:].split("}", 1)[0])
    data = ET.tostring(root, encoding="UTF-8", xml_declaration=True)
    return _declare_on_root(data, declarations)


def _declare_on_root(data: bytes, declarations: list[tuple[str, str]]) -> bytes:
    """Insert missing ``xmlns:prefix`` attributes into the root start tag."""
    if not declarations:
        return data
    start = data.index(b"<", data.index(b"?>") + 2)
    end = data.index(b">", start)
    name_end = start + 1
    while name_end < end and data[name_end:name_end + 1] not in (b" ", b"/", b"\n", b"\t"):
        name_end += 1

    root_tag = data[start:end]
    missing = b"".join(
        f" xmlns:{prefix}={quoteattr(uri)}".encode("utf-8")
        for prefix, uri in declarations
        if f"xmlns:{prefix}=".encode("utf-8") not in root_tag
    )
    return data[:name_end] + missing + data[name_end:]


# ─────────────────────────────────────────────────────────────────────────────
# Row / cell access
# ─────────────────────────────────────────────────────────────────────────────

def _sheet_data(root: ET.Element) -> ET.Element:
    sheet_data = root.find("s:sheetData", NS)
    if sheet_data is None:
        raise TemplateStructureError("Worksheet has no sheetData element")
    return sheet_data


def find_cell(root: ET.Element, ref: str) -> Optional[ET.Element]:
    """Return the cell element at ``ref``, or None if it doesn't exist."""
    column, row_index = split_cell_ref(ref)
    row = _sheet_data(root).find(f"s:row[@r='{row_index}']", NS)
    if row is None:
        return None
    for cell in row.findall("s:c", NS):
        if cell.get("r", "").upper() == f"{column}{row_index}":
            return cell
    return None


def ensure_row(root: ET.Element, row_index: int) -> ET.Element:
    """Find or create the row element, keeping rows in ascending order."""
    sheet_data = _sheet_data(root)
    for position, row in enumerate(sheet_data.findall("s:row", NS)):
        current = int(row.get("r", "0"))
        if current == row_index:
            return row
        if current > row_index:
            new_row = ET.Element(tag("row"), {"r": str(row_index)})
            sheet_data.insert(position, new_row)
            return new_row
    return ET.SubElement(sheet_data, tag("row"), {"r": str(row_index)})


def ensure_cell(row: ET.Element, column: str) -> ET.Element:
    """Find or create the cell element, keeping cells in column order."""
    ref = f"{column}{row.get('r')}"
    target = column_to_index(column)
    for position, cell in enumerate(list(row)):
        if cell.tag != tag("c"):
            continue
        existing = "".join(filter(str.isalpha, cell.get("r", "")))
        if existing == column:
            return cell
        if existing and column_to_index(existing) > target:
            new_cell = ET.Element(tag("c"), {"r": ref})
            row.insert(position, new_cell)
            return new_cell
    return ET.SubElement(row, tag("c"), {"r": ref})


def clear_cell(cell: ET.Element) -> None:
    """Remove the cell's type attribute and all content (value, formula, inline string)."""
    if "t" in cell.attrib:
        del cell.attrib["t"]
    for child in list(cell):
        cell.remove(child)


def write_cell(root: ET.Element, ref: str, value: Optional[str]) -> ET.Element:
    """
    Overwrite a worksheet cell with text.

    The cell is always cleared first; a non-empty value is then attached
    as an inline string. Styles (``s`` attribute) are left untouched.

    Args:
        root: Worksheet root element.
        ref: A1-style reference, e.g. "C5".
        value: Text to write; None or "" leaves the cell blank. Characters
            XML cannot carry (control characters other than tab, CR and LF)
            are dropped.

    Returns:
        The written cell element.
    """
    column, row_index = split_cell_ref(ref)
    cell = ensure_cell(ensure_row(root, row_index), column)
    clear_cell(cell)

    text = "" if value is None else _INVALID_XML_CHARS_RE.sub("", str(value))
    if not text:
        return cell

    cell.set("t", "inlineStr")
    is_elem = ET.SubElement(cell, tag("is"))
    t_elem = ET.SubElement(is_elem, tag("t"))
    if text != text.strip() or "\n" in text:
        t_elem.set(f"{{{XML_NS}}}space", "preserve")
    t_elem.text = text
    return cell


def read_cell_text(root: ET.Element, ref: str) -> str:
    """
    Return a cell's inline string or raw cached value ("" if empty).

    Shared-string indexes are returned as-is; this is for inspecting
    cells this module wrote.
    """
    cell = find_cell(root, ref)
    if cell is None:
        return ""
    if cell.get("t") == "inlineStr":
        return "".join(t.text or "" for t in cell.iterfind("s:is/s:t", NS))
    value = cell.find("s:v", NS)
    return (value.text or "") if value is not None else ""

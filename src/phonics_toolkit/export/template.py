"""
Module: export.template

Purpose:
    Load the marking sheet template and hold it as an in-memory archive
    of named entries that can be read, replaced, removed and re-zipped.

Key Functions:
    - load_template(): Try candidate template paths in order

Key Classes:
    - TemplateArchive: Random-access view over the template's entries

Dependencies:
    - zipfile (std)
"""

from __future__ import annotations

import io
import logging
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Sequence
from xml.etree import ElementTree as ET

from phonics_toolkit.core.errors import TemplateNotFoundError, TemplateStructureError

from .cells import namespace_declarations, parse_xml, xml_bytes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Entry:
    info: zipfile.ZipInfo
    data: bytes


class TemplateArchive:
    """
    Entries of an OOXML package, editable in memory.

    Entry order and per-entry timestamps are kept from the source
    archive, so patching the same template twice produces identical
    bytes.

    Example:
        >>> archive = TemplateArchive.from_bytes(template_bytes)
        >>> sheet = archive.read_xml("xl/worksheets/sheet1.xml")
        >>> archive.write_xml("xl/worksheets/sheet1.xml", sheet)
        >>> data = archive.to_bytes()
    """

    def __init__(self, entries: Dict[str, _Entry]):
        self._entries = entries

    @classmethod
    def from_bytes(cls, data: bytes) -> TemplateArchive:
        """
        Open archive content.

        Raises:
            TemplateStructureError: If the content is not a zip archive.
        """
        try:
            with zipfile.ZipFile(io.BytesIO(data), "r") as source:
                entries = {
                    info.filename: _Entry(info=info, data=source.read(info.filename))
                    for info in source.infolist()
                    if not info.is_dir()
                }
        except zipfile.BadZipFile as e:
            raise TemplateStructureError(f"Template is not a valid archive: {e}") from e
        return cls(entries)

    @property
    def names(self) -> List[str]:
        return list(self._entries)

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def read(self, name: str) -> bytes:
        """
        Raw content of an entry.

        Raises:
            TemplateStructureError: If the entry doesn't exist.
        """
        entry = self._entries.get(name)
        if entry is None:
            raise TemplateStructureError(f"Template is missing '{name}'")
        return entry.data

    def read_xml(self, name: str) -> ET.Element:
        """Parse an entry as XML (raises TemplateStructureError on failure)."""
        return parse_xml(self.read(name), name)

    def write(self, name: str, data: bytes) -> None:
        """Replace an entry's content, or add a new entry."""
        existing = self._entries.get(name)
        info = existing.info if existing else zipfile.ZipInfo(name, date_time=(1980, 1, 1, 0, 0, 0))
        self._entries[name] = _Entry(info=info, data=data)

    def write_xml(self, name: str, root: ET.Element) -> None:
        """Serialize a part, keeping the prefixes the replaced entry declared."""
        existing = self._entries.get(name)
        declarations = namespace_declarations(existing.data, name) if existing else ()
        self.write(name, xml_bytes(root, declarations))

    def remove(self, name: str) -> bool:
        """Delete an entry; returns False if it wasn't there."""
        return self._entries.pop(name, None) is not None

    def to_bytes(self) -> bytes:
        """Re-zip all entries in their original order."""
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as target:
            for name, entry in self._entries.items():
                info = zipfile.ZipInfo(name, date_time=entry.info.date_time)
                info.compress_type = zipfile.ZIP_DEFLATED
                info.external_attr = entry.info.external_attr
                target.writestr(info, entry.data)
        return buffer.getvalue()


def load_template(candidates: Sequence[Path]) -> tuple[bytes, Path]:
    """
    Read the first template candidate that can be read.

    Args:
        candidates: Template paths in priority order.

    Returns:
        Tuple of (template bytes, path used).

    Raises:
        TemplateNotFoundError: If every candidate fails; ``attempts``
            lists each path with its failure reason.
    """
    attempts: List[tuple[str, str]] = []
    for path in candidates:
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            logger.debug(f"Template candidate {path} failed: {e}")
            attempts.append((str(path), str(e)))
            continue
        if not data:
            attempts.append((str(path), "file is empty"))
            continue
        logger.debug(f"Loaded template from {path}")
        return data, Path(path)

    detail = "; ".join(f"{path}: {reason}" for path, reason in attempts) or "no candidates configured"
    raise TemplateNotFoundError(f"Could not load marking sheet template ({detail})", attempts=attempts)

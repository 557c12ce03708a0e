"""
Section Name Lookup
====================

Section names are not stored on the decoded entries.  Each
:class:`~elfscope.core.models.SectionEntry` keeps ``name_offset``, an
index into the string table held by the section at
``e_shstrndx``; the consumer resolves it on demand.
"""

from __future__ import annotations

from typing import Optional, Sequence

from elfscope.core.models import DecodedObject, SectionEntry, StringTablePayload


def resolve_section_name(
    sections: Sequence[SectionEntry],
    table_index: int,
    name_offset: int,
) -> Optional[str]:
    """Resolve *name_offset* against the string table at *table_index*.

    Args:
        sections: All section entries of the object, in table order.
        table_index: Index of the section-name string table
            (``e_shstrndx``).
        name_offset: Byte offset of the name inside that table.

    Returns:
        The NUL-terminated name at *name_offset* (``""`` when the offset
        points at a NUL byte), or ``None`` when the index does not name a
        string-table section or the offset lies outside it.
    """
    if not 0 <= table_index < len(sections):
        return None
    payload = sections[table_index].payload
    if not isinstance(payload, StringTablePayload):
        return None
    data = payload.data
    if not 0 <= name_offset < len(data):
        return None
    end = data.find(b"\x00", name_offset)
    if end == -1:
        end = len(data)
    return data[name_offset:end].decode("utf-8", errors="replace")


def section_names(obj: DecodedObject) -> list[Optional[str]]:
    """Resolve the name of every section of *obj*, in table order."""
    index = obj.header.section_name_table_index
    return [
        resolve_section_name(obj.section_entries, index, entry.name_offset)
        for entry in obj.section_entries
    ]

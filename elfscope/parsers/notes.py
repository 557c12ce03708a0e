"""
Note Records
=============

Decoder for ``Elf_Nhdr`` records found in ``PT_NOTE`` segments and
``SHT_NOTE`` sections::

    namesz  u32
    descsz  u32
    type    u32
    name    namesz bytes, padded to a 4-byte boundary
    desc    descsz bytes

Header words are read in the file's byte order.  GNU notes get a vendor
interpretation: ``NT_GNU_ABI_TAG`` (OS kind plus a major.minor.patch
kernel ABI) and ``NT_GNU_BUILD_ID`` (opaque identifier bytes).  Only the
first note of a segment or section is decoded.

Reference:
    Linux man page: elf(5), "Notes (Nhdr)".
"""

from __future__ import annotations

import struct

from elfscope.core.models import (
    Endianness,
    GnuAbiTag,
    GnuBuildId,
    NoteDetail,
    NoteRecord,
    UnknownNote,
)
from elfscope.parsers.constants import (
    GNU_ABI_TAG_SIZE,
    GNU_NOTE_NAME,
    NOTE_ALIGN,
    NOTE_HEADER_SIZE,
    NT_GNU_ABI_TAG,
    NT_GNU_BUILD_ID,
)
from elfscope.parsers.cursor import ByteCursor


def align_up(value: int, alignment: int = NOTE_ALIGN) -> int:
    """Round *value* up to a multiple of *alignment*."""
    return (value + alignment - 1) & ~(alignment - 1)


def decode_note(
    cursor: ByteCursor, offset: int, endianness: Endianness
) -> NoteRecord:
    """Decode the note record starting at absolute *offset*.

    The cursor position is restored on return.

    Raises:
        OutOfBoundsError: The header, name or descriptor crosses the end
            of the buffer.
    """
    saved = cursor.tell()
    try:
        cursor.seek(offset)
        name_size = cursor.read_u32(endianness)
        desc_size = cursor.read_u32(endianness)
        type_tag = cursor.read_u32(endianness)
    finally:
        cursor.seek(saved)

    name_start = offset + NOTE_HEADER_SIZE
    name = cursor.read_at(name_start, name_size)
    description = b""
    if desc_size > 0:
        description = cursor.read_at(
            name_start + align_up(name_size), desc_size
        )

    return NoteRecord(
        name_size=name_size,
        desc_size=desc_size,
        type_tag=type_tag,
        name=name,
        description=description,
        detail=_interpret(name, type_tag, description, endianness),
    )


def _interpret(
    name: bytes, type_tag: int, description: bytes, endianness: Endianness
) -> NoteDetail:
    if name.split(b"\x00", 1)[0] != GNU_NOTE_NAME:
        return UnknownNote()

    if type_tag == NT_GNU_ABI_TAG and len(description) >= GNU_ABI_TAG_SIZE:
        os_kind, major, minor, patch = struct.unpack_from(
            endianness.struct_prefix + "IIII", description
        )
        return GnuAbiTag(os_kind=os_kind, major=major, minor=minor, patch=patch)

    if type_tag == NT_GNU_BUILD_ID:
        return GnuBuildId(build_id=description)

    return UnknownNote()

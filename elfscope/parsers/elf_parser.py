"""
ELF Decoder
============

Bounds-checked decoder for the Executable and Linkable Format (ELF).

A single call to :func:`decode` turns a complete file image into an
immutable :class:`~elfscope.core.models.DecodedObject`:

    1. size floor (52 bytes, the smallest ELF header)
    2. identification (magic, class, data encoding, version, OS ABI)
    3. entry header, through the layout chosen by the class byte
    4. program-header table, with interpreter and note payloads
    5. section-header table, with string-table and note payloads

Both ELF32 and ELF64 in either byte order are supported.  Every read is
bounds-checked; any fatal condition raises a
:class:`~elfscope.core.exceptions.DecodeError` subclass and nothing
partial is returned.  Recoverable irregularities (unknown class, data
encoding, version or object type) are coerced to sentinels and reported
as diagnostics on the result.

References:
    - TIS Committee. (1995). Tool Interface Standard (TIS) Executable and
      Linkable Format (ELF) Specification, Version 1.2.
    - System V Application Binary Interface, Edition 4.1.
    - Linux man page: elf(5).
"""

from __future__ import annotations

from typing import Callable, TypeVar

from shared.models import Diagnostic

from elfscope.core.exceptions import (
    EntrySizeError,
    OutOfBoundsError,
    SizeTooSmallError,
)
from elfscope.core.models import (
    DecodedObject,
    EntryHeader,
    Identification,
    ProgramEntry,
    SectionEntry,
)
from elfscope.parsers.constants import SMALLEST_POSSIBLE_ELF
from elfscope.parsers.cursor import ByteCursor
from elfscope.parsers.ident import decode_identification
from elfscope.parsers.layouts import Layout, select_layout
from elfscope.parsers.payloads import program_payload, section_payload
from elfscope.parsers.validation import validate_object_type, validate_version


_Entry = TypeVar("_Entry")


# ---------------------------------------------------------------------------
# Entry header
# ---------------------------------------------------------------------------

def decode_entry_header(
    cursor: ByteCursor,
    identification: Identification,
    layout: Layout,
) -> tuple[EntryHeader, list[Diagnostic]]:
    """Decode the fields following ``e_ident``.

    The cursor must be positioned at offset 16.
    """
    endianness = identification.endianness
    diagnostics: list[Diagnostic] = []

    raw_type = cursor.read_u16(endianness)
    machine = cursor.read_u16(endianness)
    raw_version = cursor.read_u32(endianness)
    entry_point = layout.read_word(cursor, endianness)
    program_table_offset = layout.read_word(cursor, endianness)
    section_table_offset = layout.read_word(cursor, endianness)
    flags = cursor.read_u32(endianness)
    header_size = cursor.read_u16(endianness)
    program_entry_size = cursor.read_u16(endianness)
    program_entry_count = cursor.read_u16(endianness)
    section_entry_size = cursor.read_u16(endianness)
    section_entry_count = cursor.read_u16(endianness)
    section_name_table_index = cursor.read_u16(endianness)

    object_type, diag = validate_object_type(raw_type)
    if diag is not None:
        diagnostics.append(diag)
    version, diag = validate_version(raw_version, field="header.version")
    if diag is not None:
        diagnostics.append(diag)

    header = EntryHeader(
        identification=identification,
        object_type=object_type,
        raw_object_type=raw_type,
        machine=machine,
        version=version,
        raw_version=raw_version,
        entry_point=entry_point,
        program_table_offset=program_table_offset,
        section_table_offset=section_table_offset,
        flags=flags,
        header_size=header_size,
        program_entry_size=program_entry_size,
        program_entry_count=program_entry_count,
        section_entry_size=section_entry_size,
        section_entry_count=section_entry_count,
        section_name_table_index=section_name_table_index,
    )
    return header, diagnostics


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

def _decode_table(
    cursor: ByteCursor,
    table: str,
    offset: int,
    count: int,
    entry_size: int,
    record_size: int,
    read_entry: Callable[[], _Entry],
) -> tuple[_Entry, ...]:
    """Decode *count* entries spaced *entry_size* bytes apart.

    Entries may not overlap (*entry_size* is at least the layout's
    *record_size*) and the whole table must fit in the buffer before any
    entry is read, so the work done is bounded by the buffer length.
    """
    if count == 0:
        return ()

    if entry_size < record_size:
        raise EntrySizeError(table, entry_size, record_size)

    extent = count * entry_size
    if offset + extent > cursor.size:
        raise OutOfBoundsError(offset, extent, cursor.size)

    entries: list[_Entry] = []
    for index in range(count):
        cursor.seek(offset + index * entry_size)
        entries.append(read_entry())
    return tuple(entries)


def decode_program_table(
    cursor: ByteCursor, header: EntryHeader, layout: Layout
) -> tuple[ProgramEntry, ...]:
    endianness = header.identification.endianness

    def read_entry() -> ProgramEntry:
        fields = layout.read_program_entry(cursor, endianness)
        return ProgramEntry(
            **fields._asdict(),
            payload=program_payload(cursor, fields, endianness),
        )

    return _decode_table(
        cursor,
        "program header",
        header.program_table_offset,
        header.program_entry_count,
        header.program_entry_size,
        layout.program_entry_size,
        read_entry,
    )


def decode_section_table(
    cursor: ByteCursor, header: EntryHeader, layout: Layout
) -> tuple[SectionEntry, ...]:
    endianness = header.identification.endianness

    def read_entry() -> SectionEntry:
        fields = layout.read_section_entry(cursor, endianness)
        return SectionEntry(
            **fields._asdict(),
            payload=section_payload(cursor, fields, endianness),
        )

    return _decode_table(
        cursor,
        "section header",
        header.section_table_offset,
        header.section_entry_count,
        header.section_entry_size,
        layout.section_entry_size,
        read_entry,
    )


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def decode(buffer: bytes | bytearray | memoryview) -> DecodedObject:
    """Decode a complete ELF file image.

    Args:
        buffer: The whole file contents.  The buffer is only borrowed;
            every payload in the result is an independent copy.

    Returns:
        The decoded object, including any diagnostics.

    Raises:
        SizeTooSmallError: ``len(buffer)`` is below 52 bytes.
        InvalidMagicError: The buffer does not start with ``\\x7fELF``.
        OutOfBoundsError: A header, table or payload reaches past the end
            of the buffer.

    Usage::

        obj = decode(Path("/bin/true").read_bytes())
        print(obj.header.entry_point)
    """
    if len(buffer) < SMALLEST_POSSIBLE_ELF:
        raise SizeTooSmallError(len(buffer), SMALLEST_POSSIBLE_ELF)

    cursor = ByteCursor(buffer)
    try:
        identification, diagnostics = decode_identification(cursor)
        layout = select_layout(identification.word_width)

        header, header_diagnostics = decode_entry_header(
            cursor, identification, layout
        )
        diagnostics.extend(header_diagnostics)

        program_entries = decode_program_table(cursor, header, layout)
        section_entries = decode_section_table(cursor, header, layout)
    finally:
        cursor.release()

    return DecodedObject(
        header=header,
        program_entries=program_entries,
        section_entries=section_entries,
        diagnostics=tuple(diagnostics),
    )

"""
Entry Payloads
===============

Type-tag dispatch from a decoded program or section entry to the
payload it carries in the file: the interpreter path of ``PT_INTERP``,
the first note of ``PT_NOTE`` / ``SHT_NOTE``, and the raw bytes of
``SHT_STRTAB``.  Every other tag carries no payload.
"""

from __future__ import annotations

from typing import Optional

from elfscope.core.models import (
    Endianness,
    InterpreterPayload,
    NotePayload,
    StringTablePayload,
)
from elfscope.parsers.constants import PT_INTERP, PT_NOTE, SHT_NOTE, SHT_STRTAB
from elfscope.parsers.cursor import ByteCursor
from elfscope.parsers.layouts import ProgramFields, SectionFields
from elfscope.parsers.notes import decode_note


def decode_interpreter(
    cursor: ByteCursor, offset: int, size: int
) -> InterpreterPayload:
    """Read the NUL-terminated interpreter path stored at file *offset*."""
    raw = cursor.read_at(offset, size)
    path = raw.split(b"\x00", 1)[0].decode("utf-8", errors="replace")
    return InterpreterPayload(path=path)


def decode_string_table(
    cursor: ByteCursor, offset: int, size: int
) -> StringTablePayload:
    return StringTablePayload(data=cursor.read_at(offset, size))


def program_payload(
    cursor: ByteCursor, fields: ProgramFields, endianness: Endianness
) -> Optional[InterpreterPayload | NotePayload]:
    if fields.type == PT_INTERP:
        return decode_interpreter(cursor, fields.file_offset, fields.file_size)
    if fields.type == PT_NOTE:
        return NotePayload(
            note=decode_note(cursor, fields.file_offset, endianness)
        )
    return None


def section_payload(
    cursor: ByteCursor, fields: SectionFields, endianness: Endianness
) -> Optional[StringTablePayload | NotePayload]:
    # SHT_NOBITS occupies no file space and falls through to None.
    if fields.type == SHT_STRTAB:
        return decode_string_table(cursor, fields.file_offset, fields.size)
    if fields.type == SHT_NOTE:
        return NotePayload(
            note=decode_note(cursor, fields.file_offset, endianness)
        )
    return None

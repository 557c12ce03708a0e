"""
Display Formatting
===================

Pure functions turning decoded values into display strings.  They never
print; the console renderer lays the strings out.

Fields that were coerced to a sentinel during decoding render as
``unknown (<raw value>)`` so the offending value stays visible.
"""

from __future__ import annotations

from typing import Optional

from elfscope.core.models import (
    Endianness,
    EntryHeader,
    FormatVersion,
    GnuAbiTag,
    GnuBuildId,
    Identification,
    InterpreterPayload,
    NotePayload,
    NoteRecord,
    ProgramEntry,
    SectionEntry,
    WordWidth,
)
from elfscope.parsers.constants import (
    EM_NAMES,
    ET_HIOS,
    ET_HIPROC,
    ET_INVALID,
    ET_LOOS,
    ET_LOPROC,
    ET_NAMES,
    GNU_ABI_OS_NAMES,
    GNU_NOTE_NAME,
    OSABI_NAMES,
    PF_R,
    PF_W,
    PF_X,
    PT_HIOS,
    PT_HIPROC,
    PT_LOOS,
    PT_LOPROC,
    PT_NAMES,
    SHF_LETTERS,
    SHT_HIOS,
    SHT_HIPROC,
    SHT_HIUSER,
    SHT_LOOS,
    SHT_LOPROC,
    SHT_LOUSER,
    SHT_NAMES,
)


ELISION = "..."
NO_NAME = "No name"
UNRESOLVED_NAME = "<unresolved>"


def unknown(raw: int) -> str:
    return f"unknown ({raw})"


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

def format_address(word_width: WordWidth, value: int) -> str:
    """Zero-padded hex address: 8 digits for ELF32, 16 otherwise."""
    if word_width is WordWidth.BITS_32:
        return f"0x{value & 0xFFFFFFFF:08x}"
    return f"0x{value:016x}"


def describe_version(version: FormatVersion, raw: int) -> str:
    if version is FormatVersion.CURRENT:
        return "1 (current)"
    return unknown(raw)


# ---------------------------------------------------------------------------
# Identification and header
# ---------------------------------------------------------------------------

def describe_class(ident: Identification) -> str:
    if ident.word_width is WordWidth.INVALID:
        return unknown(ident.raw_class)
    return f"{ident.word_width.bits}-bit"


def describe_endianness(ident: Identification) -> str:
    if ident.endianness is Endianness.LITTLE:
        return "Little-endian"
    if ident.endianness is Endianness.BIG:
        return "Big-endian"
    return unknown(ident.raw_data)


def describe_abi(abi: int) -> str:
    return OSABI_NAMES.get(abi, unknown(abi))


def describe_object_type(header: EntryHeader) -> str:
    """Name of ``e_type``, including the reserved OS and processor bands."""
    object_type = header.object_type
    if object_type == ET_INVALID:
        return unknown(header.raw_object_type)
    if object_type in ET_NAMES:
        return ET_NAMES[object_type]
    if ET_LOOS <= object_type <= ET_HIOS:
        return "OS specific"
    if ET_LOPROC <= object_type <= ET_HIPROC:
        return "Processor specific"
    return unknown(header.raw_object_type)


def describe_machine(machine: int) -> str:
    return EM_NAMES.get(machine, unknown(machine))


def header_fields(header: EntryHeader) -> list[tuple[str, str]]:
    """Ordered ``(label, value)`` pairs for the header dump."""
    ident = header.identification
    width = ident.word_width
    return [
        ("Class", describe_class(ident)),
        ("Endianness", describe_endianness(ident)),
        ("Ident version", describe_version(ident.format_version, ident.raw_version)),
        ("ABI", describe_abi(ident.abi)),
        ("ABI Version", str(ident.abi_version)),
        ("Type", describe_object_type(header)),
        ("Machine", describe_machine(header.machine)),
        ("Version", describe_version(header.version, header.raw_version)),
        ("Entry-point", format_address(width, header.entry_point)),
        (
            "Program Header table start offset",
            f"{header.program_table_offset} bytes from start of file",
        ),
        (
            "Section Header table start offset",
            f"{header.section_table_offset} bytes from start of file",
        ),
        ("Flags", str(header.flags)),
        ("Entry Header size", f"{header.header_size} bytes"),
        ("Size of a Program Header entry", f"{header.program_entry_size} bytes"),
        ("Number of Program Header entries", str(header.program_entry_count)),
        ("Size of a Section Header entry", f"{header.section_entry_size} bytes"),
        ("Number of Section Header entries", str(header.section_entry_count)),
        (
            "Index of the Section Header entry with names",
            str(header.section_name_table_index),
        ),
    ]


# ---------------------------------------------------------------------------
# Program entries
# ---------------------------------------------------------------------------

def describe_program_type(p_type: int) -> str:
    if p_type in PT_NAMES:
        return PT_NAMES[p_type]
    if PT_LOOS <= p_type <= PT_HIOS:
        return "OS"
    if PT_LOPROC <= p_type <= PT_HIPROC:
        return "Processor"
    return unknown(p_type)


def program_flags(flags: int) -> str:
    """Three-column ``RWX`` rendering; absent permissions are blanks."""
    return "".join((
        "R" if flags & PF_R else " ",
        "W" if flags & PF_W else " ",
        "X" if flags & PF_X else " ",
    ))


def describe_program_payload(entry: ProgramEntry) -> str:
    payload = entry.payload
    if isinstance(payload, InterpreterPayload):
        return f"requests interpreter {payload.path}"
    if isinstance(payload, NotePayload):
        return describe_note_record(payload.note)
    return ""


# ---------------------------------------------------------------------------
# Section entries
# ---------------------------------------------------------------------------

def describe_section_type(sh_type: int) -> str:
    if sh_type in SHT_NAMES:
        return SHT_NAMES[sh_type]
    if SHT_LOOS <= sh_type <= SHT_HIOS:
        return "OS"
    if SHT_LOPROC <= sh_type <= SHT_HIPROC:
        return "Processor"
    if SHT_LOUSER <= sh_type <= SHT_HIUSER:
        return "User"
    return unknown(sh_type)


def section_flags(flags: int) -> str:
    """One column per known flag letter, blank when the bit is clear."""
    return "".join(
        letter if flags & mask else " " for mask, letter in SHF_LETTERS
    )


def display_section_name(name: Optional[str], width: int = 16) -> str:
    """Fit a resolved section name into *width* columns.

    Names that do not fit are cut and end in ``...``.  An empty name
    shows as ``No name``; an unresolvable one as ``<unresolved>``.
    """
    if name is None:
        return UNRESOLVED_NAME
    if not name:
        return NO_NAME
    keep = max(width - len(ELISION), 1)
    if len(name) > keep:
        return name[:keep] + ELISION
    return name


def describe_section_payload(entry: SectionEntry) -> str:
    if isinstance(entry.payload, NotePayload):
        return describe_note_record(entry.payload.note)
    return ""


# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------

def describe_note(note: NoteRecord) -> str:
    """Human-readable interpretation of a note descriptor."""
    detail = note.detail
    if isinstance(detail, GnuBuildId):
        return f"Build ID: {detail.hex}"
    if isinstance(detail, GnuAbiTag):
        os_name = GNU_ABI_OS_NAMES.get(detail.os_kind, f"unknown OS '{detail.os_kind}'")
        return f"Expects {os_name}, ABI v{detail.major}.{detail.minor}.{detail.patch}"
    if note.name.split(b"\x00", 1)[0] == GNU_NOTE_NAME:
        return f"Unknown GNU note type '{note.type_tag}'"
    return "Unknown"


def describe_note_record(note: NoteRecord) -> str:
    return f"Note ({note.name_text}): {describe_note(note)}"

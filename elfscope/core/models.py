"""
ElfScope Data Models
=====================

Pydantic-based, immutable data models for a decoded ELF object.

The decoder produces a :class:`DecodedObject` that owns every byte it
references: payloads (interpreter paths, note records, string tables)
are copied out of the input buffer, so the buffer can be released as
soon as decoding finishes.

Per-entry payloads are tagged unions discriminated by ``kind``.  A program
entry can carry an :class:`InterpreterPayload` or a :class:`NotePayload`;
a section entry can carry a :class:`StringTablePayload` or a
:class:`NotePayload`; every other entry carries ``None``.

References:
    - TIS Committee. (1995). Executable and Linkable Format (ELF) Specification.
    - Pydantic v2 discriminated unions.
      https://docs.pydantic.dev/latest/concepts/unions/
"""

from __future__ import annotations

import datetime as _dt
import enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from shared.models import Diagnostic


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class WordWidth(enum.IntEnum):
    """Address/offset width (``EI_CLASS``)."""
    INVALID = 0
    BITS_32 = 1
    BITS_64 = 2

    @property
    def bits(self) -> int:
        """Width in bits; ``INVALID`` reads as 64-bit."""
        return 32 if self is WordWidth.BITS_32 else 64


class Endianness(enum.IntEnum):
    """Byte order (``EI_DATA``)."""
    INVALID = 0
    LITTLE = 1
    BIG = 2

    @property
    def struct_prefix(self) -> str:
        """:mod:`struct` byte-order prefix; only ``LITTLE`` reads little-endian."""
        return "<" if self is Endianness.LITTLE else ">"


class FormatVersion(enum.IntEnum):
    """ELF format version (``EI_VERSION`` / ``e_version``)."""
    INVALID = 0
    CURRENT = 1


class DumpSelection(enum.Flag):
    """Which parts of a decoded object to render."""
    NONE = 0
    HEADER = enum.auto()
    PROGRAM = enum.auto()
    SECTION = enum.auto()
    ALL = HEADER | PROGRAM | SECTION


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# ---------------------------------------------------------------------------
# Header records
# ---------------------------------------------------------------------------

class Identification(_FrozenModel):
    """The decoded ``e_ident`` prefix.

    Attributes:
        word_width: Normalized class; ``INVALID`` when unrecognized.
        endianness: Normalized data encoding; ``INVALID`` when unrecognized.
        format_version: Normalized identification version.
        abi: OS/ABI byte (opaque, rendered by name when known).
        abi_version: ABI version byte.
        raw_class: Class byte as found in the file.
        raw_data: Data-encoding byte as found in the file.
        raw_version: Version byte as found in the file.
    """
    word_width: WordWidth
    endianness: Endianness
    format_version: FormatVersion
    abi: int
    abi_version: int
    raw_class: int
    raw_data: int
    raw_version: int


class EntryHeader(_FrozenModel):
    """The ELF entry (file) header.

    ``object_type`` is ``ET_INVALID`` (-1) when the raw type lies outside
    every known band; the raw value is kept in ``raw_object_type``.
    """
    identification: Identification
    object_type: int
    raw_object_type: int
    machine: int
    version: FormatVersion
    raw_version: int
    entry_point: int
    program_table_offset: int
    section_table_offset: int
    flags: int
    header_size: int
    program_entry_size: int
    program_entry_count: int
    section_entry_size: int
    section_entry_count: int
    section_name_table_index: int


# ---------------------------------------------------------------------------
# Note records
# ---------------------------------------------------------------------------

class GnuAbiTag(_FrozenModel):
    """``NT_GNU_ABI_TAG``: the OS and minimum kernel ABI a binary expects."""
    kind: Literal["gnu_abi_tag"] = "gnu_abi_tag"
    os_kind: int
    major: int
    minor: int
    patch: int


class GnuBuildId(_FrozenModel):
    """``NT_GNU_BUILD_ID``: an opaque build identifier."""
    kind: Literal["gnu_build_id"] = "gnu_build_id"
    build_id: bytes

    @property
    def hex(self) -> str:
        return self.build_id.hex()

    @field_serializer("build_id", when_used="json")
    def _serialize_build_id(self, value: bytes) -> str:
        return value.hex()


class UnknownNote(_FrozenModel):
    """Marker for notes without a vendor interpretation."""
    kind: Literal["unknown"] = "unknown"


NoteDetail = Annotated[
    Union[GnuAbiTag, GnuBuildId, UnknownNote],
    Field(discriminator="kind"),
]


class NoteRecord(_FrozenModel):
    """A note record (``Elf_Nhdr`` plus its name and descriptor).

    Attributes:
        name_size: ``n_namesz`` as stored (includes the trailing NUL).
        desc_size: ``n_descsz`` as stored.
        type_tag: ``n_type``.
        name: ``name_size`` raw name bytes.
        description: ``desc_size`` raw descriptor bytes; empty when
            ``desc_size`` is zero.
        detail: Vendor interpretation of the descriptor.
    """
    name_size: int
    desc_size: int
    type_tag: int
    name: bytes
    description: bytes = b""
    detail: NoteDetail = Field(default_factory=UnknownNote)

    @property
    def name_text(self) -> str:
        """The name up to its first NUL, decoded for display."""
        return self.name.split(b"\x00", 1)[0].decode("ascii", errors="replace")

    @field_serializer("name", "description", when_used="json")
    def _serialize_bytes(self, value: bytes) -> str:
        return value.hex()


# ---------------------------------------------------------------------------
# Entry payloads
# ---------------------------------------------------------------------------

class InterpreterPayload(_FrozenModel):
    """``PT_INTERP``: path of the requested program interpreter."""
    kind: Literal["interpreter"] = "interpreter"
    path: str


class NotePayload(_FrozenModel):
    """``PT_NOTE`` / ``SHT_NOTE``: the first note record of the entry."""
    kind: Literal["note"] = "note"
    note: NoteRecord


class StringTablePayload(_FrozenModel):
    """``SHT_STRTAB``: the table bytes, verbatim (not NUL-trimmed)."""
    kind: Literal["string_table"] = "string_table"
    data: bytes

    @field_serializer("data", when_used="json")
    def _serialize_data(self, value: bytes) -> str:
        return value.hex()


ProgramPayload = Annotated[
    Union[InterpreterPayload, NotePayload],
    Field(discriminator="kind"),
]

SectionPayload = Annotated[
    Union[StringTablePayload, NotePayload],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Table entries
# ---------------------------------------------------------------------------

class ProgramEntry(_FrozenModel):
    """A program header (segment) entry."""
    type: int
    flags: int
    file_offset: int
    virtual_address: int
    physical_address: int
    file_size: int
    mem_size: int
    alignment: int
    payload: Optional[ProgramPayload] = None


class SectionEntry(_FrozenModel):
    """A section header entry.

    ``name_offset`` indexes the section-name string table; resolve it with
    :func:`elfscope.core.lookup.resolve_section_name`.
    """
    name_offset: int
    type: int
    flags: int
    address: int
    file_offset: int
    size: int
    link: int
    info: int
    addr_align: int
    entry_size: int
    payload: Optional[SectionPayload] = None


# ---------------------------------------------------------------------------
# Aggregate results
# ---------------------------------------------------------------------------

class DecodedObject(_FrozenModel):
    """A fully decoded ELF object.

    Attributes:
        header: The entry header.
        program_entries: One entry per ``program_entry_count``.
        section_entries: One entry per ``section_entry_count``.
        diagnostics: Recoverable irregularities found while decoding.
    """
    header: EntryHeader
    program_entries: tuple[ProgramEntry, ...] = ()
    section_entries: tuple[SectionEntry, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def word_width(self) -> WordWidth:
        return self.header.identification.word_width

    @property
    def endianness(self) -> Endianness:
        return self.header.identification.endianness


class InspectionReport(BaseModel):
    """Result of inspecting one file through the engine.

    Attributes:
        target: Path of the inspected file.
        size: File size in bytes.
        start_time: UTC timestamp when inspection started.
        end_time: UTC timestamp when inspection ended.
        elf: The decoded object.
    """
    target: str
    size: int = 0
    start_time: _dt.datetime = Field(
        default_factory=lambda: _dt.datetime.now(_dt.timezone.utc)
    )
    end_time: Optional[_dt.datetime] = None
    elf: DecodedObject

    @property
    def duration_seconds(self) -> float | None:
        """Elapsed inspection time in seconds, or ``None`` if unfinished."""
        if self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds()

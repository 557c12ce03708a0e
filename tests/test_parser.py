"""Tests for the ELF decoder."""

import struct

import pytest

from elfscope.core.exceptions import (
    DecodeError,
    EntrySizeError,
    InvalidMagicError,
    OutOfBoundsError,
    SizeTooSmallError,
)
from elfscope.core.models import (
    DecodedObject,
    Endianness,
    FormatVersion,
    InterpreterPayload,
    NotePayload,
    StringTablePayload,
    WordWidth,
)
from elfscope.parsers import decode
from elfscope.parsers.constants import (
    EM_ARM,
    ET_DYN,
    ET_INVALID,
    PF_R,
    PF_W,
    PT_INTERP,
    PT_LOAD,
    PT_NOTE,
    SHT_NOBITS,
    SHT_NULL,
    SHT_PROGBITS,
    SHT_STRTAB,
    SMALLEST_POSSIBLE_ELF,
)

from tests.elf_builder import INTERPRETER, ElfBuilder, build_sample


class TestSizeAndMagic:
    """Tests for the fatal pre-checks."""

    @pytest.mark.parametrize("size", [0, 4, 16, SMALLEST_POSSIBLE_ELF - 1])
    def test_too_small(self, size):
        """Short buffers fail with SizeTooSmallError, even with valid magic."""
        data = (b"\x7fELF" + b"\x02\x01\x01" + b"\x00" * 64)[:size]
        with pytest.raises(SizeTooSmallError) as excinfo:
            decode(data)
        assert excinfo.value.size == size
        assert excinfo.value.minimum == 52

    def test_bad_magic(self):
        """A 64-byte buffer with wrong magic fails on the magic check."""
        data = b"\x7fELG" + b"\xff" * 60
        with pytest.raises(InvalidMagicError):
            decode(data)

    def test_errors_share_base(self):
        """Every fatal decode error is a DecodeError."""
        assert issubclass(SizeTooSmallError, DecodeError)
        assert issubclass(InvalidMagicError, DecodeError)
        assert issubclass(OutOfBoundsError, DecodeError)
        assert issubclass(EntrySizeError, DecodeError)

    def test_truncated_64bit_header(self):
        """A 52-byte buffer claiming ELF64 runs out of header bytes."""
        data = ElfBuilder(bits=64).build()[:52]
        with pytest.raises(OutOfBoundsError):
            decode(data)


class TestHeaderFields:
    """Scalar field extraction for every class and byte order."""

    def test_scalar_fields(self, variant):
        """Every header field reads back exactly as written."""
        bits, order = variant
        builder = ElfBuilder(
            bits=bits, byte_order=order, object_type=ET_DYN, machine=EM_ARM,
            entry=0x8040_1234, flags=0x0500_0002, abi=3, abi_version=1,
            entry_padding=8,
        )
        builder.add_program(PT_LOAD, data=b"\x90" * 8, flags=PF_R)
        builder.add_section(None, SHT_NULL)
        elf = decode(builder.build())
        header = elf.header

        assert elf.word_width is (WordWidth.BITS_64 if bits == 64 else WordWidth.BITS_32)
        assert elf.endianness is (Endianness.LITTLE if order == "<" else Endianness.BIG)
        assert header.identification.abi == 3
        assert header.identification.abi_version == 1
        assert header.object_type == ET_DYN
        assert header.machine == EM_ARM
        assert header.version is FormatVersion.CURRENT
        assert header.entry_point == 0x8040_1234
        assert header.flags == 0x0500_0002
        assert header.header_size == (64 if bits == 64 else 52)
        assert header.program_table_offset == builder.program_table_offset
        assert header.section_table_offset == builder.section_table_offset
        assert 0 < header.program_table_offset < header.section_table_offset
        assert header.program_entry_size == builder.program_entry_size
        assert header.section_entry_size == builder.section_entry_size
        assert header.program_entry_count == 1
        assert header.section_entry_count == 2
        assert header.section_name_table_index == 1
        assert elf.diagnostics == ()

    def test_64bit_entry_point_full_width(self):
        """ELF64 addresses keep all 64 bits."""
        elf = decode(ElfBuilder(bits=64, entry=0xFFFF_8000_0000_1000).build())
        assert elf.header.entry_point == 0xFFFF_8000_0000_1000

    def test_invalid_object_type(self):
        """An unknown e_type is coerced with a diagnostic."""
        elf = decode(ElfBuilder(object_type=0x1234).build())
        assert elf.header.object_type == ET_INVALID
        assert elf.header.raw_object_type == 0x1234
        assert [d.field for d in elf.diagnostics] == ["header.type"]

    def test_invalid_header_version(self):
        """e_version other than 1 is coerced with a diagnostic."""
        elf = decode(ElfBuilder(version=7).build())
        assert elf.header.version is FormatVersion.INVALID
        assert elf.header.raw_version == 7
        assert elf.diagnostics[0].field == "header.version"

    def test_invalid_class_decodes_as_64bit(self):
        """An unknown class still decodes, using the 64-bit layout."""
        elf = decode(ElfBuilder(bits=64, raw_class=9, entry=0x1122334455).build())
        assert elf.word_width is WordWidth.INVALID
        assert elf.header.entry_point == 0x1122334455
        assert elf.diagnostics[0].field == "ident.class"

    def test_invalid_data_decodes_big_endian(self):
        """An unknown data encoding reads as big-endian."""
        elf = decode(ElfBuilder(byte_order=">", raw_data=0, machine=EM_ARM).build())
        assert elf.endianness is Endianness.INVALID
        assert elf.header.machine == EM_ARM


class TestMinimalObject:
    """A minimal 64-bit little-endian object with one NULL section."""

    def test_single_null_section(self):
        """No program entries and a single section without payload."""
        builder = ElfBuilder(bits=64, byte_order="<", auto_shstrtab=False)
        builder.add_section(None, SHT_NULL)
        elf = decode(builder.build())

        assert isinstance(elf, DecodedObject)
        assert elf.program_entries == ()
        assert len(elf.section_entries) == 1
        assert elf.section_entries[0].type == SHT_NULL
        assert elf.section_entries[0].payload is None


class TestTables:
    """Tests for program and section table decoding."""

    def test_sample_counts(self, variant):
        """Exactly count entries are decoded per table."""
        bits, order = variant
        elf = decode(build_sample(bits, order))
        assert len(elf.program_entries) == elf.header.program_entry_count == 3
        assert len(elf.section_entries) == elf.header.section_entry_count == 5

    def test_program_fields_and_flags_position(self, variant):
        """The flags word lands in the same model field for both layouts."""
        bits, order = variant
        builder = ElfBuilder(bits=bits, byte_order=order)
        builder.add_program(
            PT_LOAD, flags=PF_R | PF_W, offset=0x10, vaddr=0x1000, paddr=0x2000,
            filesz=0x30, memsz=0x40, align=0x1000,
        )
        entry = decode(builder.build()).program_entries[0]
        assert entry.type == PT_LOAD
        assert entry.flags == PF_R | PF_W
        assert entry.file_offset == 0x10
        assert entry.virtual_address == 0x1000
        assert entry.physical_address == 0x2000
        assert entry.file_size == 0x30
        assert entry.mem_size == 0x40
        assert entry.alignment == 0x1000
        assert entry.payload is None

    def test_section_fields(self, variant):
        """Section fields read back exactly as written."""
        bits, order = variant
        builder = ElfBuilder(bits=bits, byte_order=order)
        builder.add_section(
            ".bss", SHT_NOBITS, flags=3, addr=0x601000, offset=0x200,
            size=0x80, link=1, info=2, addralign=32, entsize=0,
        )
        section = decode(builder.build()).section_entries[0]
        assert section.type == SHT_NOBITS
        assert section.flags == 3
        assert section.address == 0x601000
        assert section.file_offset == 0x200
        assert section.size == 0x80
        assert section.link == 1
        assert section.info == 2
        assert section.addr_align == 32
        assert section.payload is None

    def test_entry_size_drives_seeking(self, variant):
        """Trailing bytes beyond the known fields do not shift later entries."""
        bits, order = variant
        plain = build_sample(bits, order)
        padded = build_sample(bits, order, entry_padding=24, padding_byte=0xA5)

        a = decode(plain)
        b = decode(padded)
        assert b.header.program_entry_size == a.header.program_entry_size + 24
        strip = {"file_offset", "payload"}
        for left, right in zip(a.program_entries, b.program_entries):
            assert left.model_dump(exclude=strip) == right.model_dump(exclude=strip)
        assert [s.type for s in a.section_entries] == [s.type for s in b.section_entries]
        assert [s.name_offset for s in a.section_entries] == [
            s.name_offset for s in b.section_entries
        ]

    def test_garbage_padding_has_no_effect(self):
        """Changing only the padding bytes leaves the decoded object unchanged."""
        one = decode(build_sample(entry_padding=16, padding_byte=0x00))
        two = decode(build_sample(entry_padding=16, padding_byte=0xFF))
        assert one == two

    def test_table_past_end_of_buffer(self):
        """A count that reaches past the end is rejected up front."""
        builder = ElfBuilder()
        builder.add_program(PT_LOAD)
        data = bytearray(builder.build())
        struct.pack_into("<H", data, 56, 500)  # e_phnum
        with pytest.raises(OutOfBoundsError):
            decode(bytes(data))

    def test_zero_count_reads_nothing(self):
        """A zero count ignores a bogus table offset."""
        data = bytearray(ElfBuilder().build())
        struct.pack_into("<Q", data, 32, 0xFFFF_FFFF)  # e_phoff
        assert decode(bytes(data)).program_entries == ()

    @pytest.mark.parametrize("entry_size", [0, 1, 63])
    def test_undersized_section_entries_rejected(self, entry_size):
        """Section entries smaller than Elf64_Shdr would overlap and re-read."""
        builder = ElfBuilder()
        builder.add_section(".blob", SHT_STRTAB, data=b"\x00" * 4096)
        data = bytearray(builder.build())
        struct.pack_into("<HH", data, 58, entry_size, 20000)  # e_shentsize, e_shnum
        with pytest.raises(EntrySizeError) as excinfo:
            decode(bytes(data))
        assert excinfo.value.table == "section header"
        assert excinfo.value.entry_size == entry_size
        assert excinfo.value.minimum == 64

    def test_undersized_program_entries_rejected(self):
        """ELF32 program entries need at least 32 bytes each."""
        builder = ElfBuilder(bits=32)
        builder.add_program(PT_LOAD)
        data = bytearray(builder.build())
        struct.pack_into("<H", data, 42, 0)  # e_phentsize
        with pytest.raises(EntrySizeError) as excinfo:
            decode(bytes(data))
        assert excinfo.value.minimum == 32

    def test_zero_entry_size_with_zero_count(self):
        """An empty table may declare any entry size."""
        data = bytearray(ElfBuilder().build())
        struct.pack_into("<HH", data, 54, 0, 0)  # e_phentsize, e_phnum
        struct.pack_into("<HH", data, 58, 0, 0)  # e_shentsize, e_shnum
        elf = decode(bytes(data))
        assert elf.program_entries == ()
        assert elf.section_entries == ()


class TestPayloads:
    """Tests for per-entry payload dispatch."""

    def test_interpreter(self, variant):
        """PT_INTERP carries the NUL-trimmed path from the file offset."""
        bits, order = variant
        elf = decode(build_sample(bits, order))
        interp = elf.program_entries[0]
        assert interp.type == PT_INTERP
        assert isinstance(interp.payload, InterpreterPayload)
        assert interp.payload.path == INTERPRETER.rstrip(b"\x00").decode()

    def test_interpreter_ignores_virtual_address(self):
        """The path comes from p_offset, not p_vaddr."""
        builder = ElfBuilder()
        builder.add_program(PT_INTERP, data=b"/lib/ld.so\x00", vaddr=0xDEAD0000)
        elf = decode(builder.build())
        assert elf.program_entries[0].payload.path == "/lib/ld.so"

    def test_interpreter_out_of_bounds(self):
        """A path running past the end of the file is fatal."""
        builder = ElfBuilder()
        builder.add_program(PT_INTERP, offset=0x10, filesz=0x10000)
        with pytest.raises(OutOfBoundsError):
            decode(builder.build())

    def test_string_table_verbatim(self):
        """SHT_STRTAB bytes are kept exactly, including NULs."""
        table = b"\x00.text\x00.data\x00"
        builder = ElfBuilder(auto_shstrtab=False)
        builder.add_section(None, SHT_STRTAB, data=table)
        payload = decode(builder.build()).section_entries[0].payload
        assert isinstance(payload, StringTablePayload)
        assert payload.data == table

    def test_note_segment_and_section(self, variant):
        """PT_NOTE and SHT_NOTE both carry the first note record."""
        bits, order = variant
        elf = decode(build_sample(bits, order))
        segment = elf.program_entries[2]
        section = elf.section_entries[3]
        assert segment.type == PT_NOTE
        assert isinstance(segment.payload, NotePayload)
        assert isinstance(section.payload, NotePayload)
        assert segment.payload.note == section.payload.note
        assert segment.payload.note.detail.hex == "deadbeef"

    def test_nobits_has_no_payload(self):
        """SHT_NOBITS never reads file bytes, even with a bogus offset."""
        builder = ElfBuilder(auto_shstrtab=False)
        builder.add_section(".bss", SHT_NOBITS, offset=0xFFFF_0000, size=0x1000)
        assert decode(builder.build()).section_entries[0].payload is None

    def test_progbits_has_no_payload(self):
        """Ordinary sections carry no payload."""
        builder = ElfBuilder(auto_shstrtab=False)
        builder.add_section(".text", SHT_PROGBITS, data=b"\xc3")
        assert decode(builder.build()).section_entries[0].payload is None


class TestOwnership:
    """The decoded object does not depend on the input buffer."""

    def test_mutating_buffer_after_decode(self):
        """Payloads are copies of the input bytes."""
        data = bytearray(build_sample())
        elf = decode(data)
        before = elf.model_dump()
        data[:] = b"\x00" * len(data)
        assert elf.model_dump() == before

    def test_decode_is_repeatable(self, sample_elf):
        """Decoding the same bytes twice yields equal objects."""
        assert decode(sample_elf) == decode(sample_elf)

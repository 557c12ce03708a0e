"""
Word-Width Layouts
===================

ELF32 and ELF64 lay out their program and section entries differently:
addresses, offsets and sizes are 4 or 8 bytes wide, and the program
entry moves ``p_flags`` from the end (ELF32) to right after ``p_type``
(ELF64) for alignment.  Each layout hides those differences behind the
same two methods, and :func:`select_layout` picks one once after the
identification is known.

Both methods read from the cursor's current position and leave any
trailing bytes of the entry unread; the table decoder seeks to each
entry by ``entry_size``.
"""

from __future__ import annotations

from typing import NamedTuple

from elfscope.core.models import Endianness, WordWidth
from elfscope.parsers.cursor import ByteCursor


class ProgramFields(NamedTuple):
    type: int
    flags: int
    file_offset: int
    virtual_address: int
    physical_address: int
    file_size: int
    mem_size: int
    alignment: int


class SectionFields(NamedTuple):
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


class Layout:
    """Shared field reads; subclasses fix the word width."""

    word_width: WordWidth = WordWidth.INVALID
    program_entry_size: int = 0
    section_entry_size: int = 0

    def read_word(self, cursor: ByteCursor, endianness: Endianness) -> int:
        return cursor.read_word(self.word_width, endianness)

    def read_program_entry(
        self, cursor: ByteCursor, endianness: Endianness
    ) -> ProgramFields:
        raise NotImplementedError

    def read_section_entry(
        self, cursor: ByteCursor, endianness: Endianness
    ) -> SectionFields:
        word = self.read_word
        name_offset = cursor.read_u32(endianness)
        sh_type = cursor.read_u32(endianness)
        flags = word(cursor, endianness)
        address = word(cursor, endianness)
        file_offset = word(cursor, endianness)
        size = word(cursor, endianness)
        link = cursor.read_u32(endianness)
        info = cursor.read_u32(endianness)
        addr_align = word(cursor, endianness)
        entry_size = word(cursor, endianness)
        return SectionFields(
            name_offset, sh_type, flags, address, file_offset,
            size, link, info, addr_align, entry_size,
        )


class Elf32Layout(Layout):
    """``Elf32_Phdr`` (32 bytes) and ``Elf32_Shdr`` (40 bytes)."""

    word_width = WordWidth.BITS_32
    program_entry_size = 32
    section_entry_size = 40

    def read_program_entry(
        self, cursor: ByteCursor, endianness: Endianness
    ) -> ProgramFields:
        u32 = cursor.read_u32
        p_type = u32(endianness)
        p_offset = u32(endianness)
        p_vaddr = u32(endianness)
        p_paddr = u32(endianness)
        p_filesz = u32(endianness)
        p_memsz = u32(endianness)
        p_flags = u32(endianness)
        p_align = u32(endianness)
        return ProgramFields(
            p_type, p_flags, p_offset, p_vaddr,
            p_paddr, p_filesz, p_memsz, p_align,
        )


class Elf64Layout(Layout):
    """``Elf64_Phdr`` (56 bytes) and ``Elf64_Shdr`` (64 bytes).

    Also used when the class byte is invalid.
    """

    word_width = WordWidth.BITS_64
    program_entry_size = 56
    section_entry_size = 64

    def read_program_entry(
        self, cursor: ByteCursor, endianness: Endianness
    ) -> ProgramFields:
        u64 = cursor.read_u64
        p_type = cursor.read_u32(endianness)
        p_flags = cursor.read_u32(endianness)
        p_offset = u64(endianness)
        p_vaddr = u64(endianness)
        p_paddr = u64(endianness)
        p_filesz = u64(endianness)
        p_memsz = u64(endianness)
        p_align = u64(endianness)
        return ProgramFields(
            p_type, p_flags, p_offset, p_vaddr,
            p_paddr, p_filesz, p_memsz, p_align,
        )


_ELF32 = Elf32Layout()
_ELF64 = Elf64Layout()


def select_layout(word_width: WordWidth) -> Layout:
    """Return the layout for *word_width*; ``INVALID`` reads as ELF64."""
    if word_width is WordWidth.BITS_32:
        return _ELF32
    return _ELF64

"""
ElfScope Parsers
=================

Byte-level decoding of ELF images.

- ``cursor``     -- Bounds-checked byte reader
- ``ident``      -- ``e_ident`` decoding
- ``validation`` -- Warn-and-coerce field validators
- ``layouts``    -- ELF32 / ELF64 entry layouts
- ``notes``      -- Note records and GNU vendor notes
- ``payloads``   -- Per-entry payload dispatch
- ``elf_parser`` -- Header and table decoding, :func:`decode`
"""

from elfscope.parsers.elf_parser import decode

__all__ = [
    "decode",
]

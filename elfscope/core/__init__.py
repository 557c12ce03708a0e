"""
ElfScope Core Module
=====================

Data models, exceptions and the section-name lookup.  The engine lives in
:mod:`elfscope.core.engine` and is imported from there, since it depends on
the parsers, which in turn depend on this package.
"""

from elfscope.core.exceptions import (
    DecodeError,
    ElfScopeError,
    EntrySizeError,
    FileReadError,
    FileTooLargeError,
    InvalidMagicError,
    OutOfBoundsError,
    SizeTooSmallError,
)
from elfscope.core.lookup import resolve_section_name
from elfscope.core.models import (
    DecodedObject,
    Endianness,
    EntryHeader,
    InspectionReport,
    NoteRecord,
    ProgramEntry,
    SectionEntry,
    WordWidth,
)

__all__ = [
    "DecodeError",
    "ElfScopeError",
    "EntrySizeError",
    "FileReadError",
    "FileTooLargeError",
    "InvalidMagicError",
    "OutOfBoundsError",
    "SizeTooSmallError",
    "resolve_section_name",
    "DecodedObject",
    "Endianness",
    "EntryHeader",
    "InspectionReport",
    "NoteRecord",
    "ProgramEntry",
    "SectionEntry",
    "WordWidth",
]

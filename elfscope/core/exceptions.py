"""
ElfScope Exceptions
====================

Exception hierarchy for the ElfScope decoder and its file front door.

Fatal decode conditions (buffer too small, wrong magic, an offset or
length reaching past the end of the buffer, a table entry size below the
record size) raise a :class:`DecodeError` subclass.  Recoverable conditions never raise; they become
:class:`~shared.models.Diagnostic` entries on the decoded object.
"""

from __future__ import annotations


class ElfScopeError(Exception):
    """Base exception for ElfScope errors."""


# ---------------------------------------------------------------------------
# Decode errors
# ---------------------------------------------------------------------------

class DecodeError(ElfScopeError):
    """The buffer could not be decoded as an ELF object."""


class SizeTooSmallError(DecodeError):
    """Buffer is shorter than the smallest possible ELF header."""

    def __init__(self, size: int, minimum: int) -> None:
        self.size = size
        self.minimum = minimum
        super().__init__(
            f"file too small: {size} bytes, an ELF file needs at least "
            f"{minimum} bytes"
        )


class InvalidMagicError(DecodeError):
    """The first four bytes are not ``\\x7fELF``."""

    def __init__(self, magic: bytes) -> None:
        self.magic = magic
        super().__init__(
            f"not a valid ELF binary (wrong magic: {magic.hex(' ')})"
        )


class OutOfBoundsError(DecodeError):
    """A read would cross the end of the buffer."""

    def __init__(self, offset: int, length: int, size: int) -> None:
        self.offset = offset
        self.length = length
        self.size = size
        super().__init__(
            f"read of {length} bytes at offset 0x{offset:x} is out of "
            f"bounds (buffer is {size} bytes)"
        )


class EntrySizeError(DecodeError):
    """A table declares entries smaller than the fixed record it holds."""

    def __init__(self, table: str, entry_size: int, minimum: int) -> None:
        self.table = table
        self.entry_size = entry_size
        self.minimum = minimum
        super().__init__(
            f"{table} entry size {entry_size} is smaller than the "
            f"{minimum}-byte record"
        )


# ---------------------------------------------------------------------------
# File acquisition errors
# ---------------------------------------------------------------------------

class FileReadError(ElfScopeError):
    """Failed to open or read the input file."""


class FileTooLargeError(FileReadError):
    """Input file exceeds the configured size limit."""

"""
ELF Identification
===================

Decoder for the 16-byte ``e_ident`` prefix shared by every ELF file.

The magic is checked first; nothing that depends on byte order is read
before it.  Class, data encoding and version are validated and coerced
to their ``INVALID`` sentinels when unrecognized, with a diagnostic for
each.
"""

from __future__ import annotations

from shared.models import Diagnostic

from elfscope.core.exceptions import InvalidMagicError
from elfscope.core.models import Identification
from elfscope.parsers.constants import EI_PAD_SIZE, ELF_MAGIC
from elfscope.parsers.cursor import ByteCursor
from elfscope.parsers.validation import (
    validate_class,
    validate_endianness,
    validate_version,
)


def check_magic(cursor: ByteCursor) -> None:
    """Raise :class:`InvalidMagicError` unless the buffer starts with ``\\x7fELF``."""
    magic = cursor.read_at(0, len(ELF_MAGIC))
    if magic != ELF_MAGIC:
        raise InvalidMagicError(magic)


def decode_identification(
    cursor: ByteCursor,
) -> tuple[Identification, list[Diagnostic]]:
    """Decode ``e_ident`` starting at offset 0.

    On return the cursor is positioned at ``EI_NIDENT`` (16), the first
    byte of ``e_type``.

    Raises:
        InvalidMagicError: The first four bytes are not the ELF magic.
        OutOfBoundsError: The buffer is shorter than ``EI_NIDENT``.
    """
    check_magic(cursor)
    cursor.seek(len(ELF_MAGIC))

    raw_class = cursor.read_u8()
    raw_data = cursor.read_u8()
    raw_version = cursor.read_u8()
    abi = cursor.read_u8()
    abi_version = cursor.read_u8()
    cursor.skip(EI_PAD_SIZE)

    diagnostics: list[Diagnostic] = []
    word_width, diag = validate_class(raw_class)
    if diag is not None:
        diagnostics.append(diag)
    endianness, diag = validate_endianness(raw_data)
    if diag is not None:
        diagnostics.append(diag)
    format_version, diag = validate_version(raw_version)
    if diag is not None:
        diagnostics.append(diag)

    identification = Identification(
        word_width=word_width,
        endianness=endianness,
        format_version=format_version,
        abi=abi,
        abi_version=abi_version,
        raw_class=raw_class,
        raw_data=raw_data,
        raw_version=raw_version,
    )
    return identification, diagnostics

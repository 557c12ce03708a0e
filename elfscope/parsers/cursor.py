"""
Byte Cursor
============

A bounds-checked reader over an immutable byte buffer.

Every scalar read takes the byte order as an argument (it comes from the
decoded identification and is never hard-coded here), checks that the
read fits in the buffer *before* touching it, and advances the position
by the read width.  :meth:`ByteCursor.read_at` copies an arbitrary range
without moving the position; the returned ``bytes`` are owned by the
caller and stay valid after the cursor is released.

The cursor knows nothing about ELF.
"""

from __future__ import annotations

import struct
from typing import Any

from elfscope.core.exceptions import OutOfBoundsError
from elfscope.core.models import Endianness, WordWidth


_U16 = "H"
_U32 = "I"
_U64 = "Q"


class ByteCursor:
    """Sequential, bounds-checked reader over a byte buffer.

    Usage::

        with ByteCursor(data) as cursor:
            magic = cursor.read_at(0, 4)
            cursor.seek(16)
            e_type = cursor.read_u16(Endianness.LITTLE)
    """

    __slots__ = ("_view", "_size", "_pos")

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._view = memoryview(data).cast("B")
        self._size = len(self._view)
        self._pos = 0

    # ------------------------------------------------------------------ #
    #  Lifecycle
    # ------------------------------------------------------------------ #

    def __enter__(self) -> ByteCursor:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.release()

    def release(self) -> None:
        """Drop the view on the underlying buffer."""
        self._view.release()

    # ------------------------------------------------------------------ #
    #  Position
    # ------------------------------------------------------------------ #

    @property
    def size(self) -> int:
        return self._size

    def tell(self) -> int:
        return self._pos

    def remaining(self) -> int:
        return self._size - self._pos

    def seek(self, offset: int) -> None:
        """Move to an absolute offset (the end of the buffer is allowed)."""
        if offset < 0 or offset > self._size:
            raise OutOfBoundsError(offset, 0, self._size)
        self._pos = offset

    def skip(self, count: int) -> None:
        self._check(self._pos, count)
        self._pos += count

    # ------------------------------------------------------------------ #
    #  Reads
    # ------------------------------------------------------------------ #

    def read_u8(self) -> int:
        self._check(self._pos, 1)
        value = self._view[self._pos]
        self._pos += 1
        return value

    def read_u16(self, endianness: Endianness) -> int:
        return self._unpack(endianness, _U16, 2)

    def read_u32(self, endianness: Endianness) -> int:
        return self._unpack(endianness, _U32, 4)

    def read_u64(self, endianness: Endianness) -> int:
        return self._unpack(endianness, _U64, 8)

    def read_word(self, word_width: WordWidth, endianness: Endianness) -> int:
        """Read an address-sized field: 32 bits for ELF32, else 64 bits."""
        if word_width is WordWidth.BITS_32:
            return self.read_u32(endianness)
        return self.read_u64(endianness)

    def read_at(self, offset: int, length: int) -> bytes:
        """Copy *length* bytes starting at absolute *offset*.

        The position is left unchanged.
        """
        self._check(offset, length)
        return self._view[offset:offset + length].tobytes()

    # ------------------------------------------------------------------ #
    #  Internal helpers
    # ------------------------------------------------------------------ #

    def _check(self, offset: int, length: int) -> None:
        if offset < 0 or length < 0 or offset + length > self._size:
            raise OutOfBoundsError(offset, length, self._size)

    def _unpack(self, endianness: Endianness, code: str, width: int) -> int:
        self._check(self._pos, width)
        (value,) = struct.unpack_from(
            endianness.struct_prefix + code, self._view, self._pos
        )
        self._pos += width
        return value

"""Tests for identification decoding and field validation."""

import pytest

from shared.models import Severity

from elfscope.core.exceptions import InvalidMagicError
from elfscope.core.models import Endianness, FormatVersion, WordWidth
from elfscope.parsers.constants import ET_CORE, ET_INVALID, ET_LOOS, ET_LOPROC
from elfscope.parsers.cursor import ByteCursor
from elfscope.parsers.ident import decode_identification
from elfscope.parsers.validation import (
    validate_class,
    validate_endianness,
    validate_object_type,
    validate_version,
)


def ident_bytes(cls=2, data=1, version=1, abi=3, abi_version=0, magic=b"\x7fELF"):
    return magic + bytes([cls, data, version, abi, abi_version]) + b"\x00" * 7


class TestDecodeIdentification:
    """Tests for decode_identification."""

    def test_valid_ident(self):
        """A well-formed prefix decodes without diagnostics."""
        ident, diagnostics = decode_identification(ByteCursor(ident_bytes()))
        assert ident.word_width is WordWidth.BITS_64
        assert ident.endianness is Endianness.LITTLE
        assert ident.format_version is FormatVersion.CURRENT
        assert ident.abi == 3
        assert diagnostics == []

    def test_cursor_left_after_padding(self):
        """The cursor ends on the first byte of e_type."""
        cursor = ByteCursor(ident_bytes() + b"\x02\x00")
        decode_identification(cursor)
        assert cursor.tell() == 16

    def test_bad_magic(self):
        """Wrong magic is fatal."""
        with pytest.raises(InvalidMagicError) as excinfo:
            decode_identification(ByteCursor(ident_bytes(magic=b"MZ\x90\x00")))
        assert excinfo.value.magic == b"MZ\x90\x00"
        assert "wrong magic" in str(excinfo.value)

    def test_invalid_fields_are_coerced(self):
        """Unknown class, data and version become INVALID with diagnostics."""
        ident, diagnostics = decode_identification(
            ByteCursor(ident_bytes(cls=7, data=9, version=4))
        )
        assert ident.word_width is WordWidth.INVALID
        assert ident.endianness is Endianness.INVALID
        assert ident.format_version is FormatVersion.INVALID
        assert (ident.raw_class, ident.raw_data, ident.raw_version) == (7, 9, 4)
        assert [d.field for d in diagnostics] == [
            "ident.class", "ident.endianness", "ident.version",
        ]


class TestValidators:
    """Tests for the pure validators."""

    @pytest.mark.parametrize("raw,expected", [(1, WordWidth.BITS_32), (2, WordWidth.BITS_64)])
    def test_valid_class(self, raw, expected):
        """Classes 1 and 2 are accepted."""
        assert validate_class(raw) == (expected, None)

    @pytest.mark.parametrize("raw", [0, 3, 255])
    def test_invalid_class(self, raw):
        """Any other class yields a warning diagnostic."""
        width, diag = validate_class(raw)
        assert width is WordWidth.INVALID
        assert diag.raw_value == raw
        assert diag.replacement == 0
        assert diag.severity is Severity.WARNING

    def test_endianness(self):
        """Data encodings 1 and 2 are accepted, 0 is not."""
        assert validate_endianness(2) == (Endianness.BIG, None)
        value, diag = validate_endianness(0)
        assert value is Endianness.INVALID
        assert diag is not None

    def test_version_field_name(self):
        """The diagnostic names the field it was called for."""
        value, diag = validate_version(0, field="header.version")
        assert value is FormatVersion.INVALID
        assert diag.field == "header.version"

    @pytest.mark.parametrize("raw", [0, ET_CORE, ET_LOOS, 0xFEFF, ET_LOPROC, 0xFFFF])
    def test_object_type_known_bands(self, raw):
        """Standard, OS-reserved and processor-reserved types pass through."""
        assert validate_object_type(raw) == (raw, None)

    @pytest.mark.parametrize("raw", [5, 0x1234, 0xFDFF])
    def test_object_type_unknown(self, raw):
        """Types outside every band become ET_INVALID."""
        value, diag = validate_object_type(raw)
        assert value == ET_INVALID
        assert diag.raw_value == raw
        assert str(diag).startswith("header.type: ")

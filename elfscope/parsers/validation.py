"""
Field Validation
=================

Pure "warn and coerce" validators for enumerated header fields.

Each validator returns ``(normalized_value, diagnostic)`` where
``diagnostic`` is ``None`` when the raw value is acceptable.  Nothing is
printed or logged here; the decoder collects the diagnostics on the
decoded object.
"""

from __future__ import annotations

from typing import Optional

from shared.models import Diagnostic, Severity

from elfscope.core.models import Endianness, FormatVersion, WordWidth
from elfscope.parsers.constants import (
    ET_CORE,
    ET_HIPROC,
    ET_INVALID,
    ET_LOOS,
    ET_NONE,
)


Validated = tuple[int, Optional[Diagnostic]]


def _invalid(field: str, raw: int, replacement: int, what: str) -> Diagnostic:
    return Diagnostic(
        severity=Severity.WARNING,
        field=field,
        raw_value=raw,
        replacement=replacement,
        message=f"ELF has unknown or invalid {what} {raw}",
    )


def validate_class(raw: int) -> tuple[WordWidth, Optional[Diagnostic]]:
    """Normalize ``EI_CLASS``; anything but 1 or 2 becomes ``INVALID``."""
    try:
        width = WordWidth(raw)
    except ValueError:
        width = WordWidth.INVALID
    if width is WordWidth.INVALID:
        return width, _invalid("ident.class", raw, WordWidth.INVALID, "class")
    return width, None


def validate_endianness(raw: int) -> tuple[Endianness, Optional[Diagnostic]]:
    """Normalize ``EI_DATA``; anything but 1 or 2 becomes ``INVALID``."""
    try:
        endianness = Endianness(raw)
    except ValueError:
        endianness = Endianness.INVALID
    if endianness is Endianness.INVALID:
        return endianness, _invalid(
            "ident.endianness", raw, Endianness.INVALID, "endianness"
        )
    return endianness, None


def validate_version(
    raw: int, field: str = "ident.version"
) -> tuple[FormatVersion, Optional[Diagnostic]]:
    """Normalize a format version; only ``EV_CURRENT`` (1) is valid."""
    if raw == FormatVersion.CURRENT:
        return FormatVersion.CURRENT, None
    return FormatVersion.INVALID, _invalid(
        field, raw, FormatVersion.INVALID, "version"
    )


def validate_object_type(raw: int) -> Validated:
    """Normalize ``e_type``.

    The standard types (NONE..CORE) and the OS-reserved
    (``0xFE00-0xFEFF``) and processor-reserved (``0xFF00-0xFFFF``) bands
    are accepted as-is; any other value becomes ``ET_INVALID``.
    """
    if ET_NONE <= raw <= ET_CORE or ET_LOOS <= raw <= ET_HIPROC:
        return raw, None
    return ET_INVALID, _invalid("header.type", raw, ET_INVALID, "type")

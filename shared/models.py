"""
ElfScope Shared Data Models
============================

Pydantic v2 models shared across ElfScope components.  A
:class:`Diagnostic` records a recoverable irregularity found while
decoding: the offending raw value, the value substituted for it, and a
human-readable message.

Diagnostics are collected into the decode result instead of being
printed, so callers decide how (and whether) to surface them.

References:
    - SARIF v2.1.0 Specification (OASIS, 2020).
    - Pydantic v2 documentation. https://docs.pydantic.dev/latest/
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# ========================== Enumerations ===================================


class Severity(str, Enum):
    """Diagnostic severity level.

    Attributes:
        ERROR:   The value is unusable and was replaced by a sentinel.
        WARNING: The value is outside every known range but decoding
                 could continue.
        INFO:    Informational observation.
    """

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"

    @property
    def style(self) -> str:
        """Rich style name used when rendering this severity."""
        return {
            "ERROR": "scope.error",
            "WARNING": "scope.warning",
            "INFO": "scope.info",
        }[self.value]


# ========================== Core Models ====================================


class Diagnostic(BaseModel):
    """A single recoverable decoding irregularity.

    Attributes:
        severity:    How serious the irregularity is.
        field:       Dotted name of the offending field (``"ident.class"``).
        raw_value:   The value found in the file.
        replacement: The value stored in the decoded structure instead.
        message:     Human-readable description.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    severity: Severity = Field(
        default=Severity.WARNING,
        description="Severity level of this diagnostic",
    )
    field: str = Field(
        ...,
        min_length=1,
        description="Name of the offending field",
    )
    raw_value: int = Field(
        ...,
        description="Raw value read from the file",
    )
    replacement: int = Field(
        ...,
        description="Value substituted in the decoded structure",
    )
    message: str = Field(
        ...,
        min_length=1,
        description="Human-readable explanation",
    )

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"

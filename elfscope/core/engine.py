"""
ElfScope Engine
================

Front door between the filesystem and the decoder.

The engine reads a file into memory (refusing files above the configured
size limit), hands the bytes to :func:`elfscope.parsers.decode`, and
wraps the decoded object in an :class:`InspectionReport` with timing
metadata.  Decoding itself is pure; the engine is where logging happens:
start/finish, elapsed time, and one record per diagnostic at the level
matching its severity.

Pipeline:
    1. Stat and read the file (``FileReadError`` / ``FileTooLargeError``)
    2. Decode the buffer (``DecodeError`` subclasses propagate)
    3. Log diagnostics and build the report
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from shared.config import ScopeConfig
from shared.logger import ScopeLogger

from elfscope.core.exceptions import FileReadError, FileTooLargeError
from elfscope.core.models import DecodedObject, InspectionReport
from elfscope.parsers.elf_parser import decode


class ElfScopeEngine:
    """Loads and decodes ELF files.

    Usage::

        engine = ElfScopeEngine()
        report = engine.inspect("/bin/true")
        print(report.elf.header.entry_point)
    """

    def __init__(
        self,
        config: ScopeConfig | None = None,
        logger: ScopeLogger | None = None,
    ) -> None:
        """Initialise the engine.

        Args:
            config: ElfScope configuration.  Defaults are used if not provided.
            logger: Logger instance.  A new one is created if not provided.
        """
        self._config: ScopeConfig = config or ScopeConfig()
        self._logger: ScopeLogger = logger or ScopeLogger(
            "engine", log_level=self._config.global_settings.log_level
        )

    @property
    def config(self) -> ScopeConfig:
        return self._config

    # ------------------------------------------------------------------ #
    #  File acquisition
    # ------------------------------------------------------------------ #

    def load(self, file_path: str | Path) -> bytes:
        """Read *file_path* fully into memory.

        Raises:
            FileReadError: The file is missing, not a regular file, or
                cannot be read.
            FileTooLargeError: The file exceeds ``decoder.max_file_size``.
        """
        path = Path(file_path)
        try:
            if not path.is_file():
                raise FileReadError(f"File not found: {file_path}")

            file_size = path.stat().st_size
            max_size = self._config.decoder.max_file_size
            if file_size > max_size:
                raise FileTooLargeError(
                    f"File too large: {file_size:,} bytes "
                    f"(max: {max_size:,} bytes)"
                )
            return path.read_bytes()
        except OSError as exc:
            raise FileReadError(f"Cannot read {file_path}: {exc}") from exc

    # ------------------------------------------------------------------ #
    #  Decoding
    # ------------------------------------------------------------------ #

    def inspect(self, file_path: str | Path) -> InspectionReport:
        """Load and decode *file_path*.

        Raises:
            FileReadError: See :meth:`load`.
            DecodeError: The file is not a decodable ELF object.
        """
        started = datetime.now(timezone.utc)
        self._logger.info("Starting inspection of %s", file_path)

        data = self.load(file_path)
        elf = self.decode_data(data, str(file_path))

        report = InspectionReport(
            target=str(file_path),
            size=len(data),
            start_time=started,
            end_time=datetime.now(timezone.utc),
            elf=elf,
        )
        self._logger.info(
            "Inspection complete: %s | %d-bit | Segments: %d | Sections: %d"
            " | Diagnostics: %d",
            file_path,
            elf.word_width.bits,
            len(elf.program_entries),
            len(elf.section_entries),
            len(elf.diagnostics),
        )
        return report

    def decode_data(self, data: bytes, target: str = "<memory>") -> DecodedObject:
        """Decode raw bytes already in memory and log any diagnostics."""
        with self._logger.operation("decode"), self._logger.timed(
            f"decode {target}"
        ):
            elf = decode(data)

        for diag in elf.diagnostics:
            self._logger.diagnostic(target, diag)
        return elf

"""
ElfScope Structured Logger
===========================

:class:`ScopeLogger` routes ElfScope log records to two places:

* a Rich handler on **stderr**, so log lines never interleave with a dump
  or JSON report written to stdout;
* optionally, a rotating log file holding plain-text or JSON-lines
  records.

Records carry the component name (``tool_name``), the active
``operation`` (set with :meth:`ScopeLogger.operation`) and any extra
keyword arguments given to a log call.  Decode diagnostics are logged
through :meth:`ScopeLogger.diagnostic`, which maps their severity onto a
logging level.

The decoder never logs on its own; only the engine and the CLI do.

References:
    - Python logging HOWTO. https://docs.python.org/3/howto/logging.html
    - Rich library. https://github.com/Textualize/rich
"""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from shared.models import Diagnostic, Severity

_LOG_THEME = Theme(
    {
        "log.level.debug": "dim cyan",
        "log.level.info": "bold bright_blue",
        "log.level.warning": "bold yellow",
        "log.level.error": "bold red",
    }
)

_SEVERITY_LEVELS: dict[Severity, int] = {
    Severity.ERROR: logging.ERROR,
    Severity.WARNING: logging.WARNING,
    Severity.INFO: logging.INFO,
}

_PLAIN_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_PLAIN_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"

# LogRecord keywords that must reach the stdlib logger untouched.
_STDLIB_KWARGS = frozenset({"exc_info", "stack_info", "stacklevel"})


# ========================== Formatters / handlers ==========================


class _JSONLinesFormatter(logging.Formatter):
    """One JSON object per record.

    Example line::

        {"timestamp": "...", "level": "WARNING", "logger": "elfscope.engine",
         "message": "a.out: ELF has unknown or invalid type 4660",
         "tool_name": "engine",
         "extra": {"field": "header.type", "raw_value": 4660, "replacement": -1}}

    ``operation`` and ``extra`` are omitted when unset.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for attr in ("tool_name", "operation"):
            value = getattr(record, attr, None)
            if value is not None:
                entry[attr] = value

        extra = getattr(record, "scope_extra", None)
        if extra:
            entry["extra"] = extra
        if record.exc_info and record.exc_info[1] is not None:
            entry["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


def _stderr_handler(level: int) -> RichHandler:
    return RichHandler(
        level=level,
        console=Console(theme=_LOG_THEME, stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )


def _file_handler(
    log_file: str | Path,
    level: int,
    json_logs: bool,
    max_bytes: int,
    backup_count: int,
) -> RotatingFileHandler:
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(path),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    if json_logs:
        handler.setFormatter(_JSONLinesFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(fmt=_PLAIN_FORMAT, datefmt=_PLAIN_DATEFMT)
        )
    return handler


# ========================== ScopeLogger ====================================


class ScopeLogger:
    """Context-aware logger bound to one ElfScope component.

    Usage::

        log = ScopeLogger("engine", log_file="elfscope.log", json_logs=True)
        with log.operation("decode"), log.timed("decode /bin/true"):
            elf = decode(data)
        for diag in elf.diagnostics:
            log.diagnostic("/bin/true", diag)

    Args:
        tool_name:      Component name; the stdlib logger is
                        ``elfscope.<tool_name>``.
        log_level:      Minimum level name (``DEBUG`` .. ``ERROR``).
        log_file:       Rotating log file; ``None`` disables file output.
        json_logs:      Write JSON lines instead of plain text to the file.
        max_bytes:      File size that triggers rotation (default 10 MiB).
        backup_count:   Rotated files to keep.
        console_output: Attach the Rich stderr handler.
    """

    def __init__(
        self,
        tool_name: str,
        *,
        log_level: str = "INFO",
        log_file: str | Path | None = None,
        json_logs: bool = False,
        max_bytes: int = 10_485_760,
        backup_count: int = 5,
        console_output: bool = True,
    ) -> None:
        self._tool_name = tool_name
        self._operation: str | None = None

        level = getattr(logging, log_level.upper(), logging.INFO)
        self._logger = logging.getLogger(f"elfscope.{tool_name}")
        self._logger.setLevel(level)
        self._logger.propagate = False

        # Re-creating a logger for the same component replaces its handlers.
        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()

        if console_output:
            self._logger.addHandler(_stderr_handler(level))
        if log_file is not None:
            self._logger.addHandler(
                _file_handler(log_file, level, json_logs, max_bytes, backup_count)
            )

    # ------------------------------------------------------------------ #
    #  Context managers
    # ------------------------------------------------------------------ #

    class _Operation:
        def __init__(self, owner: ScopeLogger, name: str) -> None:
            self._owner = owner
            self._name = name
            self._outer: str | None = None

        def __enter__(self) -> ScopeLogger:
            self._outer = self._owner._operation
            self._owner._operation = self._name
            return self._owner

        def __exit__(self, *exc: Any) -> None:
            self._owner._operation = self._outer

    class _Timer:
        def __init__(self, owner: ScopeLogger, label: str) -> None:
            self._owner = owner
            self._label = label
            self._started = 0.0

        def __enter__(self) -> ScopeLogger._Timer:
            self._started = time.perf_counter()
            self._owner.debug("Started: %s", self._label)
            return self

        def __exit__(self, *exc: Any) -> None:
            self._owner.debug(
                "Completed: %s (%.3f sec)", self._label, self.elapsed
            )

        @property
        def elapsed(self) -> float:
            return time.perf_counter() - self._started

    def operation(self, name: str) -> _Operation:
        """Stamp every record logged inside the block with *name*."""
        return self._Operation(self, name)

    def timed(self, label: str) -> _Timer:
        """Log *label* at DEBUG on entry and again with the elapsed time on exit."""
        return self._Timer(self, label)

    # ------------------------------------------------------------------ #
    #  Logging
    # ------------------------------------------------------------------ #

    def _log(
        self, level: int, msg: str, args: tuple[Any, ...], kwargs: dict[str, Any]
    ) -> None:
        passthrough = {
            key: kwargs.pop(key) for key in list(kwargs) if key in _STDLIB_KWARGS
        }
        extra = {
            "tool_name": self._tool_name,
            "operation": self._operation,
            "scope_extra": kwargs,
        }
        self._logger.log(level, msg, *args, extra=extra, **passthrough)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, args, kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, args, kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, args, kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, args, kwargs)

    def diagnostic(self, target: str, diag: Diagnostic) -> None:
        """Log a decode diagnostic at the level matching its severity."""
        self._log(
            _SEVERITY_LEVELS[diag.severity],
            "%s: %s",
            (target, diag.message),
            {
                "field": diag.field,
                "raw_value": diag.raw_value,
                "replacement": diag.replacement,
            },
        )

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def tool_name(self) -> str:
        return self._tool_name

    @property
    def underlying(self) -> logging.Logger:
        """The wrapped stdlib :class:`logging.Logger`."""
        return self._logger

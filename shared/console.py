"""
ElfScope Console Interface
===========================

Thin layer over :class:`rich.console.Console` shared by the dump renderer
and the CLI.  It owns the ``scope.*`` palette, the tagged status lines
(``[✔]``/``[✘]``/``[ℹ]``) and the table style every ElfScope table uses,
so that the renderer only decides *what* goes in a cell.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

_SCOPE_THEME = Theme(
    {
        "scope.section": "bold bright_magenta",
        "scope.success": "bold green",
        "scope.warning": "bold yellow",
        "scope.error": "bold red",
        "scope.info": "bold bright_blue",
        "scope.dim": "dim white",
        "scope.unknown": "bold yellow",
    }
)

# (style, tag, label) per status line kind
_TAGS: dict[str, tuple[str, str, str]] = {
    "success": ("scope.success", "✔", "SUCCESS"),
    "error": ("scope.error", "✘", "ERROR"),
    "info": ("scope.info", "ℹ", "INFO"),
}


class ScopeConsole:
    """Console used for dumps (stdout) and status lines (stderr).

    Usage::

        out = ScopeConsole()
        out.section("Section Header entries")
        tbl = out.grid(("No.", {"justify": "right"}), "Name")
        tbl.add_row("0", ".text")
        out.print(tbl)

        errors = ScopeConsole(stderr=True)
        errors.error("Not an ELF file")
    """

    def __init__(
        self,
        *,
        quiet: bool = False,
        record: bool = False,
        stderr: bool = False,
        width: int | None = None,
    ) -> None:
        """
        Args:
            quiet:  Drop all output.
            record: Keep a copy of the output for :meth:`export_text`.
            stderr: Write to standard error instead of standard output.
            width:  Fixed width; ``None`` lets Rich detect it (``COLUMNS``).
        """
        self._console = Console(
            theme=_SCOPE_THEME,
            quiet=quiet,
            record=record,
            stderr=stderr,
            width=width,
            highlight=False,
        )

    @property
    def rich(self) -> Console:
        return self._console

    # ------------------------------------------------------------------ #
    #  Headings and status lines
    # ------------------------------------------------------------------ #

    def section(self, title: str) -> None:
        """Rule with *title* centred in it, followed by a blank line."""
        self._console.rule(f"  {title}  ", style="scope.section", characters="─")
        self._console.print()

    def _tagged(self, kind: str, message: str) -> None:
        style, tag, label = _TAGS[kind]
        self._console.print(f"[{style}][{tag}] {label}:[/{style}] {message}")

    def success(self, message: str) -> None:
        self._tagged("success", message)

    def error(self, message: str) -> None:
        self._tagged("error", message)

    def info(self, message: str) -> None:
        self._tagged("info", message)

    # ------------------------------------------------------------------ #
    #  Tables
    # ------------------------------------------------------------------ #

    @staticmethod
    def grid(*columns: str | tuple[str, dict[str, Any]], lines: bool = True) -> Table:
        """Empty table in the ElfScope style.

        Each column is either a header string or ``(header, options)``
        where *options* are passed to :meth:`rich.table.Table.add_column`.
        """
        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=lines,
            padding=(0, 1),
        )
        for column in columns:
            if isinstance(column, str):
                tbl.add_column(column)
            else:
                header, options = column
                tbl.add_column(header, **options)
        return tbl

    def table(
        self,
        columns: Sequence[str],
        rows: Iterable[Sequence[Any]],
    ) -> None:
        """Print a table whose cells are stringified and folded when long."""
        tbl = self.grid(
            *((name, {"overflow": "fold"}) for name in columns), lines=False
        )
        for row in rows:
            tbl.add_row(*(str(cell) for cell in row))
        self._console.print(tbl)

    # ------------------------------------------------------------------ #
    #  Pass-through
    # ------------------------------------------------------------------ #

    def print(self, *args: Any, **kwargs: Any) -> None:
        self._console.print(*args, **kwargs)

    def blank(self) -> None:
        self._console.print()

    def divider(self) -> None:
        self._console.rule(style="dim")

    def export_text(self) -> str:
        """Recorded output as plain text; needs ``record=True``."""
        return self._console.export_text()

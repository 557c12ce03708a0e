"""
ElfScope Console Output
========================

Rich-powered terminal display for decoded ELF objects: a header tree,
program and section tables, the section flags key, and any diagnostics
collected while decoding.

Uses the ScopeConsole abstraction for consistent styling across all
ElfScope commands.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from rich.markup import escape
from rich.panel import Panel

from shared.config import DumpConfig
from shared.console import ScopeConsole
from shared.models import Diagnostic

from elfscope.core.lookup import section_names
from elfscope.core.models import (
    DecodedObject,
    DumpSelection,
    EntryHeader,
    ProgramEntry,
    SectionEntry,
    WordWidth,
)
from elfscope.output import formatting as fmt
from elfscope.parsers.constants import SHF_KEY

_INDEX = {"style": "dim", "justify": "right"}
_RIGHT = {"justify": "right"}
_NOWRAP = {"no_wrap": True}
_FOLD = {"overflow": "fold"}


def _tree_lines(pairs: list[tuple[str, str]]) -> list[str]:
    lines: list[str] = []
    last = len(pairs) - 1
    for idx, (label, value) in enumerate(pairs):
        branch = "└──" if idx == last else "├──"
        value_text = escape(value)
        if value.startswith("unknown ("):
            value_text = f"[scope.unknown]{value_text}[/scope.unknown]"
        lines.append(f"{branch} [bold]{escape(label)}:[/bold] {value_text}")
    return lines


class ElfScopeConsoleOutput:
    """Rich terminal display for a :class:`DecodedObject`.

    Usage::

        output = ElfScopeConsoleOutput()
        output.display(elf, DumpSelection.HEADER | DumpSelection.SECTION)
    """

    def __init__(
        self,
        console: ScopeConsole | None = None,
        dump_config: DumpConfig | None = None,
    ) -> None:
        """Initialise the output renderer.

        Args:
            console: Optional ScopeConsole instance.  A new one is
                     created if not provided.
            dump_config: Renderer settings; defaults when omitted.
        """
        self._console: ScopeConsole = console or ScopeConsole()
        self._config: DumpConfig = dump_config or DumpConfig()

    def display(
        self,
        elf: DecodedObject,
        selection: DumpSelection = DumpSelection.ALL,
        target: str | None = None,
    ) -> None:
        """Render the parts of *elf* named by *selection*."""
        title = "ELF DUMP" if target is None else f"ELF DUMP -- {target}"
        self._console.section(title)

        if DumpSelection.HEADER in selection:
            self.display_header(elf.header)

        if DumpSelection.PROGRAM in selection:
            self.display_program_entries(elf.program_entries, elf.word_width)

        if DumpSelection.SECTION in selection:
            self.display_section_entries(elf)

        if self._config.show_diagnostics and elf.diagnostics:
            self.display_diagnostics(elf.diagnostics)

        self._console.divider()

    def display_header(self, header: EntryHeader) -> None:
        """Display the entry header as a tree panel."""
        panel = Panel(
            "\n".join(_tree_lines(fmt.header_fields(header))),
            title="[bold bright_cyan]Header[/bold bright_cyan]",
            border_style="bright_cyan",
            padding=(1, 2),
        )
        self._console.rich.print(panel)
        self._console.blank()

    def display_program_entries(
        self,
        entries: tuple[ProgramEntry, ...],
        word_width: WordWidth,
    ) -> None:
        """Display the program-header table."""
        self._console.section("Program Header entries")
        if not entries:
            self._console.info("No program header entries")
            self._console.blank()
            return

        tbl = self._console.grid(
            ("No.", _INDEX),
            ("Type", {"style": "bold"}),
            ("Offset", _RIGHT),
            ("Virtual addr.", _RIGHT),
            ("Physical addr.", _RIGHT),
            ("File size", _RIGHT),
            ("Memory size", _RIGHT),
            ("Flags", _NOWRAP),
            ("Align", _RIGHT),
            ("Details", _FOLD),
        )

        for i, entry in enumerate(entries):
            tbl.add_row(
                str(i),
                escape(fmt.describe_program_type(entry.type)),
                fmt.format_address(word_width, entry.file_offset),
                fmt.format_address(word_width, entry.virtual_address),
                fmt.format_address(word_width, entry.physical_address),
                str(entry.file_size),
                str(entry.mem_size),
                fmt.program_flags(entry.flags),
                f"0x{entry.alignment:x}",
                escape(fmt.describe_program_payload(entry)),
            )

        self._console.rich.print(tbl)
        self._console.blank()

    def display_section_entries(self, elf: DecodedObject) -> None:
        """Display the section-header table followed by the flags key."""
        self._console.section("Section Header entries")
        entries: tuple[SectionEntry, ...] = elf.section_entries
        if not entries:
            self._console.info("No section header entries")
            self._console.blank()
            return

        width = elf.word_width
        names = section_names(elf)

        tbl = self._console.grid(
            ("No.", _INDEX),
            ("Name", {"style": "bold", "no_wrap": True}),
            "Type",
            ("Flags", _NOWRAP),
            ("Address", _RIGHT),
            ("Offset", _RIGHT),
            ("Size", _RIGHT),
            ("Entry Size", _RIGHT),
            ("Link", _RIGHT),
            ("Info", _RIGHT),
            ("Align", _RIGHT),
            ("Details", _FOLD),
        )

        for i, (entry, name) in enumerate(zip(entries, names)):
            tbl.add_row(
                str(i),
                escape(fmt.display_section_name(name, self._config.name_width)),
                escape(fmt.describe_section_type(entry.type)),
                fmt.section_flags(entry.flags),
                fmt.format_address(width, entry.address),
                fmt.format_address(width, entry.file_offset),
                str(entry.size),
                str(entry.entry_size),
                str(entry.link),
                str(entry.info),
                str(entry.addr_align),
                escape(fmt.describe_section_payload(entry)),
            )

        self._console.rich.print(tbl)
        self.display_flags_key()

    def display_flags_key(self) -> None:
        self._console.print("[bold]Flags key:[/bold]")
        for line in SHF_KEY:
            self._console.print(escape(line), style="scope.dim")
        self._console.blank()

    def display_diagnostics(self, diagnostics: tuple[Diagnostic, ...]) -> None:
        """Display recoverable irregularities found while decoding."""
        self._console.section("Diagnostics")
        self._console.table(
            columns=["Severity", "Field", "Raw", "Stored", "Message"],
            rows=[
                (
                    f"[{d.severity.style}]{d.severity.value}[/{d.severity.style}]",
                    escape(d.field),
                    d.raw_value,
                    d.replacement,
                    escape(d.message),
                )
                for d in diagnostics
            ],
        )
        self._console.blank()

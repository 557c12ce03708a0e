"""
ElfScope CLI -- ELF Dump Tool
==============================

Click-based command-line interface for ElfScope.  Decodes one ELF file
and prints the selected parts: the entry header, the program-header
table and/or the section-header table.

Usage::

    # Everything
    elfscope -a /bin/true

    # Header and sections only
    elfscope -h -s /bin/true

    # JSON report on stdout
    elfscope --json /bin/true

    # Verbose output with a custom configuration file
    elfscope -a -v --config elfscope.toml /bin/true

References:
    - Click documentation: https://click.palletsprojects.com/
"""

from __future__ import annotations

import sys

import click

from shared.config import ScopeConfig
from shared.console import ScopeConsole
from shared.logger import ScopeLogger

from elfscope import __version__
from elfscope.core.engine import ElfScopeEngine
from elfscope.core.exceptions import DecodeError, ElfScopeError
from elfscope.core.models import DumpSelection
from elfscope.output.console import ElfScopeConsoleOutput
from elfscope.output.report import ElfScopeReportGenerator


def build_selection(
    dump_all: bool, header: bool, program: bool, section: bool
) -> DumpSelection:
    """Combine the selection flags into a :class:`DumpSelection`."""
    if dump_all:
        return DumpSelection.ALL
    selection = DumpSelection.NONE
    if header:
        selection |= DumpSelection.HEADER
    if program:
        selection |= DumpSelection.PROGRAM
    if section:
        selection |= DumpSelection.SECTION
    return selection


# ---------------------------------------------------------------------------
# CLI command
# ---------------------------------------------------------------------------

@click.command("elfscope", context_settings={"help_option_names": ["--help"]})
@click.argument("path", type=click.Path(dir_okay=False))
@click.option(
    "--all", "-a", "dump_all",
    is_flag=True,
    default=False,
    help="Dump the header, program and section tables.",
)
@click.option(
    "--header", "-h",
    is_flag=True,
    default=False,
    help="Dump the ELF entry header.",
)
@click.option(
    "--program", "-p",
    is_flag=True,
    default=False,
    help="Dump the program-header table.",
)
@click.option(
    "--section", "-s",
    is_flag=True,
    default=False,
    help="Dump the section-header table.",
)
@click.option(
    "--json", "json_output",
    is_flag=True,
    default=False,
    help="Print the full decoded object as JSON to stdout.",
)
@click.option(
    "--output", "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also write a JSON report to this path.",
)
@click.option(
    "--config", "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to an elfscope.toml configuration file.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable verbose/debug output.",
)
@click.version_option(__version__, prog_name="elfscope")
def elfscope_cli(
    path: str,
    dump_all: bool,
    header: bool,
    program: bool,
    section: bool,
    json_output: bool,
    output_path: str | None,
    config_path: str | None,
    verbose: bool,
) -> None:
    """ElfScope -- ELF file dump.

    PATH is the ELF file to decode.  At least one of -a, -h, -p or -s is
    required unless --json is given.

    Examples:

    \b
        elfscope -a /bin/true
        elfscope -h -p /lib/x86_64-linux-gnu/libc.so.6
        elfscope --json /bin/true > true.json
    """
    selection = build_selection(dump_all, header, program, section)
    if not selection and not json_output:
        raise click.UsageError(
            "Nothing to dump: pass at least one of -a, -h, -p or -s."
        )

    errors = ScopeConsole(stderr=True)
    try:
        config = ScopeConfig.load(config_path)
    except (OSError, ValueError) as exc:
        errors.error(f"Cannot load configuration: {exc}")
        sys.exit(1)

    settings = config.global_settings
    log_level = "DEBUG" if verbose or settings.debug else settings.log_level
    logger = ScopeLogger(
        "cli",
        log_level=log_level,
        log_file=settings.log_file,
        json_logs=settings.log_json,
    )

    engine = ElfScopeEngine(config=config, logger=logger)
    try:
        report = engine.inspect(path)
    except DecodeError as exc:
        errors.error(f"Decode failed: {exc}")
        sys.exit(1)
    except ElfScopeError as exc:
        errors.error(str(exc))
        sys.exit(1)

    generator = ElfScopeReportGenerator()

    if json_output:
        click.echo(generator.to_json(report))
    else:
        output_display = ElfScopeConsoleOutput(dump_config=config.dump)
        output_display.display(report.elf, selection, target=path)

    if output_path:
        report_path = generator.generate_json(report, output_path)
        errors.success(f"JSON report saved: {report_path}")


# ---------------------------------------------------------------------------
# Module entry point
# ---------------------------------------------------------------------------

def main() -> None:
    """Entry point for ``python -m elfscope.cli``."""
    elfscope_cli()


if __name__ == "__main__":
    main()

"""Tests for the elfscope command line."""

import json

import pytest
from click.testing import CliRunner

from elfscope import __version__
from elfscope.cli import build_selection, elfscope_cli
from elfscope.core.models import DumpSelection


WIDE = {"COLUMNS": "300"}


@pytest.fixture
def runner():
    return CliRunner()


def invoke(runner, *args):
    return runner.invoke(elfscope_cli, [str(a) for a in args], env=WIDE)


class TestBuildSelection:

    def test_all_wins(self):
        assert build_selection(True, False, True, False) is DumpSelection.ALL

    def test_combination(self):
        selection = build_selection(False, True, False, True)
        assert DumpSelection.HEADER in selection
        assert DumpSelection.SECTION in selection
        assert DumpSelection.PROGRAM not in selection

    def test_nothing(self):
        assert not build_selection(False, False, False, False)


class TestUsage:
    """Argument errors exit with status 2."""

    def test_missing_path(self, runner):
        result = invoke(runner, "-a")
        assert result.exit_code == 2

    def test_missing_selection(self, runner, sample_path):
        result = invoke(runner, sample_path)
        assert result.exit_code == 2
        assert "Nothing to dump" in result.output

    def test_missing_config_file(self, runner, sample_path, tmp_path):
        result = invoke(runner, "-a", "--config", tmp_path / "nope.toml", sample_path)
        assert result.exit_code == 2

    def test_help_is_long_only(self, runner):
        result = invoke(runner, "--help")
        assert result.exit_code == 0
        assert "--header" in result.output

    def test_version(self, runner):
        result = invoke(runner, "--version")
        assert result.exit_code == 0
        assert __version__ in result.output


class TestDump:
    """Successful dumps."""

    def test_all(self, runner, sample_path):
        result = invoke(runner, "-a", sample_path)
        assert result.exit_code == 0, result.output
        assert "ELF DUMP" in result.output
        assert "Entry-point" in result.output
        assert "Program Header entries" in result.output
        assert "requests interpreter /lib64/ld-linux-x86-64.so.2" in result.output
        assert ".interp" in result.output
        assert "Build ID: deadbeef" in result.output
        assert "Flags key:" in result.output

    def test_header_only(self, runner, sample_path):
        result = invoke(runner, "-h", sample_path)
        assert result.exit_code == 0, result.output
        assert "Entry-point" in result.output
        assert "Number of Program Header entries: 3" in result.output
        assert "Virtual addr." not in result.output
        assert "Flags key:" not in result.output

    def test_program_and_section(self, runner, sample_path):
        result = invoke(runner, "-p", "-s", sample_path)
        assert result.exit_code == 0, result.output
        assert "Entry-point" not in result.output
        assert "Number of Program Header entries" not in result.output
        assert "Virtual addr." in result.output
        assert "Flags key:" in result.output

    def test_json(self, runner, sample_path):
        result = invoke(runner, "--json", sample_path)
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["report_type"] == "elfscope_dump"
        assert data["elf"]["section_entries"][4]["name"] == ".shstrtab"

    def test_output_file(self, runner, sample_path, tmp_path):
        report = tmp_path / "out.json"
        result = invoke(runner, "-h", "-o", report, sample_path)
        assert result.exit_code == 0, result.output
        assert "JSON report saved" in result.output
        assert json.loads(report.read_text())["version"] == __version__

    def test_config_name_width(self, runner, sample_path, tmp_path):
        config = tmp_path / "elfscope.toml"
        config.write_text("[dump]\nname_width = 8\n")
        result = invoke(runner, "-s", "--config", config, sample_path)
        assert result.exit_code == 0, result.output
        assert ".note..." in result.output
        assert ".note.gnu.build-id" not in result.output


class TestFailures:
    """Decode and file errors exit with status 1."""

    def test_bad_magic(self, runner, tmp_path):
        target = tmp_path / "bad.bin"
        target.write_bytes(b"\x00" * 64)
        result = invoke(runner, "-a", target)
        assert result.exit_code == 1
        assert "Decode failed" in result.output
        assert "wrong magic" in result.output

    def test_too_small(self, runner, tmp_path):
        target = tmp_path / "tiny.bin"
        target.write_bytes(b"\x7fELF")
        result = invoke(runner, "-h", target)
        assert result.exit_code == 1
        assert "file too small" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = invoke(runner, "-a", tmp_path / "absent.elf")
        assert result.exit_code == 1
        assert "File not found" in result.output

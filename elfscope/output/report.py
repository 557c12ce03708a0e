"""
ElfScope Report Generator
==========================

JSON reports from an :class:`~elfscope.core.models.InspectionReport`.

The report wraps the pydantic JSON dump of the decoded object in a small
envelope (report type, tool version, generation time, file metadata) so
it can be consumed by downstream tooling.  Raw byte payloads (note
names and descriptors, string tables, build IDs) serialize as lowercase
hex strings; resolved section names are added next to each section.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from elfscope import __version__
from elfscope.core.lookup import section_names
from elfscope.core.models import InspectionReport


class ElfScopeReportGenerator:
    """Generate JSON reports from inspection results.

    Usage::

        generator = ElfScopeReportGenerator()
        text = generator.to_json(report)
        generator.generate_json(report, "report.json")
    """

    def to_dict(self, report: InspectionReport) -> dict[str, Any]:
        """Build the JSON-compatible report structure."""
        elf = report.elf
        elf_data: dict[str, Any] = elf.model_dump(mode="json")
        for section, name in zip(elf_data["section_entries"], section_names(elf)):
            section["name"] = name

        return {
            "report_type": "elfscope_dump",
            "version": __version__,
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "file": {
                "path": report.target,
                "size": report.size,
                "start_time": report.start_time.isoformat(),
                "end_time": (
                    report.end_time.isoformat() if report.end_time else None
                ),
                "duration_seconds": report.duration_seconds,
            },
            "elf": elf_data,
        }

    def to_json(self, report: InspectionReport, indent: int = 2) -> str:
        return json.dumps(
            self.to_dict(report), indent=indent, ensure_ascii=False, default=str
        )

    def generate_json(
        self,
        report: InspectionReport,
        output_path: str,
    ) -> str:
        """Write a JSON report to *output_path*.

        Args:
            report: The InspectionReport to serialize.
            output_path: Filesystem path for the output JSON file.

        Returns:
            The absolute path of the generated report.
        """
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            f.write(self.to_json(report))
            f.write("\n")

        return str(path.resolve())

"""
ElfScope Output
================

Output rendering modules for decoded objects.

- ``formatting`` -- Pure value-to-text helpers
- ``console``    -- Rich-based console display
- ``report``     -- JSON report generation
"""

from elfscope.output.console import ElfScopeConsoleOutput
from elfscope.output.report import ElfScopeReportGenerator

__all__ = [
    "ElfScopeConsoleOutput",
    "ElfScopeReportGenerator",
]

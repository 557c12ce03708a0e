"""
ElfScope -- ELF Inspection Toolkit
===================================

ElfScope decodes Executable and Linkable Format (ELF) files into an
immutable, structured representation and renders it as text or JSON.

Capabilities:
    - ELF32 and ELF64, little- and big-endian
    - Entry header, program-header and section-header tables
    - Interpreter paths, string tables and note records
    - GNU ABI-tag and build-ID notes
    - Bounds-checked decoding with recoverable diagnostics
    - Rich console dump and JSON reports

References:
    - TIS Committee. (1995). ELF Specification, Version 1.2.
    - System V Application Binary Interface, Edition 4.1.
    - Linux man page: elf(5).
"""

__version__ = "1.0.0"
__all__ = ["__version__"]

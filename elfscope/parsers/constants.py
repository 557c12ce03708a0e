"""
ELF Constants
==============

Numeric constants of the Executable and Linkable Format together with the
display names the renderer uses for them.

References:
    - TIS Committee. (1995). Tool Interface Standard (TIS) Executable and
      Linkable Format (ELF) Specification, Version 1.2.
    - System V Application Binary Interface, Edition 4.1.
    - Linux man page: elf(5).
"""

from __future__ import annotations


# ---------------------------------------------------------------------------
# Identification
# ---------------------------------------------------------------------------

ELF_MAGIC: bytes = b"\x7fELF"
EI_NIDENT: int = 16
EI_PAD_SIZE: int = 7

# A 32-bit ELF header is 52 bytes; nothing smaller can be an ELF file.
SMALLEST_POSSIBLE_ELF: int = 52

ELFCLASSNONE: int = 0
ELFCLASS32: int = 1
ELFCLASS64: int = 2

ELFDATANONE: int = 0
ELFDATA2LSB: int = 1
ELFDATA2MSB: int = 2

EV_NONE: int = 0
EV_CURRENT: int = 1

OSABI_NAMES: dict[int, str] = {
    0: "Unix System V",
    1: "HP-UX",
    2: "NetBSD",
    3: "Linux",
    4: "GNU Hurd",
    6: "Oracle Solaris",
    7: "AIX",
    8: "IRIX",
    9: "FreeBSD",
    10: "Tru64 UNIX",
    11: "Novell Modesto",
    12: "OpenBSD",
    13: "OpenVMS",
    14: "NonStop Kernel",
    15: "AROS Research Operating System",
    16: "FenixOS",
    17: "Nuxi CloudABI",
    18: "Stratus Technologies OpenVOS",
    64: "ARM AEABI",
    97: "ARM",
    255: "Standalone (embedded)",
}


# ---------------------------------------------------------------------------
# Object file type (e_type)
# ---------------------------------------------------------------------------

ET_INVALID: int = -1  # sentinel, never present in a file
ET_NONE: int = 0
ET_REL: int = 1
ET_EXEC: int = 2
ET_DYN: int = 3
ET_CORE: int = 4
ET_LOOS: int = 0xFE00
ET_HIOS: int = 0xFEFF
ET_LOPROC: int = 0xFF00
ET_HIPROC: int = 0xFFFF

ET_NAMES: dict[int, str] = {
    ET_NONE: "None",
    ET_REL: "Relocatable",
    ET_EXEC: "Executable",
    ET_DYN: "Dynamic (shared)",
    ET_CORE: "Core",
}


# ---------------------------------------------------------------------------
# Machine (e_machine)
# ---------------------------------------------------------------------------

EM_NONE: int = 0
EM_386: int = 3
EM_ARM: int = 40
EM_X86_64: int = 62
EM_AARCH64: int = 183
EM_RISCV: int = 243

EM_NAMES: dict[int, str] = {
    0: "No machine specified",
    1: "AT&T WE 32100",
    2: "SPARC",
    3: "Intel 386",
    4: "Motorola 68K",
    5: "Motorola 88K",
    6: "Intel MCU",
    7: "Intel 80860",
    8: "MIPS",
    9: "IBM System/370",
    10: "MIPS RS3000 Little-endian",
    15: "Hewlett-Packard PA-RISC",
    17: "Fujitsu VPP500",
    18: "SPARC V8+",
    19: "Intel 80960",
    20: "PowerPC",
    21: "PowerPC (64-bit)",
    22: "IBM S390/S390x",
    23: "IBM SPU/SPC",
    36: "NEC V800",
    37: "Fujitsu FR20",
    38: "TRW RH-32",
    39: "Motorola RCE",
    40: "ARM",
    41: "Digital Alpha",
    42: "Hitachi SuperH",
    43: "SPARC V9",
    44: "Siemens TriCore",
    45: "Argonaut RISC Core",
    46: "Hitachi H8/300",
    47: "Hitachi H8/300H",
    48: "Hitachi H8S",
    49: "Hitachi H8/500",
    50: "Itanium IA-64",
    51: "Stanford MIPS-X",
    52: "Motorola ColdFire",
    53: "Motorola 68HC12",
    54: "Fujitsu MMA Multimedia Accelerator",
    55: "Siemens PCP",
    56: "Sony nCPU",
    57: "Denso NDR1",
    58: "Motorola Star*Core",
    59: "Toyota ME16",
    60: "STMicroelectronics ST100",
    61: "Advanced Logic Corp. TinyJ",
    62: "AMD x86-64",
    63: "Sony DSP",
    64: "Digital Equipment Corp. PDP-10",
    65: "Digital Equipment Corp. PDP-11",
    66: "Siemens FX66",
    67: "STMicroelectronics ST9+ 8/16-bit",
    68: "STMicroelectronics ST7 8-bit",
    69: "Motorola M68HC16",
    70: "Motorola M68HC11",
    71: "Motorola M68HC08",
    72: "Motorola M68HC05",
    73: "Silicon Graphics SVx",
    74: "STMicroelectronics ST19 8-bit",
    75: "Digital Equipment Corp. VAX",
    183: "ARM AArch64",
    243: "RISC-V",
}


# ---------------------------------------------------------------------------
# Program header types (p_type) and flags (p_flags)
# ---------------------------------------------------------------------------

PT_NULL: int = 0
PT_LOAD: int = 1
PT_DYNAMIC: int = 2
PT_INTERP: int = 3
PT_NOTE: int = 4
PT_SHLIB: int = 5
PT_PHDR: int = 6
PT_TLS: int = 7
PT_LOOS: int = 0x60000000
PT_GNU_EH_FRAME: int = 0x6474E550
PT_GNU_STACK: int = 0x6474E551
PT_GNU_RELRO: int = 0x6474E552
PT_GNU_PROPERTY: int = 0x6474E553
PT_GNU_SFRAME: int = 0x6474E554
PT_SUNWBSS: int = 0x6FFFFFFA
PT_SUNWSTACK: int = 0x6FFFFFFB
PT_HIOS: int = 0x6FFFFFFF
PT_LOPROC: int = 0x70000000
PT_HIPROC: int = 0x7FFFFFFF

PT_NAMES: dict[int, str] = {
    PT_NULL: "Unused",
    PT_LOAD: "Loadable",
    PT_DYNAMIC: "Dynamic",
    PT_INTERP: "Interpreter",
    PT_NOTE: "Note",
    PT_SHLIB: "Reserved",
    PT_PHDR: "Prog Header",
    PT_TLS: "TLS",
    PT_GNU_EH_FRAME: "GNU EH Frame",
    PT_GNU_STACK: "GNU Stack",
    PT_GNU_RELRO: "GNU Read-only",
    PT_GNU_PROPERTY: "GNU Property",
    PT_GNU_SFRAME: "GNU Stackframe",
    PT_SUNWBSS: "Sun BSS",
    PT_SUNWSTACK: "Sun Stack",
}

PF_X: int = 0x1
PF_W: int = 0x2
PF_R: int = 0x4


# ---------------------------------------------------------------------------
# Section header types (sh_type) and flags (sh_flags)
# ---------------------------------------------------------------------------

SHN_UNDEF: int = 0

SHT_NULL: int = 0
SHT_PROGBITS: int = 1
SHT_SYMTAB: int = 2
SHT_STRTAB: int = 3
SHT_RELA: int = 4
SHT_HASH: int = 5
SHT_DYNAMIC: int = 6
SHT_NOTE: int = 7
SHT_NOBITS: int = 8
SHT_REL: int = 9
SHT_SHLIB: int = 10
SHT_DYNSYM: int = 11
SHT_INIT_ARRAY: int = 14
SHT_FINI_ARRAY: int = 15
SHT_PREINIT_ARRAY: int = 16
SHT_GROUP: int = 17
SHT_SYMTAB_SHNDX: int = 18
SHT_RELR: int = 19
SHT_LOOS: int = 0x60000000
SHT_HIOS: int = 0x6FFFFFFF
SHT_LOPROC: int = 0x70000000
SHT_HIPROC: int = 0x7FFFFFFF
SHT_LOUSER: int = 0x80000000
SHT_HIUSER: int = 0x8FFFFFFF

SHT_NAMES: dict[int, str] = {
    SHT_NULL: "NULL",
    SHT_PROGBITS: "Program data",
    SHT_SYMTAB: "Symbol table",
    SHT_STRTAB: "String table",
    SHT_RELA: "Reloc (addends)",
    SHT_HASH: "Symbol hash table",
    SHT_DYNAMIC: "Dynlink info",
    SHT_NOTE: "Notes",
    SHT_NOBITS: "BSS",
    SHT_REL: "Reloc (no addends)",
    SHT_SHLIB: "Reserved",
    SHT_DYNSYM: "Dyn linker symbols",
    SHT_INIT_ARRAY: "Constructors",
    SHT_FINI_ARRAY: "Destructors",
    SHT_PREINIT_ARRAY: "Pre-constructors",
    SHT_GROUP: "Section group",
    SHT_SYMTAB_SHNDX: "Ext section indices",
    SHT_RELR: "RELR",
}

SHF_WRITE: int = 0x1
SHF_ALLOC: int = 0x2
SHF_EXECINSTR: int = 0x4
SHF_MERGE: int = 0x10
SHF_STRINGS: int = 0x20
SHF_INFO_LINK: int = 0x40
SHF_LINK_ORDER: int = 0x80
SHF_OS_NONCONFORMING: int = 0x100
SHF_GROUP: int = 0x200
SHF_TLS: int = 0x400
SHF_ORDERED: int = 0x4000000
SHF_EXCLUDE: int = 0x8000000
SHF_MASKOS: int = 0x0FF00000
SHF_MASKPROC: int = 0xF0000000

# Letter shown for each section flag, in display order.
SHF_LETTERS: tuple[tuple[int, str], ...] = (
    (SHF_WRITE, "W"),
    (SHF_ALLOC, "A"),
    (SHF_EXECINSTR, "X"),
    (SHF_MERGE, "M"),
    (SHF_STRINGS, "S"),
    (SHF_INFO_LINK, "I"),
    (SHF_LINK_ORDER, "L"),
    (SHF_OS_NONCONFORMING, "N"),
    (SHF_GROUP, "G"),
    (SHF_TLS, "T"),
    (SHF_ORDERED, "O"),
    (SHF_EXCLUDE, "E"),
    (SHF_MASKOS, "o"),
    (SHF_MASKPROC, "p"),
)

SHF_KEY: tuple[str, ...] = (
    "W: Write    S: Strings           G: Section group o: OS-specific",
    "A: Allocate I: Info link         T: TLS           p: Processor-specific",
    "X: Execute  L: Link order        O: Ordered",
    "M: Merge    N: OS non-conforming E: Exclude",
)


# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------

NOTE_HEADER_SIZE: int = 12
NOTE_ALIGN: int = 4

GNU_NOTE_NAME: bytes = b"GNU"
NT_GNU_ABI_TAG: int = 1
NT_GNU_HWCAP: int = 2
NT_GNU_BUILD_ID: int = 3
GNU_ABI_TAG_SIZE: int = 16

GNU_ABI_OS_NAMES: dict[int, str] = {
    0: "Linux",
    1: "GNU Hurd",
    2: "Solaris",
    3: "FreeBSD",
    4: "NetBSD",
    5: "Syllable",
    6: "NaCl",
}

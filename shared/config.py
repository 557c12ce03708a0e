"""
ElfScope Configuration Management
==================================

Settings for the engine, the dump renderer and logging, held in slotted
dataclasses and read from an optional TOML file.  Every table and key is
optional; anything absent keeps its default.

Example ``elfscope.toml``::

    [global]
    log_level = "DEBUG"
    log_file = "elfscope.log"
    log_json = true

    [decoder]
    max_file_size = 104857600

    [dump]
    show_diagnostics = true
    name_width = 16

References:
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


# elfscope.toml next to the package directories
_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "elfscope.toml"


@dataclass(slots=True)
class DecoderConfig:
    """Limits applied before a file reaches the decoder.

    Files are decoded from a fully loaded buffer, so the engine refuses
    anything larger than ``max_file_size`` bytes.
    """

    max_file_size: int = 268_435_456  # 256 MiB


@dataclass(slots=True)
class DumpConfig:
    show_diagnostics: bool = True
    name_width: int = 16  # longer section names are elided


@dataclass(slots=True)
class GlobalConfig:
    """Logging verbosity and destinations."""

    log_level: str = "WARNING"
    log_file: str | None = None
    log_json: bool = False
    debug: bool = False


def _section_from(section_cls: type, table: dict[str, Any]) -> Any:
    """Build *section_cls* from a TOML table, ignoring keys it does not declare."""
    known = {f.name for f in fields(section_cls)}
    return section_cls(**{k: v for k, v in table.items() if k in known})


@dataclass(slots=True)
class ScopeConfig:
    """All ElfScope settings.

    Usage:
        >>> config = ScopeConfig.load()                    # elfscope.toml, if present
        >>> config = ScopeConfig.load("custom.toml")
        >>> config.dump.name_width
        16
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    decoder: DecoderConfig = field(default_factory=DecoderConfig)
    dump: DumpConfig = field(default_factory=DumpConfig)

    @classmethod
    def load(cls, path: str | Path | None = None) -> ScopeConfig:
        """Read settings from a TOML file.

        With *path* ``None`` the default ``elfscope.toml`` is used when it
        exists; otherwise every setting keeps its default.

        Raises:
            FileNotFoundError: An explicit *path* does not exist.
            tomllib.TOMLDecodeError: The file is not valid TOML (a
                ``ValueError`` subclass).
        """
        if path is None:
            if not _DEFAULT_CONFIG_PATH.exists():
                return cls()
            config_path = _DEFAULT_CONFIG_PATH
        else:
            config_path = Path(path)
            if not config_path.exists():
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        # TOML table name -> section class; [global] maps to global_settings
        return cls(
            global_settings=_section_from(GlobalConfig, raw.get("global", {})),
            decoder=_section_from(DecoderConfig, raw.get("decoder", {})),
            dump=_section_from(DumpConfig, raw.get("dump", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


_cached: ScopeConfig | None = None


def get_config(path: str | Path | None = None) -> ScopeConfig:
    """Return the shared configuration, loading it on first use.

    Passing *path* always reloads and replaces the shared instance.
    """
    global _cached
    if _cached is None or path is not None:
        _cached = ScopeConfig.load(path)
    return _cached

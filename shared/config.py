"""
Alloy Configuration Management
===============================

Centralized configuration for the Alloy mapping tools using Python
dataclasses and TOML-based persistence.

Each tool reads its own section; unknown sections and keys are ignored so
that a single ``config.toml`` can be shared across tool versions.

References:
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[no-redef]


# ---------------------------------------------------------------------------
# Default configuration file path relative to the project root
# ---------------------------------------------------------------------------
_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "config.toml"


# ========================== Tool-Specific Configs ==========================


@dataclass(frozen=False, slots=True)
class MappingsConfig:
    """Configuration for the mapping translation engine.

    Controls how mapping files are read and how the ProGuard parser treats
    entries whose ownership is ambiguous.
    """

    encoding: str = "utf-8"
    max_file_size: int = 268_435_456  # 256 MiB
    # Method entries named "other.Owner.method" are inlined line-table
    # artifacts of another class.
    drop_inlined_methods: bool = True
    # Default `parse` output: "console", "json" or "all".
    output_format: str = "console"


# =========================== Global Settings ===============================


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Global settings shared across all Alloy tools.

    Controls logging verbosity and output locations.
    """

    log_level: str = "INFO"
    log_file: str | None = None
    log_json: bool = False
    output_dir: str = "output"
    version: str = "1.0.0"


# =========================== Master Config =================================


@dataclass(frozen=False, slots=True)
class AlloyConfig:
    """Master configuration aggregating tool-specific and global settings.

    Usage:
        >>> config = AlloyConfig.load()                  # from default path
        >>> config = AlloyConfig.load("custom.toml")     # from custom path
        >>> config.mappings.encoding
        'utf-8'
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    mappings: MappingsConfig = field(default_factory=MappingsConfig)

    # ------------------------------------------------------------------ #
    #  TOML Loading
    # ------------------------------------------------------------------ #

    @classmethod
    def load(cls, path: str | Path | None = None) -> AlloyConfig:
        """Load configuration from a TOML file.

        If *path* is ``None`` the loader looks for ``config.toml`` in the
        project root.  Missing keys fall back to dataclass defaults.

        Args:
            path: Filesystem path to a TOML configuration file.
                  Defaults to ``<project_root>/config.toml``.

        Returns:
            A fully-populated :class:`AlloyConfig` instance.

        Raises:
            FileNotFoundError: If the specified path does not exist
                *and* was explicitly provided by the caller.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            mappings=cls._build_section(MappingsConfig, raw.get("mappings", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise the entire configuration tree to a plain dictionary."""
        return asdict(self)

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Instantiate a dataclass *cls* using only the keys it declares."""
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)


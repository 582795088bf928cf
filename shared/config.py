"""
coffdump Configuration Management
==================================

Configuration for the coffdump inspection tool using Python dataclasses and
TOML-based persistence.

Settings are split into a ``[global]`` table (logging) and a ``[coffdump]``
table (presentation).  Every key is optional; anything missing falls back to
the dataclass default.

Example ``config.toml``::

    [global]
    log_level = "DEBUG"
    log_file = "coffdump.log"
    log_json = true

    [coffdump]
    output_format = "table"
    annotate = false

References:
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any


# ---------------------------------------------------------------------------
# Default configuration file path relative to the project root
# ---------------------------------------------------------------------------
_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "config.toml"

OUTPUT_FORMATS: tuple[str, ...] = ("text", "table", "json")


# ========================== Tool-Specific Config ===========================


@dataclass(frozen=False, slots=True)
class DumpConfig:
    """Presentation settings for the COFF dump.

    Attributes:
        output_format:  ``text``, ``table`` or ``json``.
        show_raw_names: Print the raw 8-byte name arrays next to names.
        annotate:       Append symbolic names (``MC68MAGIC``, ``TEXT``,
                        ``EXT`` ...) to raw values.
        address_width:  Minimum hex digits for addresses and offsets.
    """

    output_format: str = "text"
    show_raw_names: bool = True
    annotate: bool = True
    address_width: int = 6


# =========================== Global Settings ===============================


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Logging settings shared by every coffdump component.

    An empty ``log_file`` disables file logging.
    """

    log_level: str = "INFO"
    log_file: str = ""
    log_json: bool = False


# =========================== Master Config =================================


@dataclass(frozen=False, slots=True)
class CoffdumpConfig:
    """Master configuration aggregating global and dump settings.

    Usage:
        >>> config = CoffdumpConfig.load()                  # from default path
        >>> config = CoffdumpConfig.load("custom.toml")     # from custom path
        >>> config.dump.output_format
        'text'
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    dump: DumpConfig = field(default_factory=DumpConfig)

    # ------------------------------------------------------------------ #
    #  TOML Loading
    # ------------------------------------------------------------------ #

    @classmethod
    def load(cls, path: str | Path | None = None) -> CoffdumpConfig:
        """Load configuration from a TOML file.

        If *path* is ``None`` the loader looks for ``config.toml`` in the
        project root and silently falls back to defaults when it is absent.

        Args:
            path: Filesystem path to a TOML configuration file.

        Returns:
            A fully-populated :class:`CoffdumpConfig` instance.

        Raises:
            FileNotFoundError: If *path* was given explicitly and does not exist.
            ValueError: If a key has the wrong type, ``output_format`` is not a
                known format or ``address_width`` is negative.
            tomllib.TOMLDecodeError: If the file is not valid TOML.
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

        config = cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            dump=cls._build_section(DumpConfig, raw.get("coffdump", {})),
        )
        if config.dump.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Unknown output_format {config.dump.output_format!r}; "
                f"expected one of {', '.join(OUTPUT_FORMATS)}"
            )
        if config.dump.address_width < 0:
            raise ValueError(
                f"address_width must not be negative, got {config.dump.address_width}"
            )
        return config

    def to_dict(self) -> dict[str, Any]:
        """Serialise the configuration tree to a plain dictionary."""
        return asdict(self)

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Instantiate a dataclass *cls* using only the keys it declares.

        Unknown keys in the TOML source are ignored.  Known keys must have the
        same type as the field default (``true`` is not an integer).
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a table, got {data!r}")
        fields = cls.__dataclass_fields__  # type: ignore[attr-defined]
        filtered: dict[str, Any] = {}
        for key, value in data.items():
            if key not in fields:
                continue
            expected = type(fields[key].default)
            if type(value) is not expected:
                raise ValueError(
                    f"{key} must be {expected.__name__}, got {value!r}"
                )
            filtered[key] = value
        return cls(**filtered)

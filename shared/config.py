"""
Gauge Configuration Management
===============================

Configuration for the Gauge toolkit using Python dataclasses and
TOML-based persistence. Settings are split into a ``[global]`` section
(logging, debugging) and a ``[gauge]`` section (cutoff table and
pattern-detection knobs).

Example ``config.toml``::

    [global]
    log_level = "WARNING"

    [gauge]
    cutoffs = [64, 80, 112, 128]
    flag_at_or_below = "moderate"

References:
    - Wiggins, A. (2011). The Twelve-Factor App. https://12factor.net/
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


# ---------------------------------------------------------------------------
# Default configuration file path relative to the project root
# ---------------------------------------------------------------------------
_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "config.toml"


# ========================== Tool-Specific Config ===========================


@dataclass(frozen=False, slots=True)
class GaugeSettings:
    """Configuration for the password quality estimator.

    ``cutoffs`` are the finite upper bounds of every tier but the last,
    weakest first; the top tier is always unbounded. The table is
    validated when the engine is built, not here.
    """

    cutoffs: list[int] = field(default_factory=lambda: [64, 80, 112, 128])
    flag_at_or_below: str = "moderate"
    min_word_length: int = 4
    max_sequence_step: int = 5


# =========================== Global Settings ===============================


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Global settings: logging verbosity and destinations.

    An empty ``log_file`` disables file logging.
    """

    log_level: str = "INFO"
    log_file: str = ""
    log_json: bool = False
    debug: bool = False


# =========================== Master Config =================================


@dataclass(frozen=False, slots=True)
class GaugeConfig:
    """Master configuration aggregating the global and tool settings.

    Usage:
        >>> config = GaugeConfig.load()                  # from default path
        >>> config = GaugeConfig.load("custom.toml")     # from custom path
        >>> print(config.gauge.cutoffs)
        [64, 80, 112, 128]
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    gauge: GaugeSettings = field(default_factory=GaugeSettings)

    @classmethod
    def load(cls, path: str | Path | None = None) -> GaugeConfig:
        """Load configuration from a TOML file.

        If *path* is ``None`` the loader looks for ``config.toml`` in the
        project root. Missing keys fall back to dataclass defaults and
        unknown keys are ignored.

        Args:
            path: Filesystem path to a TOML configuration file.

        Returns:
            A fully-populated :class:`GaugeConfig` instance.

        Raises:
            FileNotFoundError: If an explicitly provided path does not exist.
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

        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            gauge=cls._build_section(GaugeSettings, raw.get("gauge", {})),
        )

    @staticmethod
    def _build_section(section_cls: type, data: dict[str, Any]) -> Any:
        """Instantiate *section_cls* from the keys it declares."""
        valid_keys = {f.name for f in section_cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return section_cls(**filtered)


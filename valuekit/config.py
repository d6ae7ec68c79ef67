"""
Engine and layout configuration loader for valuekit.

This module provides:

- find_config_file: Walk up directories to locate .valuekit.toml
- EngineConfig: Tuning knobs shared by the hashing engine and formatter
- ValueKitConfig: Engine config plus the default layout, loaded from TOML

Nothing here is global: callers construct engines with the config they want.
An example ``.valuekit.toml``::

    [engine]
    buffer_sample_threshold = 4096
    buffer_inline_limit = 16

    [layout]
    preset = "compact"
    multi_line = true
"""

from __future__ import annotations

import dataclasses
import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from valuekit.layout import PRESETS, STANDARD, LayoutConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".valuekit.toml"

_LAYOUT_KEYS = ("include_names", "multi_line", "separator", "include_type_name", "explicit_names")


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """
    Walk up from *start_dir* to find `.valuekit.toml`.

    Args:
        start_dir: Directory to start searching from. Defaults to ``Path.cwd()``.

    Returns:
        Path to the config file, or ``None`` if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate

        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


@dataclass(frozen=True)
class EngineConfig:
    """
    Tuning knobs for the engines.

    Attributes:
        buffer_sample_threshold: Buffers longer than this many bytes are
            hashed by sampling instead of exhaustively.
        buffer_sample_count: Approximate number of samples taken from a large
            buffer (the stride is ``len // buffer_sample_count``).
        buffer_inline_limit: Buffers up to this many bytes are formatted as a
            byte list; larger ones as ``TypeName (N bytes)``.
    """

    buffer_sample_threshold: int = 1000
    buffer_sample_count: int = 100
    buffer_inline_limit: int = 32

    def __post_init__(self) -> None:
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{f.name} must be a positive integer, got {value!r}")

    def sample_stride(self, length: int) -> int:
        """Stride used when sampling a buffer of *length* bytes."""
        return max(1, length // self.buffer_sample_count)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EngineConfig:
        """
        Create an :class:`EngineConfig` from an ``[engine]`` table.

        Raises:
            ValueError: On unknown keys or non-positive values.
        """
        known = [f.name for f in dataclasses.fields(cls)]
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ValueError(
                f"Unknown engine setting(s): {', '.join(unknown)}. "
                f"Available settings: {', '.join(known)}"
            )
        return cls(**data)


def layout_from_dict(data: dict[str, Any]) -> LayoutConfig:
    """
    Create a :class:`LayoutConfig` from a ``[layout]`` table.

    The optional ``preset`` key selects a base layout (default ``standard``);
    remaining keys override its fields.

    Raises:
        ValueError: On an unknown preset or unknown keys.
    """
    data = dict(data)
    preset_name = data.pop("preset", "standard")
    if preset_name not in PRESETS:
        available = ", ".join(sorted(PRESETS))
        raise ValueError(
            f"Unknown layout preset {preset_name!r}. Available presets: {available}"
        )

    unknown = sorted(set(data) - set(_LAYOUT_KEYS))
    if unknown:
        raise ValueError(
            f"Unknown layout setting(s): {', '.join(unknown)}. "
            f"Available settings: preset, {', '.join(_LAYOUT_KEYS)}"
        )
    return dataclasses.replace(PRESETS[preset_name], **data)


@dataclass(frozen=True)
class ValueKitConfig:
    """
    Configuration loaded from ``.valuekit.toml``.

    Typical usage::

        config = ValueKitConfig.load()
        formatter = Formatter(config.engine, default_layout=config.layout)
    """

    engine: EngineConfig = field(default_factory=EngineConfig)
    layout: LayoutConfig = STANDARD

    @classmethod
    def load(cls, start_dir: Path | None = None) -> ValueKitConfig:
        """
        Find and load ``.valuekit.toml``.

        Args:
            start_dir: Directory to start searching from (default: cwd).

        Raises:
            FileNotFoundError: If no ``.valuekit.toml`` is found.
        """
        config_path = find_config_file(start_dir)
        if config_path is None:
            raise FileNotFoundError(
                f"Could not find {CONFIG_FILENAME} in {start_dir or Path.cwd()} "
                f"or any parent directory"
            )

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        logger.info("Loaded valuekit config from %s", config_path)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValueKitConfig:
        """Create a :class:`ValueKitConfig` from parsed TOML data."""
        return cls(
            engine=EngineConfig.from_dict(data.get("engine", {})),
            layout=layout_from_dict(data.get("layout", {})),
        )

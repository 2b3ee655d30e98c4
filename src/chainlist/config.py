"""YAML configuration for the command-line front end."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml


class ConfigError(ValueError):
    """Configuration file has an invalid value."""


@dataclass
class ChainConfig:
    """Settings for reading a chain from standard input.

    Attributes:
        max_input_size: Buffer size per line, terminator included.
        count: Number of lines to read.
        heap_limit: Cap on live heap blocks (None for no cap).
    """

    max_input_size: int = 12
    count: int = 2
    heap_limit: int | None = None


_KEYS = frozenset({"max_input_size", "count", "heap_limit"})


def _positive_int(
    data: dict, key: str, default: int | None, *, optional: bool = False
) -> int | None:
    value = data.get(key, default)
    if value is None and optional:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        msg = f"{key} must be a positive integer, got {value!r}"
        raise ConfigError(msg)
    return value


def load_config(config_path: Path | str) -> ChainConfig:
    """Load settings from a YAML file; missing keys keep their defaults.

    Args:
        config_path: Path to the YAML file.

    Returns:
        ChainConfig with the file's settings applied.

    Raises:
        ConfigError: If a value has the wrong type or range, or a key is
            not a known setting.
    """
    with Path(config_path).open() as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        msg = f"{config_path}: expected a mapping at top level"
        raise ConfigError(msg)

    unknown = sorted(str(key) for key in data.keys() - _KEYS)
    if unknown:
        msg = f"{config_path}: unknown setting(s): {', '.join(unknown)}"
        raise ConfigError(msg)

    defaults = ChainConfig()
    return ChainConfig(
        max_input_size=_positive_int(data, "max_input_size", defaults.max_input_size),
        count=_positive_int(data, "count", defaults.count),
        heap_limit=_positive_int(data, "heap_limit", defaults.heap_limit, optional=True),
    )

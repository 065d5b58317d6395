"""Configuration management for the wedding planner engine.

This module centralizes configuration values including the location of the
rate/ceremony tables, the log level, and environment variable overrides.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

# Packaged table files live next to this module
_PACKAGE_DIR = Path(__file__).parent.resolve()

# Data directory holding rates.json and ceremonies.json
DATA_DIR = Path(
    os.getenv("WEDDING_PLANNER_DATA_DIR", _PACKAGE_DIR / "data")
).resolve()

RATES_FILE = "rates"
CEREMONIES_FILE = "ceremonies"

LOG_LEVEL = os.getenv("WEDDING_PLANNER_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def load_config(config_name: str, data_dir: Optional[Path] = None) -> Dict[str, Any]:
    """Load a table file by name.

    Args:
        config_name: Name of the table file (without .json extension)
        data_dir: Optional directory override; defaults to DATA_DIR

    Returns:
        Dictionary containing the parsed JSON document

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file is invalid JSON

    Example:
        >>> rates = load_config('rates')
        >>> rates['venue_class_multipliers']['home']
        0.6
    """
    config_path = Path(data_dir or DATA_DIR) / f"{config_name}.json"

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return json.load(f)


def get_config_value(config_name: str, *keys: str, default: Any = None) -> Any:
    """Get a nested configuration value by key path.

    Example:
        >>> get_config_value('rates', 'city_multipliers', 'nyc')
        1.4
    """
    try:
        value = load_config(config_name)
        for key in keys:
            value = value[key]
        return value
    except (KeyError, FileNotFoundError):
        return default


def configure_logging(level: Optional[Union[str, int]] = None) -> None:
    """Apply the configured log level and format to the root logger."""
    resolved = level if level is not None else LOG_LEVEL
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved.upper())
        if not isinstance(resolved, int):
            resolved = logging.WARNING
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger("wedding_planner").setLevel(resolved)

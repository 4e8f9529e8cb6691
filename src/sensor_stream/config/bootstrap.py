"""Bootstrap configuration helpers (pre-settings).

These helpers exist for "chicken-and-egg" situations where logging needs a
small amount of configuration before the full pydantic settings singleton can
be imported.

Constraints:
- Keep this module dependency-light (no telemetry imports) to avoid circular imports.
- Validate values with the shared config validators.
"""

from __future__ import annotations

import os
from pathlib import Path

from sensor_stream.config.validators import parse_flag, resolve_path, validate_log_level

ENV_PREFIX = "SENSOR_STREAM_"


def get_bootstrap_log_level(default: str = "INFO") -> str:
    """Get logging level from environment without importing settings.

    Args:
        default: Default log level if not set or invalid.

    Returns:
        Uppercased, validated log level string.
    """
    value = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", default)
    try:
        return validate_log_level(value)
    except ValueError:
        return validate_log_level(default)


def get_bootstrap_log_to_file(default: bool = False) -> bool:
    """Whether JSONL file logging is enabled."""
    value = os.getenv(f"{ENV_PREFIX}LOG_TO_FILE")
    if value is None:
        return default
    return parse_flag(value)


def get_bootstrap_log_dir(default: str = "telemetry/logs") -> Path:
    """Get the directory for JSONL log files."""
    return resolve_path(os.getenv(f"{ENV_PREFIX}LOG_DIR", default))

"""Custom validators for configuration values.

Shared by the pydantic settings model and by ``SensorArray`` so that a delay
read from the environment and a delay assigned at runtime obey the same rules.
"""

from pathlib import Path
from typing import Any

FRAME_SYNC = "frame_sync"
"""Delay sentinel selecting the frame-synchronized scheduler strategy."""


def validate_log_level(value: str) -> str:
    """Validate log level is one of the standard levels.

    Args:
        value: Log level string.

    Returns:
        Validated log level.

    Raises:
        ValueError: If log level is not valid.
    """
    valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if value.upper() not in valid_levels:
        raise ValueError(f"log_level must be one of {valid_levels}, got {value}")
    return value.upper()


def validate_log_format(value: str) -> str:
    """Validate log format is 'json' or 'console'."""
    valid_formats = {"json", "console"}
    if value.lower() not in valid_formats:
        raise ValueError(f"log_format must be one of {valid_formats}, got {value}")
    return value.lower()


def validate_delay(value: Any) -> int | str:
    """Validate an inter-cycle delay.

    Accepts non-negative integer milliseconds (``int``, integral ``float`` or a
    string of decimal digits) and the ``FRAME_SYNC`` sentinel.

    Args:
        value: Candidate delay.

    Returns:
        The delay as ``int`` milliseconds, or ``FRAME_SYNC``.

    Raises:
        ValueError: If the value is not a valid delay.
    """
    message = (
        f"Invalid delay value. Received: {value!r}. Must be a non-negative integer "
        f"millisecond delay or the string {FRAME_SYNC!r}"
    )
    # bool is an int subclass but never a meaningful delay
    if isinstance(value, bool):
        raise ValueError(message)
    if isinstance(value, str):
        text = value.strip()
        if text == FRAME_SYNC:
            return FRAME_SYNC
        if not text.isdecimal():
            raise ValueError(message)
        return int(text)
    if isinstance(value, float):
        if not value.is_integer() or value < 0:
            raise ValueError(message)
        return int(value)
    if isinstance(value, int):
        if value < 0:
            raise ValueError(message)
        return value
    raise ValueError(message)


def parse_flag(value: str | bool) -> bool:
    """Parse an environment-style boolean flag ("1", "true", "yes", "on")."""
    if isinstance(value, bool):
        return value
    return value.strip().lower() in {"1", "true", "yes", "on"}


def resolve_path(value: Path | str) -> Path:
    """Resolve relative paths against the current working directory.

    Args:
        value: Path value (can be string or Path).

    Returns:
        Resolved Path object.
    """
    path = Path(value) if isinstance(value, str) else value
    return path.expanduser().resolve()

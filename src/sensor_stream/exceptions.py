"""Exception types raised by sensor-stream."""

from typing import Any


class SensorStreamError(Exception):
    """Base class for sensor-stream errors."""

    pass


class ConfigurationError(SensorStreamError, TypeError):
    """Raised when a SensorArray is constructed with an unknown or malformed option.

    Attributes:
        key: The offending option name.
        value: The value supplied for it.
    """

    def __init__(self, key: str, value: Any, reason: str = "Unknown option") -> None:
        self.key = key
        self.value = value
        super().__init__(f"{reason}: {key} = {value!r}")


class DelayValidationError(SensorStreamError, ValueError):
    """Raised when a delay is neither non-negative integer milliseconds nor 'frame_sync'."""

    pass

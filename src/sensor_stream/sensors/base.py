"""Sensor interface consumed by SensorArray.

A sensor is anything that can report whether it holds a new reading and, if
so, hand it over on demand. Concrete sensors subclass ``Sensor``; the array
rejects every other object at registration.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

NamedState = dict[str, Any]


@dataclass(frozen=True)
class Sample:
    """One reading popped from a sensor.

    Attributes:
        value: Sensor-specific payload.
        timestamp: Capture time as POSIX seconds.
    """

    value: Any
    timestamp: float = field(default_factory=time.time)


class Sensor(ABC):
    """Abstract base class for all sensors.

    Subclasses implement ``has_data``, ``pop_data`` and ``extract_state``.
    ``timestamp`` is set by the SensorArray on registration so a sensor may
    skip its own timing work when timestamps are disabled.
    """

    _timestamp: bool = True

    def __init__(self) -> None:
        self._timestamp = True

    @property
    def timestamp(self) -> bool:
        """Whether samples should carry capture times."""
        return self._timestamp

    @timestamp.setter
    def timestamp(self, value: bool) -> None:
        self._timestamp = bool(value)

    @property
    def name(self) -> str:
        """Human-readable sensor name used in logs."""
        return type(self).__name__

    @abstractmethod
    def has_data(self) -> bool:
        """Return True when a reading is ready. Must not block or consume data."""
        pass

    @abstractmethod
    async def pop_data(self) -> Sample:
        """Remove and return the next buffered reading."""
        pass

    @abstractmethod
    def extract_state(self, sample: Sample) -> NamedState:
        """Turn a sample into this sensor's named state contribution.

        Returns:
            Mapping of sensor-defined keys to values. Values that should
            receive a ``$timestamp`` must be mutable mappings.
        """
        pass

    def __repr__(self) -> str:
        return f"<{self.name} timestamp={self._timestamp}>"

"""sensor-stream: merge asynchronous sensors into one ordered snapshot stream.

Importing the package reads settings once: ``.env``, ``.env.local``,
``.env.{APP_ENV}`` and ``.env.{APP_ENV}.local`` from the current working
directory are loaded into ``os.environ`` (variables already set are kept).
Logging is left to the host; sensor-stream events go to the
``sensor_stream.*`` stdlib loggers until ``configure_logging()`` is called.

Example:
    >>> from sensor_stream import QueueSensor, SensorArray
    >>> gps = QueueSensor("gps")
    >>> array = SensorArray.from_sensors([gps], delay=50)
    >>> async for snapshot in array:
    ...     print(snapshot["gps"])
"""

# Configuration first: the other modules read settings at import.
from sensor_stream.config import settings
from sensor_stream.array import (
    FRAME_SYNC,
    TIMESTAMP_KEY,
    FrameClock,
    IntervalFrameClock,
    ManualFrameClock,
    MergePolicy,
    SensorArray,
    StreamState,
)
from sensor_stream.exceptions import (
    ConfigurationError,
    DelayValidationError,
    SensorStreamError,
)
from sensor_stream.sensors import QueueSensor, Sample, Sensor, SystemMetricsSensor

__version__ = "0.1.0"

__all__ = [
    "settings",
    "SensorArray",
    "StreamState",
    "MergePolicy",
    "TIMESTAMP_KEY",
    "FRAME_SYNC",
    "FrameClock",
    "IntervalFrameClock",
    "ManualFrameClock",
    "Sensor",
    "Sample",
    "QueueSensor",
    "SystemMetricsSensor",
    "SensorStreamError",
    "ConfigurationError",
    "DelayValidationError",
]

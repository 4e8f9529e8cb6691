"""Sensor array multiplexer and its scheduler strategies."""

from sensor_stream.array.scheduler import (
    FRAME_SYNC,
    DelayStrategy,
    FixedDelay,
    FrameClock,
    FrameSync,
    IntervalFrameClock,
    ManualFrameClock,
)
from sensor_stream.array.sensor_array import TIMESTAMP_KEY, MergePolicy, SensorArray, StreamState

__all__ = [
    "SensorArray",
    "StreamState",
    "MergePolicy",
    "TIMESTAMP_KEY",
    "FRAME_SYNC",
    "DelayStrategy",
    "FixedDelay",
    "FrameSync",
    "FrameClock",
    "IntervalFrameClock",
    "ManualFrameClock",
]

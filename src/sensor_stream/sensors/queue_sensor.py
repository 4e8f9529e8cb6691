"""Generic buffered sensor fed by the host application."""

import asyncio
import time
from collections.abc import Mapping
from typing import Any

from sensor_stream.sensors.base import NamedState, Sample, Sensor
from sensor_stream.telemetry import get_logger

log = get_logger(__name__)


class QueueSensor(Sensor):
    """Sensor backed by an in-memory FIFO of pushed readings.

    Hosts call ``push`` from their own callbacks (serial reader, websocket
    handler, ...). Mapping payloads are contributed as-is under ``key``;
    scalar payloads are wrapped as ``{"value": payload}`` so they can carry
    a ``$timestamp``.

    Usage:
        >>> sensor = QueueSensor("temperature", maxsize=10)
        >>> sensor.push({"celsius": 21.5})
        >>> sensor.has_data()
        True
    """

    def __init__(self, key: str, maxsize: int = 0) -> None:
        """Initialize the sensor.

        Args:
            key: Top-level key this sensor contributes to snapshots.
            maxsize: Buffer bound. When full, the oldest reading is dropped.
                0 means unbounded.
        """
        super().__init__()
        if maxsize < 0:
            raise ValueError(f"maxsize must be >= 0, got {maxsize}")
        self.key = key
        self._queue: asyncio.Queue[Sample] = asyncio.Queue(maxsize=maxsize)
        self.dropped = 0

    @property
    def name(self) -> str:
        return f"QueueSensor[{self.key}]"

    def push(self, value: Any, timestamp: float | None = None) -> None:
        """Buffer a reading.

        Args:
            value: Reading payload.
            timestamp: Capture time (POSIX seconds). Defaults to now.
        """
        sample = Sample(value=value, timestamp=time.time() if timestamp is None else timestamp)
        if self._queue.full():
            self._queue.get_nowait()
            self.dropped += 1
            log.debug("queue_sensor_dropped_oldest", sensor=self.name, dropped=self.dropped)
        self._queue.put_nowait(sample)

    def pending(self) -> int:
        """Number of buffered readings."""
        return self._queue.qsize()

    def has_data(self) -> bool:
        return not self._queue.empty()

    async def pop_data(self) -> Sample:
        return await self._queue.get()

    def extract_state(self, sample: Sample) -> NamedState:
        if isinstance(sample.value, Mapping):
            return {self.key: dict(sample.value)}
        return {self.key: {"value": sample.value}}

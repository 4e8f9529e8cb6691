"""Host system metrics sensor using psutil.

Polls CPU, memory and disk usage. Readings that cannot be taken on the current
host (permissions, missing mounts, unsupported platform calls) are reported as
the ``UNAVAILABLE`` sentinel instead of raising, so one missing metric never
interrupts a stream.
"""

import asyncio
import time
from typing import Any

import psutil

from sensor_stream.config import settings
from sensor_stream.sensors.base import NamedState, Sample, Sensor
from sensor_stream.telemetry import SENSOR_UNAVAILABLE, SYSTEM_METRICS_SNAPSHOT, get_logger

log = get_logger(__name__)

UNAVAILABLE = "N/A"


def poll_system_metrics(disk_path: str = "/") -> dict[str, Any]:
    """Poll system metrics (CPU, memory, disk, load average).

    Blocks for ~100ms while psutil samples CPU usage; call it from a worker
    thread inside async code.

    Args:
        disk_path: Mount point used for disk usage.

    Returns:
        Dictionary of metrics. Example:
        {
            "cpu_load": 45.2,
            "cpu_count": 8,
            "load_avg": (1.2, 0.9, 0.7),
            "mem_used": 62.5,
            "disk_used": 78.1,
        }
    """
    metrics: dict[str, Any] = {
        "cpu_load": psutil.cpu_percent(interval=0.1),
        "cpu_count": psutil.cpu_count() or UNAVAILABLE,
        "mem_used": psutil.virtual_memory().percent,
    }

    try:
        metrics["load_avg"] = psutil.getloadavg()
    except (AttributeError, OSError):
        log.debug(SENSOR_UNAVAILABLE, metric="load_avg")
        metrics["load_avg"] = UNAVAILABLE

    try:
        disk = psutil.disk_usage(disk_path)
        metrics["disk_used"] = (disk.used / disk.total) * 100.0
    except (OSError, PermissionError):
        # May not have permission on some systems
        log.debug(SENSOR_UNAVAILABLE, metric="disk_used", path=disk_path)
        metrics["disk_used"] = UNAVAILABLE

    return metrics


class SystemMetricsSensor(Sensor):
    """Sensor reporting host resource usage at a bounded rate.

    Has data whenever ``interval_seconds`` elapsed since the previous pop, so a
    fast array cadence does not turn into back-to-back psutil polls.

    Usage:
        >>> array = SensorArray(delay=500)
        >>> array.add(SystemMetricsSensor(interval_seconds=1.0))
    """

    def __init__(
        self,
        key: str = "system",
        interval_seconds: float | None = None,
        disk_path: str = "/",
    ) -> None:
        """Initialize the sensor.

        Args:
            key: Top-level key this sensor contributes to snapshots.
            interval_seconds: Minimum time between readings.
                Defaults to settings.system_metrics_interval_seconds.
            disk_path: Mount point used for disk usage.
        """
        super().__init__()
        self.key = key
        self.interval_seconds = (
            interval_seconds
            if interval_seconds is not None
            else settings.system_metrics_interval_seconds
        )
        self.disk_path = disk_path
        self._last_poll: float | None = None

    def has_data(self) -> bool:
        if self._last_poll is None:
            return True
        return time.monotonic() - self._last_poll >= self.interval_seconds

    async def pop_data(self) -> Sample:
        self._last_poll = time.monotonic()
        metrics = await asyncio.to_thread(poll_system_metrics, self.disk_path)
        sample = Sample(value=metrics)

        log.debug(
            SYSTEM_METRICS_SNAPSHOT,
            sensor=self.name,
            cpu_load=metrics.get("cpu_load"),
            mem_used=metrics.get("mem_used"),
            disk_used=metrics.get("disk_used"),
        )
        return sample

    def extract_state(self, sample: Sample) -> NamedState:
        return {self.key: dict(sample.value)}

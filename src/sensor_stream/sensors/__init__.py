"""Sensor package.

Structure:
- base.py: Sensor interface and Sample value type
- queue_sensor.py: Buffered sensor fed by host callbacks
- system.py: Host resource usage via psutil
"""

from sensor_stream.sensors.base import NamedState, Sample, Sensor
from sensor_stream.sensors.queue_sensor import QueueSensor
from sensor_stream.sensors.system import UNAVAILABLE, SystemMetricsSensor, poll_system_metrics

__all__ = [
    "Sensor",
    "Sample",
    "NamedState",
    "QueueSensor",
    "SystemMetricsSensor",
    "poll_system_metrics",
    "UNAVAILABLE",
]

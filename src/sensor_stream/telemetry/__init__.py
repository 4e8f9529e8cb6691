"""Telemetry module for structured logging.

This module provides:
- Structured logging via structlog
- Semantic event constants
"""

from sensor_stream.telemetry.events import (
    DELAY_CHANGED,
    SENSOR_REGISTERED,
    SENSOR_REJECTED,
    SENSOR_REMOVED,
    SENSOR_UNAVAILABLE,
    SNAPSHOT_EMITTED,
    STATE_TRANSITION,
    STREAM_CYCLE_FAILED,
    STREAM_STARTED,
    STREAM_STOPPED,
    SYSTEM_METRICS_SNAPSHOT,
)
from sensor_stream.telemetry.logger import (
    configure_library_logging,
    configure_logging,
    get_logger,
)

__all__ = [
    # Core exports
    "get_logger",
    "configure_logging",
    "configure_library_logging",
    # Event constants
    "STATE_TRANSITION",
    "STREAM_STARTED",
    "STREAM_STOPPED",
    "STREAM_CYCLE_FAILED",
    "SNAPSHOT_EMITTED",
    "DELAY_CHANGED",
    "SENSOR_REGISTERED",
    "SENSOR_REJECTED",
    "SENSOR_REMOVED",
    "SENSOR_UNAVAILABLE",
    "SYSTEM_METRICS_SNAPSHOT",
]

"""Semantic event constants for structured logging.

All log events should use these constants rather than magic strings so the
JSONL output can be filtered reliably.
"""

# Stream lifecycle events
STATE_TRANSITION = "state_transition"
STREAM_STARTED = "stream_started"
STREAM_STOPPED = "stream_stopped"
STREAM_CYCLE_FAILED = "stream_cycle_failed"
SNAPSHOT_EMITTED = "snapshot_emitted"
DELAY_CHANGED = "delay_changed"

# Sensor registration events
SENSOR_REGISTERED = "sensor_registered"
SENSOR_REJECTED = "sensor_rejected"
SENSOR_REMOVED = "sensor_removed"

# Sensor events
SENSOR_UNAVAILABLE = "sensor_unavailable"
SYSTEM_METRICS_SNAPSHOT = "system_metrics_snapshot"

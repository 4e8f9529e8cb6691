"""Command-line interface for sensor-stream.

Run with:
    sensor-stream watch --delay 500 --count 10

Note: CLI components are not exported here so ``python -m sensor_stream.ui.cli``
does not import the module twice.
"""

__all__ = []

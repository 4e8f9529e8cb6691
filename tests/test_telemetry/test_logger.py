"""Tests for structured logging configuration."""

import json
import logging
import os
import pathlib
import subprocess
import sys
import textwrap

import pytest
import structlog

from sensor_stream.telemetry import SENSOR_REGISTERED
from sensor_stream.telemetry.logger import (
    configure_library_logging,
    configure_logging,
    get_logger,
)

SRC_DIR = pathlib.Path(__file__).resolve().parents[2] / "src"


@pytest.fixture(autouse=True)
def restore_logging():
    """Put back the root logger and library configuration after each test."""
    handlers = list(logging.root.handlers)
    level = logging.root.level
    yield
    for handler in logging.root.handlers:
        if handler not in handlers:
            handler.close()
    logging.root.handlers[:] = handlers
    logging.root.setLevel(level)
    structlog.reset_defaults()
    configure_library_logging()


class ListHandler(logging.Handler):
    """Collects formatted records, standing in for a host application handler."""

    def __init__(self) -> None:
        super().__init__()
        self.messages: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(self.format(record))


@pytest.fixture
def file_logging(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> pathlib.Path:
    """Enable JSONL file logging into a temporary directory."""
    log_dir = tmp_path / "logs"
    monkeypatch.setenv("SENSOR_STREAM_LOG_TO_FILE", "1")
    monkeypatch.setenv("SENSOR_STREAM_LOG_DIR", str(log_dir))
    monkeypatch.setenv("SENSOR_STREAM_LOG_LEVEL", "DEBUG")
    structlog.reset_defaults()
    logging.root.handlers.clear()
    configure_logging()
    return log_dir


def _last_entry(log_dir: pathlib.Path) -> dict:
    lines = (log_dir / "current.jsonl").read_text(encoding="utf-8").splitlines()
    assert lines
    return json.loads(lines[-1])


class TestLoggerConfiguration:
    """Test logger configuration and setup."""

    def test_get_logger_returns_bound_logger(self) -> None:
        """Test that get_logger returns a usable logger."""
        log = get_logger(__name__)
        assert hasattr(log, "info")
        assert hasattr(log, "warning")
        assert hasattr(log, "error")

    def test_get_logger_configures_on_first_call(self) -> None:
        """Test that get_logger configures structlog lazily."""
        structlog.reset_defaults()

        get_logger("test.module1")
        assert structlog.is_configured()

    def test_get_logger_leaves_host_handlers(self) -> None:
        """Test lazy configuration keeps the host's root handlers and level."""
        host = ListHandler()
        logging.root.addHandler(host)
        logging.root.setLevel(logging.WARNING)
        structlog.reset_defaults()

        log = get_logger("sensor_stream.array.sensor_array")
        log.info(SENSOR_REGISTERED, sensor="QueueSensor[gps]")
        log.warning("sensor_rejected", candidate="42")

        assert host in logging.root.handlers
        assert logging.root.level == logging.WARNING
        assert len(host.messages) == 1
        assert host.messages[0].startswith("event='sensor_rejected'")
        assert "candidate='42'" in host.messages[0]

    def test_import_leaves_host_logging(self, tmp_path: pathlib.Path) -> None:
        """Test importing the package does not replace the host's root handlers."""
        script = textwrap.dedent(
            """
            import logging
            import sys

            host = logging.StreamHandler(sys.stdout)
            root = logging.getLogger()
            root.addHandler(host)
            root.setLevel(logging.WARNING)

            import sensor_stream

            sensor_stream.SensorArray().add(42)
            print(host in root.handlers, logging.getLevelName(root.level))
            """
        )
        env = {**os.environ, "PYTHONPATH": str(SRC_DIR)}

        result = subprocess.run(
            [sys.executable, "-c", script],
            cwd=tmp_path,
            env=env,
            capture_output=True,
            text=True,
            check=True,
        )

        lines = result.stdout.splitlines()
        assert lines[-1] == "True WARNING"
        assert any("sensor_rejected" in line for line in lines[:-1])

    def test_no_file_handler_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test only the console handler is installed without file logging."""
        monkeypatch.delenv("SENSOR_STREAM_LOG_TO_FILE", raising=False)
        structlog.reset_defaults()
        logging.root.handlers.clear()

        configure_logging()

        assert len(logging.root.handlers) == 1
        assert isinstance(logging.root.handlers[0], logging.StreamHandler)

    def test_file_logging_creates_directory(self, file_logging: pathlib.Path) -> None:
        """Test the log directory is created on configuration."""
        assert file_logging.is_dir()

    def test_emits_structured_json(self, file_logging: pathlib.Path) -> None:
        """Test events are written as JSON with their keyword context."""
        log = get_logger("sensor_stream.array.sensor_array")
        log.info(SENSOR_REGISTERED, sensor="QueueSensor[gps]", sensors=1)

        entry = _last_entry(file_logging)
        assert entry["event"] == "sensor_registered"
        assert entry["sensor"] == "QueueSensor[gps]"
        assert entry["sensors"] == 1
        assert entry["level"] == "info"
        assert "timestamp" in entry

    def test_component_from_logger_name(self, file_logging: pathlib.Path) -> None:
        """Test the component is the last part of the logger name."""
        get_logger("sensor_stream.sensors.system").info("metrics_read")
        assert _last_entry(file_logging)["component"] == "system"

    def test_explicit_component_wins(self, file_logging: pathlib.Path) -> None:
        """Test a component keyword is not overwritten."""
        get_logger("sensor_stream.sensors.system").info("metrics_read", component="custom")
        assert _last_entry(file_logging)["component"] == "custom"

    def test_stdlib_loggers_are_formatted(self, file_logging: pathlib.Path) -> None:
        """Test plain logging records pass through the JSON formatter."""
        logging.getLogger("thirdparty.driver").warning("device busy")

        entry = _last_entry(file_logging)
        assert entry["event"] == "device busy"
        assert entry["component"] == "driver"

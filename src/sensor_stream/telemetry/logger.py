"""Structured logging configuration using structlog.

This module configures structlog for structured logging with:
- Pretty-printed console output on stderr
- Optional JSON lines file output with rotation
- UTC timestamps
- Component tracking derived from the logger name
"""

import logging
import logging.handlers
import pathlib
import sys
from datetime import datetime, timezone
from typing import Any

import structlog


def _get_log_level() -> str:
    """Get log level from configuration.

    Returns:
        Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    # Settings import logging themselves, so the level is bootstrapped from the environment.
    from sensor_stream.config.bootstrap import get_bootstrap_log_level  # noqa: PLC0415

    return get_bootstrap_log_level()


def _get_file_logging() -> tuple[bool, pathlib.Path]:
    """Get file logging switch and log directory.

    Returns:
        Tuple of (log_to_file, log_dir).
    """
    from sensor_stream.config.bootstrap import get_bootstrap_log_dir  # noqa: PLC0415
    from sensor_stream.config.bootstrap import get_bootstrap_log_to_file  # noqa: PLC0415

    return get_bootstrap_log_to_file(), get_bootstrap_log_dir()


def _add_timestamp(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add UTC timestamp to log event.

    Args:
        logger: The logger instance.
        method_name: The log method name (info, error, etc.).
        event_dict: The event dictionary.

    Returns:
        Event dictionary with timestamp added.
    """
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _add_component_from_event_dict(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add component name from the logger name stored in the event dict.

    Runs after structlog's add_logger_name processor. An explicit
    ``component=`` keyword passed by the caller wins.

    Args:
        logger: The structlog logger instance.
        method_name: The log method name (info, error, etc.).
        event_dict: The event dictionary.

    Returns:
        Event dictionary with component added.
    """
    logger_name = event_dict.get("logger", "")
    event_dict.setdefault("component", logger_name.split(".")[-1] or "unknown")
    return event_dict


def _configure_file_handler(log_dir: pathlib.Path) -> logging.handlers.RotatingFileHandler:
    """Configure rotating file handler for JSON logs.

    Args:
        log_dir: Directory for log files.

    Returns:
        Configured RotatingFileHandler.
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        filename=str(log_dir / "current.jsonl"),
        maxBytes=20 * 1024 * 1024,  # 20 MB
        backupCount=5,
        encoding="utf-8",
    )
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.add_logger_name,
                _add_timestamp,  # type: ignore[list-item]
                _add_component_from_event_dict,  # type: ignore[list-item]
            ],
        )
    )
    return handler


def _configure_console_handler() -> logging.StreamHandler[Any]:
    """Configure console handler for pretty-printed logs.

    Returns:
        Configured StreamHandler.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
            foreign_pre_chain=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.add_logger_name,
                _add_timestamp,  # type: ignore[list-item]
                _add_component_from_event_dict,  # type: ignore[list-item]
            ],
        )
    )
    return handler


def _event_processors() -> list[Any]:
    """Processors shared by library and application configuration."""
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        _add_component_from_event_dict,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def configure_library_logging() -> None:
    """Route structlog events into stdlib logging without installing handlers.

    Events are rendered to ``key=value`` strings and handed to the
    ``sensor_stream.*`` stdlib loggers, so the host's own handlers and levels
    decide what is shown. The root logger is left untouched.
    """
    structlog.configure(
        processors=[
            *_event_processors(),
            structlog.processors.KeyValueRenderer(key_order=["event"], drop_missing=True),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        # Not cached, so a later configure_logging() still applies to module loggers
        cache_logger_on_first_use=False,
    )


def configure_logging() -> None:
    """Configure structlog and the root logger for the sensor-stream CLI.

    Replaces the root logger's handlers with a console handler (and a JSONL
    file handler when file logging is enabled). Applications embedding
    sensor-stream call this only if they want that output; importing the
    package never does.
    """
    log_level = _get_log_level()
    log_to_file, log_dir = _get_file_logging()

    # Root logger accepts all levels; handlers gate output.
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    logging.getLogger("asyncio").setLevel(logging.WARNING)

    configured_level = getattr(logging, log_level, logging.INFO)

    if log_to_file:
        file_handler = _configure_file_handler(log_dir)
        file_handler.setLevel(logging.INFO)
        root_logger.addHandler(file_handler)

    console_handler = _configure_console_handler()
    console_handler.setLevel(configured_level)
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            *_event_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:  # Returns structlog.stdlib.BoundLogger
    """Get a structured logger instance.

    Falls back to library configuration when nothing configured structlog
    yet; handlers are never installed here.

    Args:
        name: Logger name (typically __name__ of the calling module).

    Returns:
        Configured structlog logger instance.

    Example:
        >>> from sensor_stream.telemetry import get_logger
        >>> log = get_logger(__name__)
        >>> log.info("sensor_registered", sensor="QueueSensor", count=1)
    """
    if not structlog.is_configured():
        configure_library_logging()

    return structlog.get_logger(name)

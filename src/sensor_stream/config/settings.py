"""Application configuration settings.

This module provides the AppConfig class and settings singleton.
"""

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sensor_stream.config.env_loader import Environment, get_environment, load_env_files
from sensor_stream.config.validators import (
    resolve_path,
    validate_delay,
    validate_log_format,
    validate_log_level,
)
from sensor_stream.telemetry import get_logger

log = get_logger(__name__)


class AppConfig(BaseSettings):
    """Unified application configuration.

    Loads configuration from environment variables (``SENSOR_STREAM_`` prefix),
    .env files and defaults. Validates all values using Pydantic.
    """

    model_config = SettingsConfigDict(
        # .env files are loaded manually via env_loader to honor the priority order
        env_prefix="SENSOR_STREAM_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Environment = Field(
        default_factory=get_environment, description="Current environment"
    )
    debug: bool = Field(default=False, description="Debug mode flag")

    # Telemetry
    log_level: str = Field(
        default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: str = Field(default="console", description="Log format (json or console)")
    log_dir: Path = Field(default=Path("telemetry/logs"), description="Log directory path")
    log_to_file: bool = Field(default=False, description="Write JSONL logs under log_dir")

    # Sensor array defaults
    default_delay: int | str = Field(
        default=0, description="Inter-cycle delay in milliseconds, or 'frame_sync'"
    )
    default_accumulate: bool = Field(
        default=False, description="Fold snapshots into one cumulative state"
    )
    default_timestamp: bool = Field(
        default=True, description="Attach $timestamp to snapshots and sensor fields"
    )

    # Scheduling
    frame_rate_hz: float = Field(
        default=60.0, gt=0, le=1000, description="Refresh rate of the default frame clock"
    )

    # Built-in sensors
    system_metrics_interval_seconds: float = Field(
        default=1.0, gt=0, description="Minimum time between system metrics readings"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        return validate_log_level(v)

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        return validate_log_format(v)

    @field_validator("log_dir", mode="before")
    @classmethod
    def resolve_paths(cls, v: Path | str) -> Path:
        """Resolve relative paths to absolute."""
        return resolve_path(v)

    @field_validator("default_delay", mode="before")
    @classmethod
    def validate_default_delay(cls, v: Any) -> int | str:
        """Validate the default delay with the same rules as SensorArray.delay."""
        return validate_delay(v)


_settings: AppConfig | None = None


def load_app_config() -> AppConfig:
    """Load and validate application configuration.

    This function:
    1. Loads .env files in priority order (via env_loader)
    2. Creates AppConfig instance (reads from environment variables)
    3. Validates all values using Pydantic

    Returns:
        Validated AppConfig instance.

    Raises:
        ValidationError: If configuration validation fails.
    """
    load_env_files()

    try:
        config = AppConfig()
    except Exception as e:
        log.error("app_config_load_failed", error=str(e), error_type=type(e).__name__)
        raise

    log.debug(
        "app_config_loaded",
        environment=config.environment.value,
        log_level=config.log_level,
        default_delay=config.default_delay,
        default_accumulate=config.default_accumulate,
        default_timestamp=config.default_timestamp,
    )
    return config


def get_settings() -> AppConfig:
    """Get the application settings singleton.

    Returns:
        AppConfig instance (singleton pattern).
    """
    global _settings
    if _settings is None:
        _settings = load_app_config()
    return _settings

"""Configuration management for sensor-stream.

Single source of truth for configuration, integrating environment variables,
.env files and defaults.

The ``settings`` singleton is built on import, which loads the ``.env*``
files of the current working directory into ``os.environ`` without
overriding variables that are already set.
"""

from sensor_stream.config.env_loader import Environment, get_environment
from sensor_stream.config.settings import AppConfig, get_settings, load_app_config
from sensor_stream.config.validators import FRAME_SYNC, validate_delay

# Singleton instance
settings = get_settings()

__all__ = [
    "settings",
    "AppConfig",
    "get_settings",
    "load_app_config",
    "Environment",
    "get_environment",
    "FRAME_SYNC",
    "validate_delay",
]

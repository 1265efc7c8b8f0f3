"""Configuration management for cmdwatch.

Provides layered YAML-based configuration with:
- System-level config (/etc/cmdwatch/ or %PROGRAMDATA%)
- User-level config (~/.config/cmdwatch/ or %APPDATA%)
- Project-level config (./.cmdwatch/)
- Environment variable and command-line overrides (highest priority)

Example usage:
    from cmdwatch.config import load_config

    config = load_config(["make", "test"], overrides={"delay": 2})
    print(config.command.argv)
"""

from cmdwatch.config.loader import (
    deep_merge,
    dict_to_config,
    load_config,
    load_yaml_file,
)
from cmdwatch.config.paths import get_config_paths
from cmdwatch.config.schema import (
    CommandSpec,
    LoggingConfig,
    WatchConfig,
)

__all__ = [
    # Main API
    "WatchConfig",
    "load_config",
    "load_yaml_file",
    "dict_to_config",
    "deep_merge",
    # Schema types
    "CommandSpec",
    "LoggingConfig",
    # Path utilities
    "get_config_paths",
]

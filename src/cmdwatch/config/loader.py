"""Configuration file loading.

Handles:
- YAML file parsing
- Layering of system, user, project and explicit config files
- Environment variable and command-line overrides
- Validation into the frozen WatchConfig dataclass
"""

from __future__ import annotations

import logging
import math
import os
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import yaml

from cmdwatch.config.paths import get_config_paths
from cmdwatch.config.schema import (
    DEFAULT_DELAY,
    DEFAULT_SCREEN,
    DEFAULT_TIMEOUT,
    CommandSpec,
    LoggingConfig,
    WatchConfig,
)
from cmdwatch.errors import ConfigError

# Module logger (may not be configured yet at import time)
_log = logging.getLogger("cmdwatch.config")


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file, returning empty dict if not found or invalid."""
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if isinstance(data, dict) else {}
    except yaml.YAMLError as e:
        _log.warning("Invalid YAML in %s: %s", path, e)
        return {}
    except PermissionError:
        _log.debug("Permission denied reading %s", path)
        return {}
    except OSError as e:
        _log.warning("Error reading %s: %s", path, e)
        return {}


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into a copy of ``base``.

    Nested dicts merge recursively, anything else (lists included) is
    replaced, and None in ``override`` leaves the base value alone.
    """
    result = base.copy()
    for key, value in override.items():
        if value is None:
            continue
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        else:
            result[key] = value
    return result


def env_overrides() -> dict[str, Any]:
    """Build config dict from environment variables."""
    overrides: dict[str, Any] = {}

    log_path = os.environ.get("CMDWATCH_LOG")
    if log_path:
        overrides["logging"] = {"file": log_path}

    return overrides


def _seconds(data: dict[str, Any], key: str, default: float) -> float:
    value = data.get(key, default)
    if isinstance(value, bool):
        raise ConfigError(f"invalid {key} {value!r}: expected seconds")
    try:
        seconds = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"invalid {key} {value!r}: expected seconds") from e
    if not math.isfinite(seconds):
        raise ConfigError(f"invalid {key} {value!r}: must be finite")
    if seconds < 0:
        raise ConfigError(f"invalid {key} {value!r}: must not be negative")
    return seconds


def _paths(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, list) and all(isinstance(p, str) for p in value):
        return " ".join(value)
    raise ConfigError(f"invalid paths {value!r}: expected a string or a list of strings")


def dict_to_config(data: dict[str, Any], command: Sequence[str]) -> WatchConfig:
    """Convert merged dict plus the command line into a WatchConfig.

    Raises:
        ConfigError: If no command is given or a value is invalid.
    """
    if not command:
        raise ConfigError("No command specified.")

    timeout = _seconds(data, "timeout", DEFAULT_TIMEOUT)
    if timeout == 0:
        raise ConfigError("invalid timeout 0: must be positive")

    log_data = data.get("logging") or {}
    if not isinstance(log_data, dict):
        raise ConfigError(f"invalid logging section {log_data!r}")

    return WatchConfig(
        command=CommandSpec(name=command[0], args=tuple(command[1:]), timeout=timeout),
        delay=_seconds(data, "delay", DEFAULT_DELAY),
        paths=_paths(data.get("paths")),
        screen=str(data.get("screen") or DEFAULT_SCREEN),
        verbose=bool(data.get("verbose", False)),
        logging=LoggingConfig(
            level=log_data.get("level"),
            file=log_data.get("file"),
        ),
    )


def load_config(
    command: Sequence[str],
    overrides: dict[str, Any] | None = None,
    config_path: Path | None = None,
    project_root: str | Path | None = ".",
) -> WatchConfig:
    """Load and merge config from all sources.

    Priority order (highest to lowest):
    1. Command-line overrides
    2. Environment variables
    3. Explicit config file (--config)
    4. Project config (./.cmdwatch/config.yaml)
    5. User config (~/.config/cmdwatch/config.yaml or %APPDATA%)
    6. System config (/etc/cmdwatch/ or %PROGRAMDATA%)

    Args:
        command: Executable followed by its arguments.
        overrides: Values given on the command line; None entries are ignored.
        config_path: Explicit config file; must exist.
        project_root: Directory holding the project-level config.

    Returns:
        The validated WatchConfig.
    """
    merged: dict[str, Any] = {}

    for path in get_config_paths(project_root):
        config_data = load_yaml_file(path)
        if config_data:
            _log.debug("Loaded config from %s", path)
            merged = deep_merge(merged, config_data)

    if config_path is not None:
        if not config_path.is_file():
            raise ConfigError(f"config file not found: {config_path}")
        merged = deep_merge(merged, load_yaml_file(config_path))

    merged = deep_merge(merged, env_overrides())
    if overrides:
        merged = deep_merge(merged, overrides)

    return dict_to_config(merged, command)

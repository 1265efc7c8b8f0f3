"""Logging configuration for cmdwatch.

Uses Python's standard logging module with support for:
- File logging via config or CMDWATCH_LOG environment variable
- Debug diagnostics on stderr with -v
- Structured format with timestamps and level names
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cmdwatch.config.schema import LoggingConfig

# Module-level logger
logger = logging.getLogger("cmdwatch")

_initialized = False

# Map string level names to logging constants
_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class _LowercaseLevelFormatter(logging.Formatter):
    """Formatter that emits lowercase level names."""

    def format(self, record: logging.LogRecord) -> str:
        record.levelname = record.levelname.lower()
        return super().format(record)


def resolve_level(config: LoggingConfig | None = None, verbose: bool = False) -> int:
    """Pick the log level: -v wins, then config.level, then WARNING."""
    if verbose:
        return logging.DEBUG
    if config and config.level:
        return _LEVEL_MAP.get(config.level.upper(), logging.WARNING)
    return logging.WARNING


def setup_logging(config: LoggingConfig | None = None, verbose: bool = False) -> None:
    """Initialize logging based on configuration.

    Call this once at startup. Subsequent calls are no-ops.

    Args:
        config: Optional LoggingConfig with level and file settings.
        verbose: True when -v was given; forces debug output.
    """
    global _initialized
    if _initialized:
        return
    _initialized = True

    log_level = resolve_level(config, verbose)
    logger.setLevel(log_level)
    # The watched command owns stdout; never let records reach the root logger
    logger.propagate = False

    # Format: HH:MM:SS level: message
    formatter = _LowercaseLevelFormatter(
        "%(asctime)s %(levelname)s: %(message)s", datefmt="%H:%M:%S"
    )

    log_path = config.file if config and config.file else os.environ.get("CMDWATCH_LOG")

    if log_path:
        log_path = os.path.expanduser(log_path)
        try:
            file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            print(f"[cmdwatch] Failed to open log file: {e}", file=sys.stderr)
            _add_stderr_handler(formatter, log_level)
    else:
        _add_stderr_handler(formatter, log_level)


def _add_stderr_handler(formatter: logging.Formatter, level: int = logging.DEBUG) -> None:
    """Add a stderr handler to the logger."""
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(level)
    stderr_handler.setFormatter(formatter)
    logger.addHandler(stderr_handler)


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Optional name for a child logger (e.g., "terminal", "watching").
              If None, returns the root cmdwatch logger.

    Returns:
        A configured logger instance.
    """
    if name:
        return logger.getChild(name)
    return logger

"""Configuration schema dataclasses for cmdwatch.

The settings are resolved once at startup and never mutated; every
component receives the pieces it needs through its constructor.
"""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_DELAY = 1.0
DEFAULT_TIMEOUT = 60.0
DEFAULT_SCREEN = "plain"


@dataclass(frozen=True)
class CommandSpec:
    """The watched command.

    Example:
        CommandSpec(name="make", args=("test",), timeout=60.0)
    """

    name: str  # Executable, resolved through PATH
    args: tuple[str, ...] = ()
    timeout: float = DEFAULT_TIMEOUT  # Seconds before the process is killed

    @property
    def argv(self) -> list[str]:
        """Full argument vector, executable first."""
        return [self.name, *self.args]


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str | None = None  # DEBUG, INFO, WARNING, ERROR
    file: str | None = None  # Log file path


@dataclass(frozen=True)
class WatchConfig:
    """Root configuration object.

    Example config.yaml:
        delay: 2
        timeout: 30
        paths:
          - src
          - pyproject.toml
        screen: vt100
        logging:
          level: info
          file: ~/cmdwatch.log
    """

    command: CommandSpec
    delay: float = DEFAULT_DELAY  # Seconds slept before every cycle
    paths: str = ""  # Whitespace-separated files/directories; empty disables watching
    screen: str = DEFAULT_SCREEN  # Display backend name
    verbose: bool = False
    logging: LoggingConfig = field(default_factory=LoggingConfig)

"""Exception types for cmdwatch.

Every fatal condition is a WatchError. The CLI layer is the only place
that catches them; it prints the message once and exits with the
error's exit code.
"""

from __future__ import annotations


class WatchError(Exception):
    """Fatal error that terminates the watch loop."""

    exit_code: int = 1


class ConfigError(WatchError):
    """Invalid configuration (bad watch path, missing command, bad values)."""

    pass


class UnknownScreenError(ConfigError):
    """The requested display backend does not exist."""

    exit_code = 2

    def __init__(self, screen: str) -> None:
        super().__init__(f"Unknown screen type: {screen}")
        self.screen = screen


class CommandTimeoutError(WatchError):
    """The watched command did not finish within its timeout."""

    pass


class CommandExecutionError(WatchError):
    """The watched command could not be executed at all."""

    pass


class PathWatchError(WatchError):
    """A watched file or directory could not be walked or read."""

    pass

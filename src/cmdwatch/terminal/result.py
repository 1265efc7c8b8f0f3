"""Command execution result dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Outcome(Enum):
    """Classified result of one command execution.

    - CLEAN: process exited with status 0
    - EXIT: process exited with a non-zero status (or died from a signal)
    - TIMEOUT: the deadline elapsed; the process was killed
    - ERROR: the process could not be spawned or read
    """

    CLEAN = "clean"
    EXIT = "exit"
    TIMEOUT = "timeout"
    ERROR = "error"


@dataclass(frozen=True)
class CommandResult:
    """Result of a single command execution.

    Attributes:
        outcome: Classified outcome, see Outcome.
        exit_code: Process exit code, or None on timeout/spawn error.
        error: Underlying exception for Outcome.ERROR, else None.
        duration_ms: Execution duration in milliseconds.
    """

    outcome: Outcome
    exit_code: int | None = None
    error: BaseException | None = None
    duration_ms: float = 0.0

    @property
    def success(self) -> bool:
        """True if command completed with exit code 0."""
        return self.outcome is Outcome.CLEAN

    def __repr__(self) -> str:
        if self.outcome is Outcome.EXIT:
            return f"<CommandResult exit={self.exit_code}>"
        if self.outcome is Outcome.ERROR:
            return f"<CommandResult error={self.error!r}>"
        return f"<CommandResult {self.outcome.value}>"

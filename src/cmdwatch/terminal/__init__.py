"""Execution of the watched command.

Provides CommandRunner, which spawns the command under a deadline,
captures its combined output and reports whether that output changed
since the previous run.
"""

from cmdwatch.terminal.result import CommandResult, Outcome
from cmdwatch.terminal.runner import CommandRunner

__all__ = [
    "CommandResult",
    "CommandRunner",
    "Outcome",
]

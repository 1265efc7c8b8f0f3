"""Subprocess runner for the watched command."""

from __future__ import annotations

import asyncio
import contextlib
import os
import signal
import time

from cmdwatch.config.schema import CommandSpec
from cmdwatch.fingerprint import EMPTY, checksum
from cmdwatch.logging import get_logger
from cmdwatch.terminal.result import CommandResult, Outcome

log = get_logger("terminal")

# The command gets its own process group so a timeout kills its children too
_POSIX = os.name == "posix"


class CommandRunner:
    """Runs one command repeatedly and tracks whether its output changed.

    stdout and stderr share one pipe, so the captured buffer holds both
    streams in the order the process wrote them. Change detection works
    on the raw bytes; ``output()`` is only for emptiness checks.

    Example:
        runner = CommandRunner(CommandSpec("date", timeout=5))
        result = await runner.run()
        if runner.has_changed():
            print(runner.buffer.decode())
    """

    def __init__(self, spec: CommandSpec) -> None:
        self._spec = spec
        self._buffer = b""
        self._previous = EMPTY
        self._result: CommandResult | None = None

    @property
    def spec(self) -> CommandSpec:
        return self._spec

    @property
    def buffer(self) -> bytes:
        """Raw output captured by the most recent run."""
        return self._buffer

    @property
    def result(self) -> CommandResult | None:
        """Result of the most recent run, or None before the first one."""
        return self._result

    def has_changed(self) -> bool:
        """True if the last run's output differs from the run before it."""
        return self._previous != checksum(self._buffer)

    def output(self) -> str:
        """Captured output with surrounding whitespace removed."""
        return self._buffer.decode("utf-8", errors="replace").strip()

    async def run(self) -> CommandResult:
        """Execute the command once, bounded by the configured timeout.

        Returns:
            CommandResult classified as timeout, exit, error or clean,
            in that order of precedence.
        """
        self._previous = checksum(self._buffer)
        self._buffer = b""

        start_time = time.perf_counter()
        result = await self._execute()
        self._result = CommandResult(
            outcome=result.outcome,
            exit_code=result.exit_code,
            error=result.error,
            duration_ms=(time.perf_counter() - start_time) * 1000,
        )
        log.debug(
            "ran %s: %s in %.1fms, %d bytes",
            self._spec.name,
            self._result.outcome.value,
            self._result.duration_ms,
            len(self._buffer),
        )
        return self._result

    async def _execute(self) -> CommandResult:
        try:
            process = await asyncio.create_subprocess_exec(
                *self._spec.argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,  # Merge stderr into stdout
                start_new_session=_POSIX,
            )
        except OSError as e:
            # Command not found, permission denied, ...
            return CommandResult(outcome=Outcome.ERROR, error=e)

        chunks: list[bytes] = []
        try:
            await asyncio.wait_for(
                self._collect(process, chunks),
                timeout=self._spec.timeout,
            )
        except asyncio.TimeoutError:
            await self._kill(process)
            return CommandResult(outcome=Outcome.TIMEOUT)
        except asyncio.CancelledError:
            await self._kill(process)
            raise
        except OSError as e:
            await self._kill(process)
            return CommandResult(outcome=Outcome.ERROR, error=e)
        finally:
            self._buffer = b"".join(chunks)

        exit_code = process.returncode
        if exit_code != 0:
            return CommandResult(outcome=Outcome.EXIT, exit_code=exit_code)
        return CommandResult(outcome=Outcome.CLEAN, exit_code=0)

    @staticmethod
    async def _collect(process: asyncio.subprocess.Process, chunks: list[bytes]) -> None:
        """Read the merged output pipe to EOF, then reap the process."""
        assert process.stdout is not None
        while True:
            chunk = await process.stdout.read(65536)
            if not chunk:
                break
            chunks.append(chunk)
        await process.wait()

    @staticmethod
    async def _kill(process: asyncio.subprocess.Process) -> None:
        # Also reached after the leader exited while children still hold the pipe
        with contextlib.suppress(ProcessLookupError, PermissionError):
            if _POSIX:
                os.killpg(process.pid, signal.SIGKILL)
            else:
                process.kill()
        await process.wait()

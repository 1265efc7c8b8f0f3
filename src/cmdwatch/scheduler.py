"""The poll loop tying path watching, command execution and display together.

Each cycle:
1. Sleep for the configured delay (the first cycle too)
2. Refresh the path watcher; stop here if nothing changed
3. Run the command and turn its outcome into a status line
4. Redraw if the output changed, or if this was the first run ever

Timeouts and spawn errors end the loop by raising; a non-zero exit only
shows up in the status line.
"""

from __future__ import annotations

import asyncio
import contextlib
import threading
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from cmdwatch.errors import CommandExecutionError, CommandTimeoutError
from cmdwatch.logging import get_logger
from cmdwatch.terminal.result import CommandResult, Outcome

if TYPE_CHECKING:
    from cmdwatch.display.protocol import Screen
    from cmdwatch.terminal.runner import CommandRunner
    from cmdwatch.watching.watcher import NoPathWatcher, PathWatcher

log = get_logger("scheduler")

T = TypeVar("T")


@dataclass(frozen=True)
class CycleResult:
    """What happened during one cycle."""

    ran: bool  # The command was executed
    drawn: bool = False  # A frame was written to the screen
    result: CommandResult | None = None


def format_seconds(seconds: float) -> str:
    """Render a duration the way it was configured: 5 -> "5s", 0.5 -> "0.5s"."""
    if float(seconds).is_integer():
        return f"{int(seconds)}s"
    return f"{seconds:g}s"


def _resolve(future: asyncio.Future[T], result: T | None, error: BaseException | None) -> None:
    if future.done():  # Cancelled while the thread was still working
        return
    if error is not None:
        future.set_exception(error)
    else:
        future.set_result(result)


async def run_in_daemon_thread(func: Callable[[], T], name: str = "cmdwatch-update") -> T:
    """Run a blocking call on its own daemon thread and await its result.

    Unlike asyncio.to_thread(), nothing waits for the thread on shutdown:
    cancelling the await returns at once, and a call stuck in a blocking
    read (a FIFO, a slow network mount) cannot hold the process open.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[T] = loop.create_future()

    def target() -> None:
        result: T | None = None
        error: BaseException | None = None
        try:
            result = func()
        except Exception as e:
            error = e
        with contextlib.suppress(RuntimeError):  # Loop already closed
            loop.call_soon_threadsafe(_resolve, future, result, error)

    threading.Thread(target=target, name=name, daemon=True).start()
    return await future


class Scheduler:
    """Strictly sequential watch loop.

    Example:
        scheduler = Scheduler(runner, create_watcher("src"), screen, delay=1.0)
        await scheduler.run_forever()
    """

    def __init__(
        self,
        runner: CommandRunner,
        watcher: PathWatcher | NoPathWatcher,
        screen: Screen,
        delay: float,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._runner = runner
        self._watcher = watcher
        self._screen = screen
        self._delay = delay
        self._sleep = sleep
        self._first = True

    @property
    def has_run(self) -> bool:
        """True once the command has been executed at least once."""
        return not self._first

    async def run_forever(self) -> None:
        """Run cycles until a fatal error is raised or the task is cancelled."""
        while True:
            await self.run_cycle()

    async def run_cycle(self) -> CycleResult:
        """Run a single cycle.

        Raises:
            CommandTimeoutError: The command exceeded its timeout.
            CommandExecutionError: The command could not be executed.
            PathWatchError: A watched path could not be read.
        """
        await self._sleep(self._delay)

        await run_in_daemon_thread(self._watcher.update)
        if not self._watcher.has_changed():
            return CycleResult(ran=False)

        result = await self._runner.run()
        self._screen.set_status(self._status_for(result))

        drawn = False
        if self._runner.has_changed() or self._first:
            self._screen.write(self._runner.buffer)
            drawn = True
        else:
            log.debug("output unchanged, no redraw")
        self._first = False

        return CycleResult(ran=True, drawn=drawn, result=result)

    def _status_for(self, result: CommandResult) -> str:
        spec = self._runner.spec
        if result.outcome is Outcome.EXIT:
            return f"exit code {result.exit_code}"
        if result.outcome is Outcome.TIMEOUT:
            raise CommandTimeoutError(f"timeout after {format_seconds(spec.timeout)}")
        if result.outcome is Outcome.ERROR:
            raise CommandExecutionError(
                f"executing {spec.name!r} with args {list(spec.args)!r}: {result.error}"
            ) from result.error
        if not self._runner.output():
            return "no output"
        return ""

"""Watch session lifecycle: setup, signal handling and teardown."""

from __future__ import annotations

import asyncio
import contextlib
import signal
from typing import TYPE_CHECKING

from cmdwatch.display import create_screen
from cmdwatch.logging import get_logger
from cmdwatch.scheduler import Scheduler, format_seconds
from cmdwatch.terminal.runner import CommandRunner
from cmdwatch.watching.watcher import create_watcher

if TYPE_CHECKING:
    from cmdwatch.config.schema import WatchConfig
    from cmdwatch.display.screens import BaseScreen

log = get_logger()

# SIGKILL cannot be caught; SIGTERM is what `kill` sends by default
_STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def _install_stop_handlers(stop: asyncio.Event) -> list[signal.Signals]:
    """Route termination signals to ``stop``. Returns the signals installed."""
    loop = asyncio.get_running_loop()
    installed: list[signal.Signals] = []
    for sig in _STOP_SIGNALS:
        try:
            loop.add_signal_handler(sig, stop.set)
        except (NotImplementedError, RuntimeError):
            # Windows event loops; KeyboardInterrupt is handled by the CLI
            log.debug("cannot install handler for %s", sig.name)
            continue
        installed.append(sig)
    return installed


async def run_watch(config: WatchConfig, screen: BaseScreen | None = None) -> int:
    """Watch the configured command until interrupted.

    Args:
        config: Resolved configuration.
        screen: Screen to render to. Built from config.screen if None.

    Returns:
        Exit code 0 after a termination signal.

    Raises:
        WatchError: On any fatal error. The screen is torn down first.
    """
    # Validate everything before touching the terminal
    watcher = create_watcher(config.paths)
    if screen is None:
        screen = create_screen(config.screen)
    runner = CommandRunner(config.command)
    scheduler = Scheduler(runner, watcher, screen, delay=config.delay)

    log.debug("watching %r", config.command.argv)
    log.debug("delay %s", format_seconds(config.delay))
    log.debug("timeout %s", format_seconds(config.command.timeout))

    screen.set_name(config.command.name)
    screen.setup()

    stop = asyncio.Event()
    installed = _install_stop_handlers(stop)
    loop_task = asyncio.create_task(scheduler.run_forever(), name="cmdwatch-loop")
    stop_task = asyncio.create_task(stop.wait(), name="cmdwatch-stop")

    try:
        await asyncio.wait({loop_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)
        if stop_task.done():
            log.debug("termination signal received, shutting down")
            loop_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await loop_task
            return 0
        # run_forever() only ends by raising; result() re-raises
        loop_task.result()
        return 1
    finally:
        stop_task.cancel()
        if not loop_task.done():
            loop_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await loop_task
        loop = asyncio.get_running_loop()
        for sig in installed:
            loop.remove_signal_handler(sig)
        screen.teardown()

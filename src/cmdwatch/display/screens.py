"""Plain and VT100 screen implementations."""

from __future__ import annotations

import sys
from datetime import datetime
from typing import TextIO

# VT100 escape sequences
CLEAR = "\033[H\033[2J"
BOLD = "\033[1m"
RESET = "\033[0m"
HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"


def timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S")


class BaseScreen:
    """Shared state for the built-in screens.

    Output goes to ``stream``, or to whatever sys.stdout is at write time
    when no stream is given.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._name = ""
        self._status = ""
        self._torn_down = False

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    @property
    def name(self) -> str:
        return self._name

    @property
    def status(self) -> str:
        return self._status

    def set_name(self, name: str) -> None:
        self._name = name

    def set_status(self, status: str) -> None:
        self._status = status

    def header(self) -> str:
        """Frame header, e.g. ``WATCH make [12:00:01 exit code 2]``."""
        text = f"{self._title()} [{timestamp()}"
        if self._status:
            text += f" {self._status}"
        return text + "]"

    def write(self, data: bytes) -> None:
        output = data.decode("utf-8", errors="replace")
        self._emit(f"{self.header()}\n\n{output}")

    def setup(self) -> None:
        pass

    def teardown(self) -> None:
        if self._torn_down:
            return
        self._torn_down = True
        self._restore()

    def _title(self) -> str:
        return f"WATCH {self._name}"

    def _restore(self) -> None:
        pass

    def _emit(self, text: str) -> None:
        stream = self.stream
        stream.write(text)
        stream.flush()


class PlainScreen(BaseScreen):
    """Prints each frame after the previous one, no escape codes."""

    pass


class VT100Screen(BaseScreen):
    """Redraws each frame in place using VT100 escape codes."""

    def _title(self) -> str:
        return f"{CLEAR}{BOLD}WATCH {self._name}{RESET}"

    def setup(self) -> None:
        self._emit(HIDE_CURSOR)

    def _restore(self) -> None:
        self._emit(SHOW_CURSOR)

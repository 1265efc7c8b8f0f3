"""Display backends for cmdwatch.

Screens are looked up by name in SCREENS; the scheduler only talks to
the Screen protocol.
"""

from __future__ import annotations

from typing import TextIO

from cmdwatch.display.protocol import Screen
from cmdwatch.display.screens import BaseScreen, PlainScreen, VT100Screen
from cmdwatch.errors import UnknownScreenError

SCREENS: dict[str, type[BaseScreen]] = {
    "plain": PlainScreen,
    "vt100": VT100Screen,
}


def create_screen(name: str, stream: TextIO | None = None) -> BaseScreen:
    """Instantiate the screen registered under ``name``.

    Raises:
        UnknownScreenError: If no screen has that name.
    """
    try:
        screen_cls = SCREENS[name]
    except KeyError:
        raise UnknownScreenError(name) from None
    return screen_cls(stream)


__all__ = [
    "SCREENS",
    "BaseScreen",
    "PlainScreen",
    "Screen",
    "VT100Screen",
    "create_screen",
]

"""Display protocol consumed by the scheduler."""

from __future__ import annotations

from typing import Protocol


class Screen(Protocol):
    """Render target for command output.

    Implementations:
    - PlainScreen: header and output printed one frame after another
    - VT100Screen: clears the terminal and redraws in place
    """

    def set_name(self, name: str) -> None:
        """Set the name shown in every frame header. Called once."""
        ...

    def set_status(self, status: str) -> None:
        """Set the status shown in the next frame header."""
        ...

    def write(self, data: bytes) -> None:
        """Render one full frame of command output."""
        ...

    def setup(self) -> None:
        """Prepare the terminal. Called once at startup."""
        ...

    def teardown(self) -> None:
        """Restore the terminal. Runs at most once, also on interrupt."""
        ...

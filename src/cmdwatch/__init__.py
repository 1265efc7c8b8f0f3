"""cmdwatch - re-run a command and redraw its output when something changes."""

__version__ = "0.1.0"

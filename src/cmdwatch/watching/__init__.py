"""Path watching for cmdwatch.

Provides polling-based change detection over a fixed set of files and
directories. The command only runs on cycles where the watched contents
changed.
"""

from cmdwatch.watching.watcher import (
    NoPathWatcher,
    PathWatcher,
    WatchSet,
    create_watcher,
)

__all__ = [
    "NoPathWatcher",
    "PathWatcher",
    "WatchSet",
    "create_watcher",
]

"""Path watching implementation using polling.

Each update() re-reads every watched regular file and folds the
contents into one Adler-32 fingerprint. Directories are expanded again
on every poll, so files created after startup are picked up. Polling
is preferred over native file watchers for cross-platform reliability.
"""

from __future__ import annotations

import os
import queue
import stat
import threading
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from cmdwatch.errors import ConfigError, PathWatchError
from cmdwatch.fingerprint import Adler32
from cmdwatch.logging import get_logger

log = get_logger("watching")

# Bytes read per chunk when fingerprinting a file
READ_CHUNK = 64 * 1024

_DONE = object()


@dataclass(frozen=True)
class WatchSet:
    """Watched paths split into explicit files and directories to walk."""

    files: tuple[Path, ...] = ()
    dirs: tuple[Path, ...] = ()

    @classmethod
    def parse(cls, path_str: str) -> WatchSet:
        """Classify a whitespace-separated list of paths.

        Raises:
            ConfigError: If a path cannot be stat'ed.
        """
        files: list[Path] = []
        dirs: list[Path] = []
        for raw in path_str.split():
            path = Path(raw)
            try:
                is_dir = stat.S_ISDIR(path.stat().st_mode)
            except OSError as e:
                raise ConfigError(f"invalid path {raw!r}: {e}") from e
            (dirs if is_dir else files).append(path)
        return cls(files=tuple(files), dirs=tuple(dirs))

    def __bool__(self) -> bool:
        return bool(self.files or self.dirs)


class NoPathWatcher:
    """Stand-in used when no paths are configured: always reports a change."""

    def update(self) -> None:
        pass

    def has_changed(self) -> bool:
        return True


class PathWatcher:
    """Fingerprints the contents of a WatchSet on every poll.

    Files are enumerated in a fixed order: explicit files as configured,
    then each directory walked depth-first with entries sorted by name.
    Symlinks found while walking are not followed.

    A producer thread enumerates paths and hands them over through a
    one-slot queue; the caller reads and hashes them, so traversal and
    reading overlap.

    Example:
        watcher = PathWatcher(WatchSet.parse("src README.md"))
        watcher.update()
        if watcher.has_changed():
            ...
    """

    def __init__(self, watch_set: WatchSet) -> None:
        self._watch_set = watch_set
        self._hash = Adler32()
        self._previous = 0

    @property
    def watch_set(self) -> WatchSet:
        return self._watch_set

    @property
    def fingerprint(self) -> int:
        """Fingerprint finalized by the most recent update()."""
        return self._hash.sum()

    def has_changed(self) -> bool:
        """True if the last two update() calls saw different contents."""
        return self._previous != self._hash.sum()

    def iter_files(self) -> Iterator[Path]:
        """Yield every file to fingerprint, in hashing order.

        Raises:
            PathWatchError: If a directory cannot be walked.
        """
        yield from self._watch_set.files
        for directory in self._watch_set.dirs:
            yield from self._walk(directory)

    def update(self) -> None:
        """Recompute the fingerprint over all watched files.

        Blocks until every file has been read.

        Raises:
            PathWatchError: If a path disappeared or became unreadable.
        """
        self._previous = self._hash.sum()
        self._hash.reset()

        handoff: queue.Queue[object] = queue.Queue(maxsize=1)
        cancelled = threading.Event()
        producer = threading.Thread(
            target=self._produce,
            args=(handoff, cancelled),
            name="cmdwatch-walk",
            daemon=True,
        )
        producer.start()

        count = 0
        try:
            while True:
                item = handoff.get()
                if item is _DONE:
                    break
                if isinstance(item, Exception):
                    raise item
                assert isinstance(item, Path)
                self._hash_file(item)
                count += 1
        finally:
            cancelled.set()
            # Unblock a producer stuck on put() so it can see the cancel
            while producer.is_alive():
                try:
                    handoff.get(timeout=0.05)
                except queue.Empty:
                    pass
            producer.join()

        log.debug("hashed %d file(s): %08x", count, self._hash.sum())

    def _produce(self, handoff: queue.Queue[object], cancelled: threading.Event) -> None:
        try:
            for path in self.iter_files():
                if cancelled.is_set():
                    return
                handoff.put(path)
        except Exception as e:
            handoff.put(e)
            return
        handoff.put(_DONE)

    def _walk(self, directory: Path) -> Iterator[Path]:
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            raise PathWatchError(f"error walking {str(directory)!r}: {e}") from e

        for entry in entries:
            path = Path(entry.path)
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = not is_dir and entry.is_file(follow_symlinks=False)
            except OSError as e:
                raise PathWatchError(f"error walking {str(path)!r}: {e}") from e
            if is_dir:
                yield from self._walk(path)
            elif is_file:
                yield path

    def _hash_file(self, path: Path) -> None:
        try:
            with open(path, "rb") as f:
                while chunk := f.read(READ_CHUNK):
                    self._hash.write(chunk)
        except OSError as e:
            raise PathWatchError(f"error reading {str(path)!r}: {e}") from e


def create_watcher(path_str: str) -> PathWatcher | NoPathWatcher:
    """Build the watcher for a whitespace-separated path list.

    An empty list disables path watching: the command runs every cycle.

    Raises:
        ConfigError: If a listed path does not exist.
    """
    watch_set = WatchSet.parse(path_str)
    if not watch_set:
        return NoPathWatcher()
    log.debug(
        "watching %d file(s) and %d dir(s)", len(watch_set.files), len(watch_set.dirs)
    )
    return PathWatcher(watch_set)

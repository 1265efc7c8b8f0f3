"""Adler-32 fingerprints for change detection.

Fingerprints are only ever compared for equality. Adler-32 is cheap,
order-sensitive and streams, which is all change detection needs.
"""

from __future__ import annotations

import zlib

# Adler-32 of the empty byte string
EMPTY = 1


def checksum(data: bytes) -> int:
    """Return the 32-bit fingerprint of ``data``."""
    return zlib.adler32(data) & 0xFFFFFFFF


class Adler32:
    """Streaming Adler-32 accumulator.

    Writing ``b"foo"`` then ``b"bar"`` yields the same sum as writing
    ``b"foobar"`` once, so several sources can be fingerprinted without
    concatenating them in memory.

    Example:
        h = Adler32()
        h.write(b"foo")
        h.write(b"bar")
        assert h.sum() == checksum(b"foobar")
    """

    def __init__(self) -> None:
        self._value = EMPTY

    def write(self, data: bytes) -> int:
        """Feed ``data`` into the accumulator and return its length."""
        self._value = zlib.adler32(data, self._value) & 0xFFFFFFFF
        return len(data)

    def sum(self) -> int:
        """Return the fingerprint of everything written since the last reset."""
        return self._value

    def reset(self) -> None:
        """Forget everything written so far."""
        self._value = EMPTY

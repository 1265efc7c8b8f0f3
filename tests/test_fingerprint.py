"""Tests for Adler-32 fingerprints."""

import random
import zlib

from cmdwatch.fingerprint import EMPTY, Adler32, checksum


class TestChecksum:
    """Tests for the one-shot checksum."""

    def test_empty(self):
        assert checksum(b"") == EMPTY == 1

    def test_matches_adler32(self):
        data = b"Wikipedia"
        assert checksum(data) == 0x11E60398
        assert checksum(data) == zlib.adler32(data)

    def test_deterministic(self):
        assert checksum(b"hello\n") == checksum(b"hello\n")

    def test_fits_in_32_bits(self):
        data = bytes(range(256)) * 1000
        assert 0 <= checksum(data) <= 0xFFFFFFFF

    def test_order_sensitive(self):
        assert checksum(b"ab") != checksum(b"ba")

    def test_single_byte_changes_detected(self):
        rng = random.Random(1234)
        collisions = 0
        for _ in range(2000):
            data = bytearray(rng.randbytes(rng.randint(16, 512)))
            original = checksum(bytes(data))
            index = rng.randrange(len(data))
            data[index] = (data[index] + rng.randint(1, 255)) % 256
            if checksum(bytes(data)) == original:
                collisions += 1
        assert collisions == 0


class TestAdler32:
    """Tests for the streaming accumulator."""

    def test_fresh_sum_is_empty_checksum(self):
        assert Adler32().sum() == checksum(b"")

    def test_chunks_equal_whole(self):
        h = Adler32()
        h.write(b"foo")
        h.write(b"bar")
        assert h.sum() == checksum(b"foobar")

    def test_chunk_boundaries_do_not_matter(self):
        data = b"abcdefghijklmnopqrstuvwxyz" * 100
        h = Adler32()
        for i in range(0, len(data), 7):
            h.write(data[i : i + 7])
        assert h.sum() == checksum(data)

    def test_write_returns_length(self):
        assert Adler32().write(b"abc") == 3

    def test_reset(self):
        h = Adler32()
        h.write(b"something")
        h.reset()
        assert h.sum() == EMPTY
        h.write(b"abc")
        assert h.sum() == checksum(b"abc")

    def test_source_order_matters(self):
        first = Adler32()
        first.write(b"one")
        first.write(b"two")
        second = Adler32()
        second.write(b"two")
        second.write(b"one")
        assert first.sum() != second.sum()

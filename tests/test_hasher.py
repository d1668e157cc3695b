"""
Unit tests for window fingerprinting.
Verifies the FNV fold, the empty-file sentinel, zero-padded window reads
and tolerance to I/O errors.
"""
import logging
import os
import random

import pytest
from dupesniff.core.hasher import (
    FingerprinterImpl, fold, read_window, WINDOW_SIZE, EMPTY_FILE_HASH,
    FNV_OFFSET_BASIS_64, FNV_PRIME_64
)


class TestFold:
    """Test the pure fold over a byte window."""

    def test_result_is_unsigned_64_bit(self):
        for window in (bytes(WINDOW_SIZE), b"\xff" * WINDOW_SIZE, os.urandom(WINDOW_SIZE)):
            value = fold(window)
            assert 0 <= value < 2 ** 64

    def test_identical_windows_give_identical_fingerprints(self):
        window = os.urandom(WINDOW_SIZE)
        assert fold(window) == fold(bytes(window))
        assert fold(window) == fold(bytearray(window))

    def test_fnv_step_uses_64_bit_constants(self):
        """A one-byte fold equals the textbook FNV-1 step plus the avalanche."""
        from dupesniff.core.hasher import _avalanche
        expected = _avalanche(((FNV_OFFSET_BASIS_64 ^ 0x61) * FNV_PRIME_64) % 2 ** 64)
        assert fold(b"a") == expected

    def test_empty_sentinel_is_fold_of_zero_window(self):
        assert EMPTY_FILE_HASH == fold(bytes(WINDOW_SIZE))

    def test_single_bit_flip_changes_fingerprint(self):
        rng = random.Random(1234)
        for _ in range(200):
            window = bytearray(rng.getrandbits(8) for _ in range(WINDOW_SIZE))
            original = fold(window)
            position = rng.randrange(WINDOW_SIZE)
            window[position] ^= 1 << rng.randrange(8)
            assert fold(window) != original

    def test_output_bits_are_near_uniform(self):
        """Every output bit should be set in roughly half of random windows."""
        rng = random.Random(42)
        samples = 2000
        bit_counts = [0] * 64
        for _ in range(samples):
            value = fold(rng.getrandbits(8 * WINDOW_SIZE).to_bytes(WINDOW_SIZE, "little"))
            for bit in range(64):
                if value >> bit & 1:
                    bit_counts[bit] += 1

        # 2000 fair coin flips: mean 1000, sigma ~22; allow more than 6 sigma
        for count in bit_counts:
            assert 850 < count < 1150

    def test_top_bits_spread_over_buckets(self):
        rng = random.Random(7)
        buckets = [0] * 16
        samples = 3200
        for _ in range(samples):
            value = fold(rng.getrandbits(8 * WINDOW_SIZE).to_bytes(WINDOW_SIZE, "little"))
            buckets[value >> 60] += 1
        expected = samples / 16
        chi_square = sum((b - expected) ** 2 / expected for b in buckets)
        # 15 degrees of freedom; 50 is far beyond the 99.9th percentile
        assert chi_square < 50


class TestReadWindow:
    """Test zero-padded window reads."""

    def test_short_file_leaves_tail_zero(self, tmp_path):
        path = tmp_path / "short.bin"
        path.write_bytes(b"abc")
        window = read_window(str(path))
        assert len(window) == WINDOW_SIZE
        assert window[:3] == b"abc"
        assert window[3:] == bytes(WINDOW_SIZE - 3)

    def test_offset_skips_forward(self, tmp_path):
        path = tmp_path / "data.bin"
        content = bytes(range(256)) * 8
        path.write_bytes(content)
        window = read_window(str(path), offset=100)
        assert window == bytearray(content[100:100 + WINDOW_SIZE])

    def test_offset_past_end_is_not_an_error(self, tmp_path):
        path = tmp_path / "small.bin"
        path.write_bytes(b"x" * 10)
        assert read_window(str(path), offset=5000) == bytearray(WINDOW_SIZE)

    def test_missing_file_returns_zero_window(self, tmp_path, caplog):
        missing = tmp_path / "gone.bin"
        with caplog.at_level(logging.WARNING):
            window = read_window(str(missing))
        assert window == bytearray(WINDOW_SIZE)
        assert "gone.bin" in caplog.text


class TestFingerprinterImpl:
    """Test file fingerprints."""

    def test_same_window_in_different_files_matches(self, tmp_path):
        head = os.urandom(WINDOW_SIZE)
        first = tmp_path / "one.bin"
        second = tmp_path / "two.bin"
        first.write_bytes(head + b"tail one")
        second.write_bytes(head + b"a different, longer tail")

        fingerprinter = FingerprinterImpl()
        assert fingerprinter.fingerprint(str(first)) == fingerprinter.fingerprint(str(second))
        assert fingerprinter.fingerprint(str(first), WINDOW_SIZE) != \
            fingerprinter.fingerprint(str(second), WINDOW_SIZE)

    @pytest.mark.parametrize("content", [b"", bytes(10), bytes(WINDOW_SIZE), bytes(5 * WINDOW_SIZE)])
    def test_zero_content_hashes_to_sentinel(self, tmp_path, content):
        path = tmp_path / "zeros.bin"
        path.write_bytes(content)
        assert FingerprinterImpl().fingerprint(str(path)) == EMPTY_FILE_HASH

    def test_zero_head_with_data_later_is_still_sentinel(self, tmp_path):
        """Only the first window is sampled at offset 0."""
        path = tmp_path / "late.bin"
        path.write_bytes(bytes(WINDOW_SIZE) + b"payload")
        assert FingerprinterImpl().fingerprint(str(path)) == EMPTY_FILE_HASH

    def test_short_files_differing_only_past_length_match(self, tmp_path):
        """A file padded with explicit zeros matches the shorter file."""
        short = tmp_path / "short.bin"
        padded = tmp_path / "padded.bin"
        short.write_bytes(b"header")
        padded.write_bytes(b"header" + bytes(20))
        fingerprinter = FingerprinterImpl()
        assert fingerprinter.fingerprint(str(short)) == fingerprinter.fingerprint(str(padded))

    def test_deleted_file_does_not_raise(self, tmp_path):
        path = tmp_path / "deleted.bin"
        path.write_bytes(b"content")
        path.unlink()
        assert FingerprinterImpl().fingerprint(str(path), 0) == EMPTY_FILE_HASH

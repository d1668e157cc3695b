"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/hasher.py
Sampled-window fingerprinting.

A fingerprint covers a single fixed-size window of a file. The window is a
zero-filled buffer, so bytes beyond end-of-file read as zeros; a window that
sees no data at all folds to EMPTY_FILE_HASH.
"""

import logging

from dupesniff.core.interfaces import Fingerprinter

logger = logging.getLogger(__name__)

WINDOW_SIZE = 1024

FNV_OFFSET_BASIS_64 = 0xcbf29ce484222325
FNV_PRIME_64 = 0x100000001b3
_MASK_64 = 0xFFFFFFFFFFFFFFFF


def _avalanche(value: int) -> int:
    """Final bit mixing after the FNV fold."""
    value = (value + (value << 13)) & _MASK_64
    value ^= value >> 7
    value = (value + (value << 3)) & _MASK_64
    value ^= value >> 17
    value = (value + (value << 5)) & _MASK_64
    return value


def fold(window: bytes) -> int:
    """
    Reduce a byte window to an unsigned 64-bit fingerprint (FNV-1 fold
    followed by the avalanche step).
    """
    value = FNV_OFFSET_BASIS_64
    for byte in window:
        value = ((value ^ byte) * FNV_PRIME_64) & _MASK_64
    return _avalanche(value)


EMPTY_FILE_HASH = fold(bytes(WINDOW_SIZE))


def read_window(path: str, offset: int = 0) -> bytearray:
    """
    Read up to WINDOW_SIZE bytes from `offset`. Short files leave the tail
    of the buffer zero. I/O errors are logged and whatever was read so far
    is returned.
    """
    window = bytearray(WINDOW_SIZE)
    try:
        with open(path, 'rb') as f:
            if offset:
                f.seek(offset)
            f.readinto(window)
    except OSError as e:
        logger.warning(f"Error reading {path} at offset {offset}: {e}")
    return window


class FingerprinterImpl(Fingerprinter):
    """Fingerprints a window of a file at a given offset."""

    def fingerprint(self, path: str, offset: int = 0) -> int:
        return fold(read_window(path, offset))

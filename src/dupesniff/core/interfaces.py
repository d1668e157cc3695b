"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Core interfaces (Protocols) used throughout the scanning engine.

Key Components:
---------------
- Fingerprinter: reduces a sampled window of a file to a 64-bit integer.
- FileScanner: walks a directory tree and yields file records in visit order.
"""

from typing import Protocol, Iterator, Optional, Callable
from dupesniff.core.models import FileRecord


class Fingerprinter(Protocol):
    """Interface for fingerprinting a fixed window of a file."""

    def fingerprint(self, path: str, offset: int = 0) -> int:
        """
        Returns the fingerprint of the window starting at `offset`.
        Must not raise on I/O errors.
        """
        ...


class FileScanner(Protocol):
    """
    Interface for walking file systems.

    The visit order matters: the first file seen under a fingerprint
    becomes the canonical entry of the index.
    """

    def scan(
        self,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> Iterator[FileRecord]:
        ...

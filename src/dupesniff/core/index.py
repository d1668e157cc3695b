"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/index.py
First-seen fingerprint index.
"""

from typing import Dict, Iterator, Optional, Tuple

from dupesniff.core.models import FileRecord


class DuplicateIndex:
    """
    Maps a fingerprint to the first file observed with it.
    Later arrivals never overwrite an existing entry.
    """

    def __init__(self, entries: Optional[Dict[int, FileRecord]] = None):
        self._entries: Dict[int, FileRecord] = dict(entries) if entries else {}

    def get(self, fingerprint: int) -> Optional[FileRecord]:
        return self._entries.get(fingerprint)

    def put_if_absent(self, fingerprint: int, record: FileRecord) -> FileRecord:
        """Stores `record` unless the fingerprint is known; returns the stored record."""
        return self._entries.setdefault(fingerprint, record)

    def items(self) -> Iterator[Tuple[int, FileRecord]]:
        return iter(self._entries.items())

    def __contains__(self, fingerprint: int) -> bool:
        return fingerprint in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self):
        return f"<DuplicateIndex entries={len(self._entries)}>"

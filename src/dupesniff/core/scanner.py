"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Iterative depth-first directory walker.
Features:
- Explicit stack of directory listings instead of recursion
- Entries visited in name order; subdirectories entered where they are met
- Skips symlinks, system trash, excluded directories and files this tool writes
- Zero-byte files are kept: they are classified as empty, not ignored
"""

import os
import sys
from typing import List, Optional, Callable, Iterator
from pathlib import Path
import logging

from dupesniff.core.models import FileRecord
from dupesniff.core.interfaces import FileScanner

logger = logging.getLogger(__name__)

PROGRESS_INTERVAL = 5000


class FileScannerImpl(FileScanner):
    """
    Walks a directory tree and yields a FileRecord per regular file.

    Attributes:
        root_dir: Root directory to scan
        excluded_dirs: Directories that are never entered
        excluded_files: Files that are never yielded (index, playlists)
    """

    def __init__(
        self,
        root_dir: str,
        excluded_dirs: Optional[List[str]] = None,
        excluded_files: Optional[List[str]] = None
    ):
        self.root_dir = str(Path(root_dir).resolve())
        self.excluded_dirs = [str(Path(d).resolve()) for d in excluded_dirs] if excluded_dirs else []
        self.excluded_files = {str(Path(f).resolve()) for f in excluded_files} if excluded_files else set()

    def scan(
        self,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> Iterator[FileRecord]:
        """
        Validates the root eagerly, then returns a lazy walk over it.
        Raises RuntimeError when the root is missing or not a directory.
        """
        root_path = Path(self.root_dir)
        if not root_path.exists():
            error_msg = f"Directory does not exist: {self.root_dir}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)
        if not root_path.is_dir():
            error_msg = f"Not a directory: {self.root_dir}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)

        return self._walk(stopped_flag, progress_callback)

    def _walk(
        self,
        stopped_flag: Optional[Callable[[], bool]],
        progress_callback: Optional[Callable[[str, int, object], None]]
    ) -> Iterator[FileRecord]:
        logger.debug(f"Scanning directory: {self.root_dir}")
        yielded = 0

        root_listing = self._list_dir(self.root_dir)
        stack = [root_listing] if root_listing is not None else []

        while stack:
            entry = next(stack[-1], None)
            if entry is None:
                stack.pop()
                continue

            try:
                if entry.is_symlink():
                    logger.debug(f"Skipping symbolic link: {entry.path}")
                    continue

                if entry.is_dir(follow_symlinks=False):
                    # Cancellation is checked between directories only
                    if stopped_flag and stopped_flag():
                        logger.debug("Scan interrupted")
                        return
                    if self._prefilter_dir(entry.path):
                        listing = self._list_dir(entry.path)
                        if listing is not None:
                            stack.append(listing)
                    continue

                if not entry.is_file(follow_symlinks=False):
                    continue
            except OSError as e:
                logger.warning(f"Could not inspect {entry.path}: {e}")
                continue

            record = self._process_file(entry)
            if record is None:
                continue

            yielded += 1
            if progress_callback and yielded % PROGRESS_INTERVAL == 0:
                progress_callback('scanning', yielded, None)
            yield record

        logger.debug(f"Scan completed. Found {yielded} files.")

    @staticmethod
    def _list_dir(path: str) -> Optional[Iterator[os.DirEntry]]:
        """Sorted listing of one directory, None if it cannot be read."""
        try:
            with os.scandir(path) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.warning(f"Skipping unreadable directory {path}: {e}")
            return None
        logger.debug(f"Processing {len(entries)} entries in {path}")
        return iter(entries)

    @staticmethod
    def _is_system_trash(path: str) -> bool:
        """Check if path belongs to the OS trash/recycle bin."""
        if sys.platform == "win32":
            return "$Recycle.Bin" in path or "\\Recycler\\" in path
        if sys.platform == "darwin":
            return "/.Trash/" in path or path.endswith("/.Trash")
        return ".local/share/Trash" in path or "/.trash/" in path or path.endswith("/.trash")

    def _is_excluded_directory(self, path: str) -> bool:
        normalized = os.path.normpath(path)
        for excluded_dir in self.excluded_dirs:
            if normalized == excluded_dir or normalized.startswith(excluded_dir + os.sep):
                return True
        return False

    def _prefilter_dir(self, path: str) -> bool:
        """Skip system trash, excluded and inaccessible directories."""
        if self._is_system_trash(path):
            logger.debug(f"Skipping system trash directory: {path}")
            return False

        if self.excluded_dirs and self._is_excluded_directory(path):
            logger.debug(f"Skipping excluded directory: {path}")
            return False

        if not os.access(path, os.R_OK | os.X_OK):
            logger.warning(f"Skipping inaccessible directory: {path}")
            return False
        return True

    def _process_file(self, entry: os.DirEntry) -> Optional[FileRecord]:
        if entry.path in self.excluded_files:
            logger.debug(f"Skipping generated file: {entry.path}")
            return None

        try:
            size = entry.stat(follow_symlinks=False).st_size
        except OSError as e:
            logger.warning(f"Could not get size of {entry.path}: {e}")
            return None

        return FileRecord(path=entry.path, size=size)

"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for sampling-based duplicate detection.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional
from enum import Enum
from pathlib import Path
import os
import logging

logger = logging.getLogger(__name__)

INDEX_FILENAME = ".dupesniff-index"
PLAYLIST_SUFFIX = ".xspf"


# =============================
# Enums
# =============================

class Classification(Enum):
    """Outcome attached to a pair of files after scanning."""
    DUPLICATE = "duplicate"
    SUSPECT = "suspect"
    EMPTY = "empty"

    @property
    def header(self) -> str:
        """Label used in report headers."""
        mapping = {
            Classification.DUPLICATE: "DUPE",
            Classification.SUSPECT: "SUSPECT",
            Classification.EMPTY: "EMPTY",
        }
        return mapping[self]

    @property
    def playlist_label(self) -> str:
        """Base name of the playlist file written for this class."""
        mapping = {
            Classification.DUPLICATE: "dupes",
            Classification.SUSPECT: "suspects",
            Classification.EMPTY: "empty",
        }
        return mapping[self]

    def __repr__(self) -> str:
        return self.value


class TieBreak(Enum):
    """
    Which file to delete when creation times are equal or unreadable.
    """
    FIRST = "first"
    SHORTEST_PATH = "shortest-path"

    @property
    def display_name(self) -> str:
        """Human-readable name for help text."""
        mapping = {
            TieBreak.FIRST: "First in pair",
            TieBreak.SHORTEST_PATH: "Keep shortest path",
        }
        return mapping.get(self, self.value)


# ======================
#  Core Data Models
# ======================

class FileRecord:
    """
    A file discovered by the walker (or reloaded from a persisted index).
    Identity is the absolute path; size and creation time are read from
    the file system only when somebody asks for them.
    """

    __slots__ = ("path", "size", "creation_time")

    def __init__(self, path: str, size: Optional[int] = None, creation_time: Optional[float] = None):
        self.path = path
        self.size = size
        self.creation_time = creation_time

    def resolve_size(self) -> int:
        """Byte length of the file; 0 if it cannot be read."""
        if self.size is None:
            try:
                self.size = os.stat(self.path).st_size
            except OSError as e:
                logger.warning(f"Could not get size of {self.path}: {e}")
                return 0
        return self.size

    def resolve_creation_time(self) -> Optional[float]:
        """
        Creation timestamp, None on failure.

        Birth time where the platform reports it. Elsewhere (Linux) st_ctime is
        the inode change time, which a chmod or rename moves forward, so the
        earlier of st_ctime and st_mtime is used instead.
        """
        if self.creation_time is None:
            try:
                stat_result = os.stat(self.path)
            except OSError as e:
                logger.warning(f"Could not read creation time of {self.path}: {e}")
                return None
            birth_time = getattr(stat_result, 'st_birthtime', None)
            if birth_time is None:
                birth_time = min(stat_result.st_ctime, stat_result.st_mtime)
            self.creation_time = birth_time
        return self.creation_time

    def __eq__(self, other) -> bool:
        if not isinstance(other, FileRecord):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    def __repr__(self):
        return f"<FileRecord path={self.path}, size={self.size}>"


@dataclass
class ClassifiedPair:
    """
    Two files sharing an offset-0 fingerprint.
    For EMPTY pairs both slots hold the same record.
    """
    first: FileRecord
    second: FileRecord
    classification: Classification
    fingerprint: int

    @property
    def is_single(self) -> bool:
        return self.first is self.second

    def files(self) -> List[FileRecord]:
        """Distinct files in pair order."""
        if self.is_single:
            return [self.first]
        return [self.first, self.second]

    def __repr__(self):
        return f"<ClassifiedPair {self.classification.header} {self.first.path} -> {self.second.path}>"


class ScanStats:
    """
    Statistics collected while a scan runs.
    """
    def __init__(self):
        self.files_processed: int = 0
        self.total_time: float = 0.0
        self.stage_times: Dict[str, float] = {}

    def add_stage_time(self, stage_name: str, duration: float) -> None:
        self.stage_times[stage_name] = self.stage_times.get(stage_name, 0.0) + duration

    def print_summary(self) -> str:
        lines = [
            "------------------- SUMMARY -------------------",
            f"Processed {self.files_processed} files in {int(self.total_time * 1000)}ms.",
        ]
        for stage, duration in self.stage_times.items():
            lines.append(f"  {stage}: {duration:.3f}s")
        return "\n".join(lines)


"""
DTO for scan options with built-in validation.
Interface-agnostic — the CLI fills it from flags or from prompts.
"""

@dataclass
class ScanOptions:
    """Named decisions and settings for one run."""
    root_dir: str
    output_dir: Optional[str] = None
    preload_index: bool = False
    delete_duplicates: bool = False
    write_duplicate_playlist: bool = False
    show_suspects: bool = False
    write_suspect_playlist: bool = False
    show_empty: bool = False
    delete_empty: bool = False
    persist_index: bool = False
    tie_break: TieBreak = TieBreak.FIRST
    use_trash: bool = False
    excluded_dirs: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir or not str(self.root_dir).strip():
            raise ValueError("Root directory cannot be empty")
        if self.output_dir is not None and not str(self.output_dir).strip():
            raise ValueError("Output directory cannot be blank")
        if not isinstance(self.tie_break, TieBreak):
            self.tie_break = TieBreak(self.tie_break)

        self.root_dir = str(Path(self.root_dir).resolve())
        if self.output_dir is not None:
            self.output_dir = str(Path(self.output_dir).resolve())
        self.excluded_dirs = [str(Path(d).resolve()) for d in self.excluded_dirs if d.strip()]

    @property
    def index_path(self) -> str:
        """Where the fingerprint index is read from and written to."""
        return os.path.join(self.output_dir or self.root_dir, INDEX_FILENAME)

    def playlist_path(self, label: str) -> str:
        return os.path.join(self.root_dir, label + PLAYLIST_SUFFIX)

    def generated_files(self) -> List[str]:
        """Files this tool writes, which the walker must not fingerprint."""
        paths = [self.index_path]
        for classification in Classification:
            paths.append(self.playlist_path(classification.playlist_label))
        return paths

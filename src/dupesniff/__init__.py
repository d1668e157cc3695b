"""
dupesniff — duplicate file finder based on sampled content fingerprints.

Core features:
- Fingerprints a 1024-byte window at the start of every file, then re-checks
  candidate pairs at the middle of the file (duplicates vs. suspects)
- Flags all-zero files as empty
- Deletes the newer file of a pair on request (optionally via the system trash)
- Versioned on-disk index for comparing several roots across runs
- XSPF playlists for manual review in a media player
"""

# Get version
try:
    from importlib.metadata import version as _version, PackageNotFoundError
    __version__ = _version("dupesniff")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API
from dupesniff.commands import ScanCommand
from dupesniff.core import (
    ScanOptions, ScanContext, Classification, ClassifiedPair, FileRecord, TieBreak,
    FingerprinterImpl, DuplicateIndex, ResolutionPolicy, Reporter)
from dupesniff.services import DuplicateService, FileService, IndexStore, PlaylistExporter

__all__ = [
    "ScanCommand",
    "ScanOptions",
    "ScanContext",
    "Classification",
    "ClassifiedPair",
    "FileRecord",
    "TieBreak",
    "FingerprinterImpl",
    "DuplicateIndex",
    "ResolutionPolicy",
    "Reporter",
    "DuplicateService",
    "FileService",
    "IndexStore",
    "PlaylistExporter",
    "__version__",
]

"""
Core scanning engine — walker, fingerprinter, index, passes and policies.

This package contains the sampling-and-classification foundation of dupesniff:
- FileScannerImpl: iterative depth-first directory walk
- FingerprinterImpl: FNV-1 fold of a 1024-byte window at an offset
- DuplicateIndex: first-seen fingerprint → file mapping
- IndexStage / VerifyStage: header pass (duplicates, empties) and middle pass (suspects)
- DeduplicatorImpl: runs both passes and returns a ScanContext
- ResolutionPolicy: picks the file to delete from a pair
- Reporter: per-class counts, sizes and console text

Pure Python with no UI dependencies.
"""

from .scanner import FileScannerImpl
from .hasher import FingerprinterImpl, EMPTY_FILE_HASH, WINDOW_SIZE
from .index import DuplicateIndex
from .stages import IndexStage, VerifyStage
from .deduplicator import DeduplicatorImpl, ScanContext
from .resolver import ResolutionPolicy
from .reporter import Reporter, ClassSummary
from .models import (
    FileRecord, ClassifiedPair, Classification, TieBreak, ScanOptions, ScanStats)

__all__ = [
    "FileScannerImpl",
    "FingerprinterImpl",
    "EMPTY_FILE_HASH",
    "WINDOW_SIZE",
    "DuplicateIndex",
    "IndexStage",
    "VerifyStage",
    "DeduplicatorImpl",
    "ScanContext",
    "ResolutionPolicy",
    "Reporter",
    "ClassSummary",
    "FileRecord",
    "ClassifiedPair",
    "Classification",
    "TieBreak",
    "ScanOptions",
    "ScanStats",
]

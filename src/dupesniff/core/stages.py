"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
The two passes of the scanning engine.

PASS 1 — IndexStage
-------------------
Runs while the walker is still discovering files. Each file is fingerprinted
at offset 0 and either:
  • flagged EMPTY when the window folds to EMPTY_FILE_HASH,
  • stored as the canonical entry for its fingerprint,
  • ignored when the index already holds the same path (preloaded index),
  • paired with the canonical entry as a DUPLICATE candidate.

PASS 2 — VerifyStage
--------------------
Runs once the walk is complete. Every candidate pair is re-fingerprinted at
the middle of the FIRST file; the same offset is applied to both files.
Diverging middle windows demote the pair to SUSPECT.

Both stages honour the shared progress_callback(stage, current, total)
signature used by the CLI.
"""

import logging
from typing import List, Optional, Callable, Tuple

from dupesniff.core.models import FileRecord, ClassifiedPair, Classification
from dupesniff.core.index import DuplicateIndex
from dupesniff.core.hasher import FingerprinterImpl, EMPTY_FILE_HASH
from dupesniff.core.interfaces import Fingerprinter

logger = logging.getLogger(__name__)

PROGRESS_INTERVAL = 500


class IndexStage:
    """First pass: fingerprint at offset 0 and classify against the index."""

    STAGE_NAME = "Header fingerprint"

    def __init__(self, index: DuplicateIndex, fingerprinter: Optional[Fingerprinter] = None):
        self.index = index
        self.fingerprinter = fingerprinter or FingerprinterImpl()

    def observe(self, record: FileRecord) -> Optional[ClassifiedPair]:
        """
        Classify one file in traversal order.
        Returns the new EMPTY or DUPLICATE pair, or None when the file only
        became (or already was) the canonical entry.
        """
        fp0 = self.fingerprinter.fingerprint(record.path, 0)

        if fp0 == EMPTY_FILE_HASH:
            logger.debug(f"Empty content: {record.path}")
            return ClassifiedPair(record, record, Classification.EMPTY, fp0)

        stored = self.index.put_if_absent(fp0, record)
        if stored is record:
            return None

        # Same file rescanned against a preloaded index
        if stored.path == record.path:
            logger.debug(f"Already indexed: {record.path}")
            return None

        logger.debug(f"Candidate duplicate: {stored.path} -> {record.path}")
        return ClassifiedPair(stored, record, Classification.DUPLICATE, fp0)

    def process(
        self,
        records,
        duplicates: List[ClassifiedPair],
        empties: List[ClassifiedPair],
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> int:
        """
        Consume records from the walker, appending pairs to the given lists.
        Returns the number of files processed.
        """
        processed = 0
        for record in records:
            pair = self.observe(record)
            if pair is not None:
                if pair.classification == Classification.EMPTY:
                    empties.append(pair)
                else:
                    duplicates.append(pair)

            processed += 1
            if progress_callback and processed % PROGRESS_INTERVAL == 0:
                progress_callback(self.STAGE_NAME, processed, None)

        if progress_callback and processed % PROGRESS_INTERVAL:
            progress_callback(self.STAGE_NAME, processed, None)
        return processed


class VerifyStage:
    """Second pass: compare the middle windows of every candidate pair."""

    STAGE_NAME = "Middle fingerprint"

    def __init__(self, fingerprinter: Optional[Fingerprinter] = None):
        self.fingerprinter = fingerprinter or FingerprinterImpl()

    @staticmethod
    def middle_offset(pair: ClassifiedPair) -> int:
        """Midpoint of the first file, used for both files in the pair."""
        return pair.first.resolve_size() // 2

    def verify(self, pair: ClassifiedPair) -> Classification:
        offset = self.middle_offset(pair)
        fp_a = self.fingerprinter.fingerprint(pair.first.path, offset)
        fp_b = self.fingerprinter.fingerprint(pair.second.path, offset)
        if fp_a == fp_b:
            return Classification.DUPLICATE
        return Classification.SUSPECT

    def process(
        self,
        candidates: List[ClassifiedPair],
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> Tuple[List[ClassifiedPair], List[ClassifiedPair]]:
        """
        Split candidates into (duplicates, suspects), keeping their order.
        """
        duplicates = []
        suspects = []
        total = len(candidates)

        for processed, pair in enumerate(candidates, 1):
            if self.verify(pair) == Classification.DUPLICATE:
                duplicates.append(pair)
            else:
                pair.classification = Classification.SUSPECT
                logger.debug(f"Demoted to suspect: {pair.first.path} -> {pair.second.path}")
                suspects.append(pair)

            if progress_callback:
                progress_callback(self.STAGE_NAME, processed, total)

        return duplicates, suspects

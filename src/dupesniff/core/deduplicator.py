"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

deduplicator.py
Runs the two-pass pipeline over the files yielded by a walker:
    discover → header fingerprint (index, empties) → middle fingerprint (verify)
All state of a run lives in the ScanContext it returns.
"""
import time
from typing import List, Iterable, Optional, Callable

from dupesniff.core.models import FileRecord, ClassifiedPair, Classification, ScanStats
from dupesniff.core.index import DuplicateIndex
from dupesniff.core.interfaces import Fingerprinter
from dupesniff.core.stages import IndexStage, VerifyStage


class ScanContext:
    """
    Result of one run: the fingerprint index, the three classification
    lists and timing statistics.
    """
    def __init__(self, index: Optional[DuplicateIndex] = None):
        self.index = index if index is not None else DuplicateIndex()
        self.duplicates: List[ClassifiedPair] = []
        self.suspects: List[ClassifiedPair] = []
        self.empties: List[ClassifiedPair] = []
        self.stats = ScanStats()

    def pairs_for(self, classification: Classification) -> List[ClassifiedPair]:
        mapping = {
            Classification.DUPLICATE: self.duplicates,
            Classification.SUSPECT: self.suspects,
            Classification.EMPTY: self.empties,
        }
        return mapping[classification]

    def __repr__(self):
        return (f"<ScanContext index={len(self.index)}, dupes={len(self.duplicates)}, "
                f"suspects={len(self.suspects)}, empty={len(self.empties)}>")


class DeduplicatorImpl:
    """
    Drives IndexStage over the whole walk, then VerifyStage over the
    candidate pairs. The second pass never starts before the walk ends.
    """
    def __init__(self, fingerprinter: Optional[Fingerprinter] = None):
        self.fingerprinter = fingerprinter

    def find_duplicates(
        self,
        records: Iterable[FileRecord],
        index: Optional[DuplicateIndex] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> ScanContext:
        """
        Args:
            records: files in traversal order
            index: preloaded index to extend, or None to start empty
            progress_callback: (stage, current, total) reporter
        Returns:
            ScanContext with duplicates, suspects and empties filled in
        """
        context = ScanContext(index)
        total_start_time = time.time()

        index_stage = IndexStage(context.index, self.fingerprinter)
        start_time = time.time()
        candidates: List[ClassifiedPair] = []
        context.stats.files_processed = index_stage.process(
            records,
            candidates,
            context.empties,
            progress_callback=progress_callback
        )
        context.stats.add_stage_time(IndexStage.STAGE_NAME, time.time() - start_time)

        verify_stage = VerifyStage(self.fingerprinter)
        start_time = time.time()
        context.duplicates, context.suspects = verify_stage.process(
            candidates,
            progress_callback=progress_callback
        )
        context.stats.add_stage_time(VerifyStage.STAGE_NAME, time.time() - start_time)

        context.stats.total_time = time.time() - total_start_time
        return context

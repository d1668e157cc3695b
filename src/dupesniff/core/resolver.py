"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/resolver.py
Chooses which file of a classified pair gets deleted.

The earlier-created file is presumed to be the original, so the strictly
newer file is selected. When the creation times are equal, or either one
cannot be read, the configured TieBreak decides:
   - FIRST: the first file of the pair (DEFAULT)
   - SHORTEST_PATH: the shorter path is kept, the longer one is selected;
     equal lengths fall back to the first file
"""
import logging
from typing import Optional

from dupesniff.core.models import ClassifiedPair, FileRecord, TieBreak

logger = logging.getLogger(__name__)


class ResolutionPolicy:

    def __init__(self, tie_break: Optional[TieBreak] = None):
        self.tie_break = tie_break or TieBreak.FIRST

    def resolve(self, pair: ClassifiedPair) -> FileRecord:
        """Returns the file of the pair selected for deletion."""
        if pair.is_single:
            return pair.first

        first_time = pair.first.resolve_creation_time()
        second_time = pair.second.resolve_creation_time()

        if first_time is not None and second_time is not None and first_time != second_time:
            return pair.first if first_time > second_time else pair.second

        logger.debug(f"Creation times tie or unreadable, using '{self.tie_break.value}' "
                     f"for {pair.first.path} / {pair.second.path}")
        return self._break_tie(pair)

    def _break_tie(self, pair: ClassifiedPair) -> FileRecord:
        if self.tie_break == TieBreak.SHORTEST_PATH:
            first_len = len(pair.first.path)
            second_len = len(pair.second.path)
            if second_len > first_len:
                return pair.second
        return pair.first

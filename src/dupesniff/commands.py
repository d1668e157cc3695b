"""
Command orchestrator for a scan run.
This is the single place that wires walker, engine and services together — used by the CLI.
Takes decisions only from ScanOptions; never prompts.
"""
import logging
from typing import Optional, Callable

from dupesniff.core.models import ScanOptions, Classification
from dupesniff.core.scanner import FileScannerImpl
from dupesniff.core.deduplicator import DeduplicatorImpl, ScanContext
from dupesniff.core.interfaces import Fingerprinter
from dupesniff.core.resolver import ResolutionPolicy
from dupesniff.services.duplicate_service import DuplicateService, DeletionReport
from dupesniff.services.index_store import IndexStore
from dupesniff.services.playlist import PlaylistExporter

logger = logging.getLogger(__name__)


class ScanCommand:
    """
    Orchestrates one run:
    1. Optionally preload the persisted index
    2. Walk the root and run both passes
    3. Follow-ups on request: delete, export playlists, persist the index

    Usage:
        options = ScanOptions(root_dir="/media", preload_index=True)
        command = ScanCommand()
        context = command.execute(options, progress_callback=printer)
        if options.delete_duplicates:
            command.delete(context, Classification.DUPLICATE, options)
    """

    def __init__(self, fingerprinter: Optional[Fingerprinter] = None):
        self._deduplicator = DeduplicatorImpl(fingerprinter)

    def execute(
            self,
            options: ScanOptions,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> ScanContext:
        """
        Scan options.root_dir and classify every file.

        Raises:
            RuntimeError: If the root directory is missing or not a directory
        """
        index = None
        if options.preload_index:
            index = IndexStore.load(options.index_path)

        scanner = FileScannerImpl(
            root_dir=options.root_dir,
            excluded_dirs=options.excluded_dirs,
            excluded_files=options.generated_files()
        )
        records = scanner.scan(
            stopped_flag=stopped_flag,
            progress_callback=progress_callback
        )

        context = self._deduplicator.find_duplicates(
            records,
            index=index,
            progress_callback=progress_callback
        )
        logger.debug(f"Scan finished: {context!r}")
        return context

    @staticmethod
    def delete(context: ScanContext, classification: Classification, options: ScanOptions) -> DeletionReport:
        """Resolve and delete the pairs of one class (DUPLICATE or EMPTY)."""
        if classification == Classification.SUSPECT:
            raise ValueError("Suspect pairs are never deleted")
        policy = ResolutionPolicy(options.tie_break)
        return DuplicateService.delete_resolved(
            context.pairs_for(classification),
            policy,
            use_trash=options.use_trash
        )

    @staticmethod
    def write_playlist(context: ScanContext, classification: Classification, options: ScanOptions) -> str:
        """Writes <root>/<label>.xspf for one class and returns its path."""
        output_path = options.playlist_path(classification.playlist_label)
        PlaylistExporter.write(context.pairs_for(classification), output_path)
        return output_path

    @staticmethod
    def persist_index(context: ScanContext, options: ScanOptions) -> int:
        return IndexStore.save(options.index_path, context.index)

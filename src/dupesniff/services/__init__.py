from .duplicate_service import DuplicateService, DeletionReport
from .file_service import FileService
from .index_store import IndexStore, IndexFormatError
from .playlist import PlaylistExporter

__all__ = [
    "DuplicateService",
    "DeletionReport",
    "FileService",
    "IndexStore",
    "IndexFormatError",
    "PlaylistExporter",
]

"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
File removal for resolved pairs: plain unlink, or the system trash via send2trash.
"""
import os
from pathlib import Path
from send2trash import send2trash


class FileService:
    """
    Single-attempt file removal with uniform error reporting.
    """

    @staticmethod
    def delete_file(file_path: str, use_trash: bool = False) -> None:
        """Removes a file (or moves it to the trash); raises RuntimeError on failure."""
        if use_trash:
            FileService.move_to_trash(file_path)
            return

        path = Path(file_path)
        if not path.exists():
            raise RuntimeError(f"File not found: {path}")

        try:
            os.remove(path)
        except OSError as e:
            raise RuntimeError(f"Failed to delete: {e}") from e

    @staticmethod
    def move_to_trash(file_path: str) -> None:
        """Moves a file to the system trash."""
        path = Path(file_path).resolve()

        if not path.exists():
            raise RuntimeError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except Exception as e:
            raise RuntimeError(f"Failed to move to trash: {e}") from e

"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Filesystem mutation used by the deleter: permanent removal or system trash.
"""
import os
import logging
from pathlib import Path
from send2trash import send2trash

from dupfinder.core.errors import DeletionError

logger = logging.getLogger(__name__)


class FileService:
    """
    Deletes files either permanently or by moving them to the system trash.
    Every failure is raised as DeletionError naming the path.
    """

    def __init__(self, use_trash: bool = False):
        self.use_trash = use_trash

    def delete_file(self, file_path: str) -> None:
        """Removes a single duplicate using the configured method."""
        if self.use_trash:
            FileService.move_to_trash(file_path)
        else:
            FileService.remove(file_path)

    @staticmethod
    def remove(file_path: str) -> None:
        """Permanently unlinks a file."""
        try:
            os.remove(file_path)
        except OSError as e:
            raise DeletionError(file_path, e.strerror or e) from e
        logger.debug(f"Removed {file_path}")

    @staticmethod
    def move_to_trash(file_path: str) -> None:
        """Moves a file to the system trash."""
        path = Path(file_path).resolve()

        if not path.exists():
            raise DeletionError(file_path, "File not found")

        try:
            send2trash(str(path))
        except Exception as e:
            raise DeletionError(file_path, f"Failed to move to trash: {e}") from e
        logger.debug(f"Moved {file_path} to trash")

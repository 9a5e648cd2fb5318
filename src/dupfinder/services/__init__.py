from .duplicate_service import DuplicateService, DeletionResult
from .file_service import FileService

__all__ = ["DuplicateService", "DeletionResult", "FileService"]

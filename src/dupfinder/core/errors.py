"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Filesystem error taxonomy and the error policy handler shared by all stages.
"""

import logging
from typing import List

from dupfinder.core.models import ErrorPolicy

logger = logging.getLogger(__name__)


class FileOperationError(RuntimeError):
    """A filesystem operation failed for a specific path."""
    operation = "file operation"

    def __init__(self, path: str, reason: object):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{self.operation} failed for {self.path}: {reason}")


class TraversalError(FileOperationError):
    """Directory unreadable or file metadata unavailable."""
    operation = "scan"


class ReadError(FileOperationError):
    """File content unreadable during hashing or verification."""
    operation = "read"


class DeletionError(FileOperationError):
    """Duplicate could not be removed."""
    operation = "delete"


class ErrorCollector:
    """
    Callable passed to the scanner, verifier and deleter.

    ABORT re-raises the error so the whole run stops.
    SKIP logs it, keeps it for the final report and returns, so the caller
    drops the offending file and moves on.
    """

    def __init__(self, policy: ErrorPolicy = ErrorPolicy.ABORT):
        self.policy = policy
        self.errors: List[FileOperationError] = []

    def __call__(self, error: FileOperationError) -> None:
        if self.policy == ErrorPolicy.ABORT:
            raise error
        logger.warning(str(error))
        self.errors.append(error)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

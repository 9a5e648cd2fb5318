"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/duplicate_service.py
Reports duplicate groups and applies the keep-first deletion policy.
"""
import os
import sys
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, TextIO

from dupfinder.core.errors import DeletionError, ErrorCollector, FileOperationError, ReadError
from dupfinder.core.grouper import GroupingMap
from dupfinder.core.hasher import HasherImpl
from dupfinder.core.interfaces import Hasher
from dupfinder.services.file_service import FileService

logger = logging.getLogger(__name__)

DELETING_NOTE = "...\tDeleting duplicate."
MISMATCH_NOTE = "...\tSkipped: content differs from kept file."


@dataclass
class DeletionResult:
    """Outcome of one report/delete pass."""
    groups_reported: int = 0
    deleted: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    freed_bytes: int = 0


class DuplicateService:
    @staticmethod
    def keep_first_file_per_group(groups: GroupingMap) -> List[str]:
        """
        Paths that the keep-first policy would delete: every member of a
        duplicate group except the first one found.
        """
        files_to_delete = []
        for _, files in groups.duplicate_groups():
            for file in files[1:]:
                files_to_delete.append(file.path)
        return files_to_delete

    @staticmethod
    def process_results(
            groups: GroupingMap,
            delete_duplicates: bool = False,
            file_service: Optional[FileService] = None,
            hasher: Optional[Hasher] = None,
            verify_before_delete: bool = True,
            on_error: Optional[Callable[[FileOperationError], None]] = None,
            stream: Optional[TextIO] = None
    ) -> DeletionResult:
        """
        Writes every duplicate group to the stream and optionally deletes all
        but the first file of each group.

        Args:
            groups: Hash-keyed GroupingMap from the content stage
            delete_duplicates: Remove every file after the first in each group
            file_service: Performs the deletion (permanent by default)
            hasher: Used for the byte-for-byte check before deleting
            verify_before_delete: Keep files whose bytes differ from the kept file
            on_error: Error policy handler; aborts on the first failure by default
            stream: Report destination, stderr by default

        Returns:
            DeletionResult with deleted/skipped paths and freed bytes
        """
        out = stream or sys.stderr
        file_service = file_service or FileService()
        hasher = hasher or HasherImpl()
        on_error = on_error or ErrorCollector()
        result = DeletionResult()
        files_to_delete = set()
        if delete_duplicates:
            files_to_delete = set(DuplicateService.keep_first_file_per_group(groups))

        for digest, files in groups.duplicate_groups():
            result.groups_reported += 1
            out.write(f"{digest} ({len(files)})\n")

            kept = files[0]
            for file in files:
                out.write(f"{file.path}\t")
                try:
                    if file.path in files_to_delete:
                        DuplicateService._delete_one(
                            kept, file, file_service, hasher, verify_before_delete,
                            on_error, out, result
                        )
                finally:
                    out.write("\n")
            out.write("\n")
            out.flush()

        if delete_duplicates:
            logger.debug(
                f"Deleted {len(result.deleted)} files, skipped {len(result.skipped)}, "
                f"freed {result.freed_bytes} bytes"
            )
        return result

    @staticmethod
    def _delete_one(kept, file, file_service, hasher, verify_before_delete, on_error, out, result):
        if verify_before_delete:
            try:
                identical = hasher.contents_equal(kept, file)
            except ReadError as e:
                error = e
                # A duplicate that disappeared before deletion is a deletion failure
                if e.path == file.path and not os.path.lexists(file.path):
                    error = DeletionError(file.path, "File not found")
                DuplicateService._skip(file, error, on_error, out, result)
                return
            if not identical:
                logger.warning(f"Hash collision: {file.path} differs from {kept.path}, keeping both")
                out.write(MISMATCH_NOTE)
                result.skipped.append(file.path)
                return

        try:
            file_service.delete_file(file.path)
        except DeletionError as e:
            DuplicateService._skip(file, e, on_error, out, result)
            return
        out.write(DELETING_NOTE)
        result.deleted.append(file.path)
        result.freed_bytes += file.size

    @staticmethod
    def _skip(file, error, on_error, out, result):
        out.write(f"...\tSkipped: {error.reason}")
        result.skipped.append(file.path)
        on_error(error)

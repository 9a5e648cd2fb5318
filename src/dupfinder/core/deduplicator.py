"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

deduplicator.py
Implements the two-stage duplicate detection pipeline:
    size (metadata only) → full content hash (same-size files only)
"""
import time
from typing import Callable, Optional, Tuple

from dupfinder.core.errors import ErrorCollector
from dupfinder.core.grouper import GroupingMap
from dupfinder.core.hasher import HasherImpl
from dupfinder.core.interfaces import Hasher
from dupfinder.core.models import DeduplicationParams, DeduplicationStats
from dupfinder.core.scanner import FileScannerImpl
from dupfinder.core.stages import ContentHashStage


# =============================
# Main Deduplicator Class
# =============================
class DeduplicatorImpl:
    """
    Runs the scanner and the content verifier in sequence and collects statistics.
    """
    def __init__(self, hasher: Hasher = None):
        self.hasher = hasher or HasherImpl()

    def find_duplicates(
        self,
        params: DeduplicationParams,
        error_collector: Optional[ErrorCollector] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> Tuple[GroupingMap, DeduplicationStats]:
        """
        Main pipeline.
        Args:
            params: Validated run parameters
            error_collector: Shared error handler; built from params.error_policy when omitted
            progress_callback (Optional[Callable[[str, int, int], None]]): Reports progress per stage.
        Returns:
            Tuple[GroupingMap, DeduplicationStats]: hash-keyed groups (singletons included) and stats
        """
        errors = error_collector or ErrorCollector(params.error_policy)
        stats = DeduplicationStats()
        stats.errors = errors.errors
        total_start_time = time.time()

        # Stage 1: group by size
        scanner = FileScannerImpl(
            root_dirs=params.root_dirs,
            ignore_empty=params.ignore_empty,
            on_error=errors
        )
        start_time = time.time()
        size_groups = scanner.scan(progress_callback=progress_callback)
        DeduplicatorImpl._update_stats(stats, "size", time.time() - start_time, size_groups)

        # Stage 2: group same-size files by content hash
        stage = ContentHashStage(self.hasher, on_error=errors)
        files_read_before = self.hasher.files_read
        bytes_read_before = self.hasher.bytes_read
        start_time = time.time()
        hash_groups = stage.process(size_groups, progress_callback=progress_callback)
        DeduplicatorImpl._update_stats(stats, "hash", time.time() - start_time, hash_groups)

        stats.files_read = self.hasher.files_read - files_read_before
        stats.bytes_hashed = self.hasher.bytes_read - bytes_read_before
        stats.reclaimable_bytes = sum(
            files[0].size * (len(files) - 1) for _, files in hash_groups.duplicate_groups()
        )
        stats.total_time = time.time() - total_start_time

        return hash_groups, stats

    @staticmethod
    def _update_stats(
        stats: DeduplicationStats,
        stage: str,
        duration: float,
        groups: GroupingMap
    ):
        """
        Records the groups that can still hold duplicates after a stage.
        """
        candidates = list(groups.duplicate_groups())
        stats.update_stage(
            stage_name=stage,
            groups_found=len(candidates),
            files_processed=sum(len(files) for _, files in candidates),
            duration=duration
        )

"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Walks one or more root directories and groups regular files by size.
Features:
- Recursively scans every root with os.walk (symlinked directories are not followed)
- Visits names in sorted order so the same tree always yields the same groups
- Optionally skips zero-length files
- Returns a size-keyed GroupingMap covering all roots combined
"""

import os
import stat
import time
import logging
from typing import Callable, List, Optional

from dupfinder.core.errors import ErrorCollector, TraversalError
from dupfinder.core.grouper import GroupingMap
from dupfinder.core.interfaces import FileScanner
from dupfinder.core.models import File, Stage

logger = logging.getLogger(__name__)


class FileScannerImpl(FileScanner):
    """
    Scans directories recursively and groups regular files by byte length.

    Attributes:
        root_dirs: Root directories (or single files) to scan, in order
        ignore_empty: Skip zero-length files entirely
        on_error: Called with a TraversalError for every unreadable entry
    """

    # Progress throttling: update every N files
    PROGRESS_INTERVAL = 5000

    def __init__(
        self,
        root_dirs: List[str],
        ignore_empty: bool = False,
        on_error: Optional[Callable[[TraversalError], None]] = None
    ):
        self.root_dirs = list(root_dirs)
        self.ignore_empty = ignore_empty
        self.on_error = on_error or ErrorCollector()
        self.files_seen = 0
        self._visited = set()

    def scan(self,
             progress_callback: Optional[Callable[[str, int, object], None]] = None) -> GroupingMap:
        """
        Single-pass scan of all roots.
        Returns a GroupingMap of File records keyed by size.
        """
        logger.debug(f"Starting scan of {len(self.root_dirs)} root(s): {self.root_dirs}")
        logger.debug(f"Filters: ignore_empty={self.ignore_empty}")

        size_groups = GroupingMap()
        self.files_seen = 0
        self._visited = set()
        start_time = time.time()

        for root in self.root_dirs:
            self._scan_root(root, size_groups, progress_callback)

        # Final update for small datasets
        if progress_callback:
            progress_callback(Stage.SIZE.value, self.files_seen, None)

        logger.debug(f"Total scan time: {time.time() - start_time:.2f} seconds")
        logger.debug(
            f"Scan completed. {size_groups.file_count()} files in {len(size_groups)} size groups."
        )
        return size_groups

    def _scan_root(self, root: str, size_groups: GroupingMap, progress_callback) -> None:
        try:
            root_stat = os.stat(root)
        except OSError as e:
            self.on_error(TraversalError(root, e.strerror or e))
            return

        # A root may name a single file
        if stat.S_ISREG(root_stat.st_mode):
            self._add_file(root, root_stat, size_groups)
            return

        if not stat.S_ISDIR(root_stat.st_mode):
            logger.debug(f"Skipping non-regular root: {root}")
            return

        logger.debug(f"Scanning directory: {root}")
        for dirpath, dirs, files in os.walk(root, onerror=self._walk_error, followlinks=False):
            dirs.sort()
            for filename in sorted(files):
                path = os.path.join(dirpath, filename)
                try:
                    file_stat = os.lstat(path)
                except OSError as e:
                    self.on_error(TraversalError(path, e.strerror or e))
                    continue

                if not stat.S_ISREG(file_stat.st_mode):
                    logger.debug(f"Skipping non-regular file: {path}")
                    continue

                self._add_file(path, file_stat, size_groups)

                if progress_callback and self.files_seen % self.PROGRESS_INTERVAL == 0:
                    progress_callback(Stage.SIZE.value, self.files_seen, None)

    def _walk_error(self, error: OSError) -> None:
        """os.walk hook for directories that cannot be listed."""
        self.on_error(TraversalError(error.filename, error.strerror or error))

    def _add_file(self, path: str, file_stat: os.stat_result, size_groups: GroupingMap) -> None:
        # Overlapping roots must not put the same file in a group twice
        real_path = os.path.realpath(path)
        if real_path in self._visited:
            logger.debug(f"Already scanned via another root: {path}")
            return
        self._visited.add(real_path)

        size = file_stat.st_size
        self.files_seen += 1

        if self.ignore_empty and size == 0:
            logger.debug(f"Skipping zero-byte file: {path}")
            return

        size_groups.add(size, File(path=path, size=size))

"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
Content verification stage of the duplicate finder pipeline.

STAGE CONTRACT
--------------
ContentHashStage.process() accepts the size-keyed GroupingMap produced by the
scanner and returns a new GroupingMap keyed by content hash:
  • Size groups with a single member are skipped without reading the file
  • Every other file is read in full, hashed with xxHash64 and re-grouped
  • Files keep the order they had inside their size group
  • A read failure is passed to the error handler; under the skip policy the
    file is dropped from the result
  • Progress is reported via callback (stage name, processed count, total count)
"""

import logging
from typing import Callable, Optional

from dupfinder.core.errors import ErrorCollector, ReadError
from dupfinder.core.grouper import GroupingMap
from dupfinder.core.hasher import HasherImpl
from dupfinder.core.interfaces import Hasher
from dupfinder.core.models import Stage

logger = logging.getLogger(__name__)


class ContentHashStage:
    def __init__(
            self,
            hasher: Hasher = None,
            on_error: Optional[Callable[[ReadError], None]] = None
    ):
        self.hasher = hasher or HasherImpl()
        self.on_error = on_error or ErrorCollector()

    def process(
            self,
            size_groups: GroupingMap,
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> GroupingMap:
        """
        Re-group same-size files by content hash.
        """
        hash_groups = GroupingMap()
        candidates = list(size_groups.duplicate_groups())
        total_files = sum(len(files) for _, files in candidates)
        processed_files = 0

        logger.debug(
            f"Hashing {total_files} files from {len(candidates)} size groups "
            f"({len(size_groups) - len(candidates)} unique sizes skipped)"
        )

        for size, files in candidates:
            for file in files:
                try:
                    digest = self.hasher.compute_full_hash(file)
                except ReadError as e:
                    self.on_error(e)
                    continue
                hash_groups.add(digest, file)

            processed_files += len(files)
            if progress_callback:
                progress_callback(Stage.HASH.value, processed_files, total_files)

        return hash_groups

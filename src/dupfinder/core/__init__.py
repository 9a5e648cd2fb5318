"""
Core duplicate detection engine — scanner, hasher, grouping map, and pipeline orchestrator.

- GroupingMap: ordered key → files accumulator used by both stages
- FileScannerImpl: recursive directory traversal grouping regular files by size
- HasherImpl + XXHashAlgorithmImpl: xxHash64 full-content hashing
- ContentHashStage: re-groups same-size files by content hash
- DeduplicatorImpl: size → content hash pipeline with statistics
- Models and errors: File, DeduplicationParams, ErrorPolicy, ErrorCollector

All components are pure Python with no UI dependencies.
"""

from .grouper import GroupingMap
from .models import File, DeduplicationParams, DeduplicationStats, ErrorPolicy, Stage
from .errors import ErrorCollector, FileOperationError, TraversalError, ReadError, DeletionError
from .scanner import FileScannerImpl
from .hasher import HasherImpl, XXHashAlgorithmImpl
from .stages import ContentHashStage
from .deduplicator import DeduplicatorImpl

__all__ = [
    "GroupingMap",
    "File",
    "DeduplicationParams",
    "DeduplicationStats",
    "ErrorPolicy",
    "Stage",
    "ErrorCollector",
    "FileOperationError",
    "TraversalError",
    "ReadError",
    "DeletionError",
    "FileScannerImpl",
    "HasherImpl",
    "XXHashAlgorithmImpl",
    "ContentHashStage",
    "DeduplicatorImpl",
]

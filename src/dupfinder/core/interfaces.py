"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the duplicate finder.
These protocols enforce structural typing using Python's `typing.Protocol` so the
scanner, hasher and stages can be swapped out in tests.

Key Components:
---------------
- HashAlgorithm: Fixed-width hash over a byte string (xxHash64 by default).
- Hasher: Computes the content hash of a File and compares two files byte by byte.
- FileScanner: Walks root directories and returns a size-keyed GroupingMap.
"""

from typing import Protocol, Optional, Callable

from dupfinder.core.models import File
from dupfinder.core.grouper import GroupingMap


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    The result is an unsigned integer so it can key a GroupingMap the same way
    a file size does.
    """

    @staticmethod
    def hash(data: bytes) -> int:
        """Computes the hash of the provided byte data."""
        ...


class Hasher(Protocol):
    """Interface for hashing file contents."""
    files_read: int
    bytes_read: int

    def compute_full_hash(self, file: File) -> int: ...
    def contents_equal(self, first: File, second: File) -> bool: ...


class FileScanner(Protocol):
    """
    Interface for scanning file systems and grouping files by size.
    """
    def scan(
        self,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> GroupingMap:
        """
        Scan all configured roots.

        Args:
            progress_callback: Optional callback for reporting progress (stage, current, total).

        Returns:
            GroupingMap of File records keyed by size in bytes.
        """
        ...

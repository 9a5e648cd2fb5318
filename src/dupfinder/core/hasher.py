"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements file hashing utilities using the File class and pluggable hash algorithms.

HasherImpl reads a whole file into memory, hashes it and caches the result on
the File record. Only one file's content is held at a time.
"""

import filecmp
import logging

import xxhash

from dupfinder.core.errors import ReadError
from dupfinder.core.interfaces import Hasher, HashAlgorithm
from dupfinder.core.models import File

logger = logging.getLogger(__name__)


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(HashAlgorithm):
    @staticmethod
    def hash(data: bytes) -> int:
        return xxhash.xxh64(data).intdigest()


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Raises ReadError when a file cannot be read.
    """

    def __init__(self, algorithm: HashAlgorithm = None):
        self.algorithm = algorithm or XXHashAlgorithmImpl()
        self.files_read = 0
        self.bytes_read = 0

    def compute_full_hash(self, file: File) -> int:
        """Computes and caches the hash of the whole file content."""
        if file.hash is not None:
            return file.hash
        try:
            with open(file.path, 'rb') as f:
                data = f.read()
        except OSError as e:
            raise ReadError(file.path, e.strerror or e) from e

        result = self.algorithm.hash(data)
        self.files_read += 1
        self.bytes_read += len(data)
        file.hash = result
        logger.debug(f"Hashed {file.path} ({len(data)} bytes): {result}")
        return result

    @staticmethod
    def contents_equal(first: File, second: File) -> bool:
        """Byte-for-byte comparison of two files, read in chunks."""
        try:
            return filecmp.cmp(first.path, second.path, shallow=False)
        except OSError as e:
            failed = e.filename or second.path
            raise ReadError(failed, e.strerror or e) from e

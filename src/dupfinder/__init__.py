"""
dupfinder — find duplicate files across directory trees.

Core features:
- Two-stage detection: size grouping, then xxHash64 of full content for same-size files only
- Keep-first deletion policy with a byte-for-byte check before each delete
- Permanent deletion or system trash (via send2trash)
- Abort-on-first-error or skip-and-warn error policy
"""

try:
    from importlib.metadata import version as _version, PackageNotFoundError
    __version__ = _version("dupfinder")
except PackageNotFoundError:
    __version__ = "0.1.0"

# Public API — only what users should import directly
from dupfinder.commands import DeduplicationCommand
from dupfinder.core import (
    GroupingMap, File, DeduplicationParams, DeduplicationStats, ErrorPolicy, FileOperationError
)
from dupfinder.services import DuplicateService, FileService

__all__ = [
    "DeduplicationCommand",
    "GroupingMap",
    "File",
    "DeduplicationParams",
    "DeduplicationStats",
    "ErrorPolicy",
    "FileOperationError",
    "DuplicateService",
    "FileService",
    "__version__",
]

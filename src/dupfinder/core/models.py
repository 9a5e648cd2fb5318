"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for file scanning and duplicate detection.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Union
from enum import Enum

from dupfinder.utils.convert_utils import ConvertUtils


# =============================
# Enums
# =============================

class ErrorPolicy(Enum):
    """
    What to do when a filesystem operation fails mid-run.
    """
    ABORT = "abort"
    SKIP = "skip"

    @property
    def description(self) -> str:
        """Detailed description for help text."""
        mapping = {
            ErrorPolicy.ABORT:
                "Stop the whole run at the first unreadable or undeletable file",
            ErrorPolicy.SKIP:
                "Warn, drop the offending file and report all errors at the end",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class Stage(str, Enum):
    SIZE = "Size grouping"
    HASH = "Content Hash"


# ======================
#  Core Data Models
# ======================

@dataclass
class File:
    """
    A single regular file found during the scan.
    `hash` stays None until the content verifier reads the file.
    """
    path: str
    size: int  # in bytes
    hash: Optional[int] = None

    def __repr__(self):
        return f"<File path={self.path}, size={self.size}>"


@dataclass
class DeduplicationParams:
    """Parameters for one run with validation."""
    root_dirs: List[str] = field(default_factory=lambda: ["./"])
    ignore_empty: bool = False
    delete_duplicates: bool = False
    error_policy: ErrorPolicy = ErrorPolicy.ABORT
    use_trash: bool = False
    verify_before_delete: bool = True

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dirs:
            raise ValueError("At least one directory is required")

        for root in self.root_dirs:
            if not root or not root.strip():
                raise ValueError("Directory path cannot be empty")

        if not isinstance(self.error_policy, ErrorPolicy):
            self.error_policy = ErrorPolicy(self.error_policy)


class DeduplicationStats:
    """
    Statistics collected during a run.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.stage_stats: Dict[str, Dict[str, Union[int, float]]] = {}
        self.files_read: int = 0
        self.bytes_hashed: int = 0
        self.reclaimable_bytes: int = 0
        self.errors: List[Exception] = []

    def update_stage(
            self,
            stage_name: str,
            groups_found: int,
            files_processed: int,
            duration: float
    ) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {
                "groups": 0,
                "files": 0,
                "time": 0.0
            }
        self.stage_stats[stage_name]["groups"] += groups_found
        self.stage_stats[stage_name]["files"] += files_processed
        self.stage_stats[stage_name]["time"] += duration

    def print_summary(self) -> str:
        labels = {
            "size": "📁 Size Groups",
            "hash": "🔍 Content Hash Groups",
        }

        lines = [
            "📊 Deduplication Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            "Stage: GROUPS / FILES / TIME"
        ]

        for stage, data in self.stage_stats.items():
            label = labels.get(stage.lower(), stage.title())
            lines.append(f"{label}: {data['groups']} / {data['files']} / {data['time']:.3f}s")

        lines.append(f"Files read: {self.files_read} ({ConvertUtils.bytes_to_human(self.bytes_hashed)})")
        lines.append(f"Reclaimable space: {ConvertUtils.bytes_to_human(self.reclaimable_bytes)}")
        if self.errors:
            lines.append(f"Errors skipped: {len(self.errors)}")

        return "\n".join(lines)

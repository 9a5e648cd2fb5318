"""
Unified command orchestrator for duplicate detection and removal.
This is the single entry point into the core used by the CLI.
"""
from typing import Callable, Optional, TextIO, Tuple

from dupfinder.core.deduplicator import DeduplicatorImpl
from dupfinder.core.errors import ErrorCollector
from dupfinder.core.grouper import GroupingMap
from dupfinder.core.models import DeduplicationParams, DeduplicationStats
from dupfinder.services.duplicate_service import DeletionResult, DuplicateService
from dupfinder.services.file_service import FileService


class DeduplicationCommand:
    """
    Orchestrates the whole workflow:
    1. Scan all roots and group files by size
    2. Hash same-size files and group them by content
    3. Report duplicate groups and, if requested, delete all but the first file

    Usage:
        params = DeduplicationParams(root_dirs=["./photos"], delete_duplicates=True)
        command = DeduplicationCommand()
        groups, stats = command.execute(params, progress_callback=cli_progress_printer)
        result = command.report(groups, stream=sys.stderr)
    """

    def __init__(self, deduplicator: Optional[DeduplicatorImpl] = None):
        self.deduplicator = deduplicator or DeduplicatorImpl()
        self.params: Optional[DeduplicationParams] = None
        self.errors: Optional[ErrorCollector] = None

    def execute(
            self,
            params: DeduplicationParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> Tuple[GroupingMap, DeduplicationStats]:
        """
        Find duplicates with the given parameters.

        Args:
            params: Validated parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None

        Returns:
            Tuple of (hash-keyed groups, statistics)

        Raises:
            FileOperationError: On the first filesystem failure under the abort policy
        """
        self.params = params
        self.errors = ErrorCollector(params.error_policy)
        return self.deduplicator.find_duplicates(
            params,
            error_collector=self.errors,
            progress_callback=progress_callback
        )

    def report(self, groups: GroupingMap, stream: Optional[TextIO] = None) -> DeletionResult:
        """Report the groups found by execute() and apply the deletion policy."""
        if self.params is None:
            raise RuntimeError("Execute command first before reporting results")

        return DuplicateService.process_results(
            groups,
            delete_duplicates=self.params.delete_duplicates,
            file_service=FileService(use_trash=self.params.use_trash),
            hasher=self.deduplicator.hasher,
            verify_before_delete=self.params.verify_before_delete,
            on_error=self.errors,
            stream=stream
        )

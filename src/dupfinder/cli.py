#!/usr/bin/env python3
"""
dupfinder CLI — command line interface for duplicate file detection and removal.
Scans one or more directories, reports duplicate groups on stderr and can
delete every copy except the first one found.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from typing import List, Optional, NoReturn
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

from dupfinder import __version__
from dupfinder.commands import DeduplicationCommand
from dupfinder.core.errors import FileOperationError
from dupfinder.core.models import DeduplicationParams
from dupfinder.utils.convert_utils import ConvertUtils
from dupfinder.aliases import (
    ERROR_POLICY_ALIASES, ERROR_POLICY_CHOICES, ERROR_POLICY_HELP_TEXT,
    DELETION_WARNING, EPILOG_TEXT
)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="dupfinder",
            description="dupfinder — find duplicate files and optionally delete all but one copy",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "--directoryPath",
            action="append",
            default=None,
            type=str,
            metavar="PATH",
            dest="directory_paths",
            help="Path to the directory you want to check (repeatable). Default: ./"
        )
        parser.add_argument(
            "--ignoreEmpty",
            action="store_true",
            dest="ignore_empty",
            help="Ignore empty files."
        )
        parser.add_argument(
            "--deleteDuplicates",
            action="store_true",
            dest="delete_duplicates",
            help="Delete found duplicates (use with caution!). The first file found in each group is kept."
        )

        # Error handling and deletion options
        parser.add_argument(
            "--onError",
            choices=ERROR_POLICY_CHOICES,
            default="abort",
            type=str,
            dest="on_error",
            help=ERROR_POLICY_HELP_TEXT
        )
        parser.add_argument(
            "--trash",
            action="store_true",
            help="With --deleteDuplicates, move duplicates to the system trash instead of deleting them"
        )
        parser.add_argument(
            "--noVerify",
            action="store_true",
            dest="no_verify",
            help="With --deleteDuplicates, skip the byte-for-byte comparison with the kept file"
        )

        # Output options
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show debug logging and detailed statistics"
        )
        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {__version__}"
        )

        args = parser.parse_args(args)
        if not args.directory_paths:
            args.directory_paths = ["./"]
        return args

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.trash and not args.delete_duplicates:
            self.warning("--trash has no effect without --deleteDuplicates")
        if args.no_verify and not args.delete_duplicates:
            self.warning("--noVerify has no effect without --deleteDuplicates")

    def create_params(self, args: argparse.Namespace) -> DeduplicationParams:
        """Create DeduplicationParams from CLI arguments."""
        try:
            return DeduplicationParams(
                root_dirs=list(args.directory_paths),
                ignore_empty=args.ignore_empty,
                delete_duplicates=args.delete_duplicates,
                error_policy=ERROR_POLICY_ALIASES[args.on_error],
                use_trash=args.trash,
                verify_before_delete=not args.no_verify
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    @staticmethod
    def confirm_deletion() -> None:
        """
        Blocks on one line of stdin before any scanning starts.
        Anything other than exactly 'y' ends the process with exit code 0.
        """
        try:
            response = input(DELETION_WARNING)
        except EOFError:
            response = ""

        if response.strip() != "y":
            print("Abort ...")
            sys.exit(0)

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(
                f"\r  [{stage}] {current}/{total} ({percent:.1f}%)"
            )
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
        sys.stderr.flush()

    def report_errors(self, errors: List[FileOperationError]) -> None:
        """Print every error collected under the skip policy."""
        print(f"\n⚠️  {len(errors)} file(s) could not be processed:", file=sys.stderr)
        for error in errors:
            print(f"  • {error}", file=sys.stderr)

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> None:
        """Main entry point."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        if self.verbose:
            logging.getLogger("dupfinder").setLevel(logging.DEBUG)

        self.validate_args(args)
        params = self.create_params(args)

        # Confirmation happens before the filesystem is touched
        if params.delete_duplicates:
            self.confirm_deletion()

        print(f"Processing files in the following directory(ies): {params.root_dirs}")
        sys.stdout.flush()

        command = DeduplicationCommand()
        try:
            groups, stats = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None
            )
            if self.verbose:
                sys.stderr.write("\n")
            result = command.report(groups, stream=sys.stderr)
        except FileOperationError as e:
            self.error_exit(str(e))

        if self.verbose:
            print("\n" + stats.print_summary())
            if params.delete_duplicates:
                print(
                    f"Deleted {len(result.deleted)} file(s), "
                    f"freed {ConvertUtils.bytes_to_human(result.freed_bytes)}"
                )
            print(f"\n✅ Completed in {time.time() - self.start_time:.2f} seconds")

        if command.errors.has_errors:
            self.report_errors(command.errors.errors)
            sys.exit(1)


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

from dupfinder.core.models import ErrorPolicy

ERROR_POLICY_ALIASES = {
    "abort": ErrorPolicy.ABORT,
    "skip": ErrorPolicy.SKIP,
}

ERROR_POLICY_CHOICES = list(ERROR_POLICY_ALIASES.keys())

ERROR_POLICY_HELP_TEXT = (
    "What to do when a file or directory cannot be read or deleted:\n"
    f"  abort : {ErrorPolicy.ABORT.description} (default)\n"
    f"  skip  : {ErrorPolicy.SKIP.description}\n"
)

DELETION_WARNING = "WARNING: deleting duplicated files is enabled. Do you want to continue ? (y/N) "

EPILOG_TEXT = """
Examples:
  Find duplicates in the current directory
  %(prog)s

  Find duplicates across two directories, ignoring empty files
  %(prog)s --directoryPath ~/Photos --directoryPath /mnt/backup/Photos --ignoreEmpty

  Same as above + delete every copy except the first one found (asks for confirmation)
  %(prog)s --directoryPath ~/Photos --directoryPath /mnt/backup/Photos --ignoreEmpty --deleteDuplicates

  Move duplicates to the system trash and keep going past unreadable files
  %(prog)s --directoryPath ~/Downloads --deleteDuplicates --trash --onError skip

Duplicate groups are written to stderr: a "<hash> (<count>)" header, one line per file, then a blank line.
"""

"""
Destination resolution

Turns a destination name ("stdout", "stderr" or a file path) into the
writer a Logger writes to.
"""

from pathlib import Path

from imqslog.constants import (
    CONTAINER_MARKER,
    DEFAULT_MAX_BACKUPS,
    DEFAULT_MAX_SIZE_MB,
    MEGABYTE,
    STDERR,
    STDOUT,
)
from imqslog.file_handler import RotatingFileHandler
from imqslog.writers import ConsoleWriter, FanOutWriter


def is_container(marker: str = CONTAINER_MARKER) -> bool:
    """True when the container marker file exists"""
    return Path(marker).exists()


def resolve_destination(
    filename: str,
    log_to_stdout: bool,
    in_container: bool,
    max_size_mb: int = DEFAULT_MAX_SIZE_MB,
    max_backups: int = DEFAULT_MAX_BACKUPS,
):
    """
    Build the writer for a destination.

    Rules, first match wins:
        - STDOUT: stdout only, whatever the flags say
        - STDERR: stderr only, whatever the flags say
        - any other name is a file path and gets a rotating file; inside a
          container, or when log_to_stdout is set, every line also goes to
          stdout (console first, file second)

    Args:
        filename: STDOUT, STDERR or a file path
        log_to_stdout: mirror file logs to stdout
        in_container: result of is_container(), evaluated by the caller
        max_size_mb: size in megabytes at which the file is rotated
        max_backups: number of rotated files kept

    Returns:
        ConsoleWriter, RotatingFileHandler or FanOutWriter
    """
    if filename == STDOUT:
        return ConsoleWriter(STDOUT)
    if filename == STDERR:
        return ConsoleWriter(STDERR)

    file_writer = RotatingFileHandler(filename, max_bytes=int(max_size_mb * MEGABYTE), backup_count=max_backups)
    if in_container or log_to_stdout:
        return FanOutWriter([ConsoleWriter(STDOUT), file_writer])
    return file_writer

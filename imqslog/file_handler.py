"""
File Handler - rotating file sink for imqslog

Appends log lines to a file and rolls it over when it grows past a size
limit, keeping a bounded number of backups.

Rotation pattern:
    app.log     -> app.log.1
    app.log.1   -> app.log.2
    ...
    app.log.N   -> deleted (N == backup_count)

Usage:
    from imqslog.file_handler import RotatingFileHandler

    handler = RotatingFileHandler("/var/log/imqs/app.log", max_bytes=30 * 1024 * 1024, backup_count=3)
    handler.write("Log message\n")
    handler.close()
"""

import os
from pathlib import Path
from threading import Lock

from imqslog.constants import DEFAULT_MAX_BACKUPS, DEFAULT_MAX_SIZE_MB, MEGABYTE


class RotatingFileHandler:
    """
    Size based rotating file handler.

    A write that would take the file past max_bytes first moves the current
    file aside. Errors opening or writing the file are raised to the caller;
    errors shuffling old backups around are not, so that a stale backup can
    never stop the current file from being written.

    Example:
        handler = RotatingFileHandler("/var/log/imqs/app.log", max_bytes=1024, backup_count=3)
        handler.write("2024-01-20T10:15:30.123456+00:00 [I] Test\n")
        handler.close()
    """

    closeable = True

    def __init__(
        self,
        filepath: str,
        max_bytes: int = DEFAULT_MAX_SIZE_MB * MEGABYTE,
        backup_count: int = DEFAULT_MAX_BACKUPS,
        encoding: str = "utf-8",
    ):
        """
        Initialize rotating file handler.

        Args:
            filepath: Path to log file
            max_bytes: Maximum file size before rotation (default: 30MB)
            backup_count: Number of backup files to keep (default: 3)
            encoding: File encoding (default: utf-8)
        """
        self.filepath = Path(filepath)
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self.encoding = encoding
        self._file = None
        self._lock = Lock()
        self._ensure_directory()

    def __str__(self):
        return str(self.filepath)

    def _ensure_directory(self):
        """Create log directory if it doesn't exist"""
        self.filepath.parent.mkdir(parents=True, exist_ok=True)

    def write(self, content: str) -> int:
        """
        Write content to file, rotating first if needed.

        Args:
            content: Content to write (should include newline if needed)

        Returns:
            Number of characters written
        """
        with self._lock:
            if self._should_rotate(len(content.encode(self.encoding))):
                self._rotate()

            if self._file is None or self._file.closed:
                self._file = open(self.filepath, "a", encoding=self.encoding)

            written = self._file.write(content)
            self._file.flush()
            return written

    def _current_size(self) -> int:
        if self._file is not None and not self._file.closed:
            return self._file.tell()
        try:
            return self.filepath.stat().st_size
        except OSError:
            return 0

    def _should_rotate(self, incoming: int) -> bool:
        """
        Check if the next write would take the file past max_bytes.

        An empty file is never rotated, even when a single write is larger
        than max_bytes.
        """
        size = self._current_size()
        return size > 0 and size + incoming > self.max_bytes

    def _rotate(self):
        """Close the current file and shift the backups up by one."""
        if self._file and not self._file.closed:
            self._file.close()
            self._file = None

        if self.backup_count <= 0:
            # No backups wanted, start the file over
            self.filepath.unlink(missing_ok=True)
            return

        oldest_backup = Path(f"{self.filepath}.{self.backup_count}")
        if oldest_backup.exists():
            try:
                oldest_backup.unlink()
            except OSError:
                pass

        for i in range(self.backup_count - 1, 0, -1):
            src = Path(f"{self.filepath}.{i}")
            dst = Path(f"{self.filepath}.{i + 1}")
            if src.exists():
                try:
                    src.replace(dst)
                except OSError:
                    pass

        if self.filepath.exists():
            try:
                self.filepath.replace(Path(f"{self.filepath}.1"))
            except OSError:
                pass

    def flush(self):
        """Flush buffered data through to disk."""
        with self._lock:
            if self._file and not self._file.closed:
                self._file.flush()
                os.fsync(self._file.fileno())

    def close(self):
        """Close file handle. Safe to call more than once."""
        with self._lock:
            if self._file and not self._file.closed:
                self._file.flush()
                self._file.close()
                self._file = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

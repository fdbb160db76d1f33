"""
Logger - leveled logging to the console, a rotating file or a test harness

Every admitted call becomes one line:

    2024-03-11T14:22:05.123456+02:00 [I] Server started

Usage:
    from imqslog.logger import Logger
    from imqslog.levels import Level

    log = Logger("/var/log/imqs/service.log", log_to_stdout=True)
    log.level = Level.DEBUG
    log.info("Server started")
    log.warn("Disk at %d%%", 90)
    log.close()

Inside tests, hand the logger a callable instead of a destination:

    log = Logger.for_capture(print)
    log.info("hello")  # prints "[I] hello"
"""

import sys
from datetime import datetime
from threading import Lock
from beartype.typing import Any, Callable, Optional

from imqslog.constants import (
    DEFAULT_MAX_BACKUPS,
    DEFAULT_MAX_SIZE_MB,
    FAULT_MAPPING,
    TESTING,
    TIMESTAMP_PRECISION,
)
from imqslog.destination import is_container, resolve_destination
from imqslog.levels import Level
from imqslog.writers import CaptureWriter, SinkWriteError


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """Local time, ISO 8601 with microseconds and a numeric offset"""
    if moment is None:
        moment = datetime.now()
    return moment.astimezone().isoformat(timespec=TIMESTAMP_PRECISION)


def normalize_message(message: str) -> str:
    """Make sure the message ends with exactly one newline"""
    return message.rstrip("\n") + "\n"


class Logger:
    """
    A leveled logger writing to one resolved destination.

    Messages below `level` are discarded before they are formatted. Logging
    calls never raise: if the log file cannot be written, a notice is
    printed to stdout the first time and later failures are ignored.
    Console failures are dropped.
    """

    def __init__(
        self,
        filename: str,
        log_to_stdout: bool = False,
        level: Level = Level.INFO,
        reporter=None,
        in_container: Optional[bool] = None,
        max_size_mb: float = DEFAULT_MAX_SIZE_MB,
        max_backups: int = DEFAULT_MAX_BACKUPS,
        capture: Optional[Callable[[str], Any]] = None,
    ):
        """
        Args:
            filename: STDOUT, STDERR, TESTING or a path to a log file
            log_to_stdout: also write file logs to stdout
            level: minimum level that is logged
            reporter: optional RemoteReporter that receives every admitted message
            in_container: skip container detection and use this value instead
            max_size_mb: file size at which the log file is rotated
            max_backups: number of rotated log files kept
            capture: callable receiving lines in test mode (filename == TESTING)
        """
        self.level = level
        self.filename = filename
        self.reporter = reporter
        self.shown_error = False
        self._lock = Lock()

        if filename == TESTING:
            if capture is None:
                raise ValueError(FAULT_MAPPING["missing_capture"].format(testing=TESTING))
            self.in_container = False
            self._capture = CaptureWriter(capture)
            self._destination = None
        else:
            self.in_container = is_container() if in_container is None else in_container
            self._capture = None
            self._destination = resolve_destination(
                filename, log_to_stdout, self.in_container, max_size_mb=max_size_mb, max_backups=max_backups
            )

    @classmethod
    def for_capture(cls, capture: Callable[[str], Any], level: Level = Level.INFO) -> "Logger":
        """Create a logger that hands untimestamped lines to a test harness"""
        return cls(TESTING, level=level, capture=capture)

    @property
    def destination(self):
        return self._destination

    @property
    def capturing(self) -> bool:
        return self._capture is not None

    def trace(self, message: str, *args):
        self.log(Level.TRACE, message, *args)

    def debug(self, message: str, *args):
        self.log(Level.DEBUG, message, *args)

    def info(self, message: str, *args):
        self.log(Level.INFO, message, *args)

    def warn(self, message: str, *args):
        self.log(Level.WARN, message, *args)

    warning = warn

    def error(self, message: str, *args):
        self.log(Level.ERROR, message, *args)

    def log(self, level: Level, message: str, *args):
        """
        Log a message at the given level.

        When args are given the message is a %-style format string. It is
        only formatted if the level passes the threshold. A pattern that does
        not match its args is logged as the pattern followed by the args.
        """
        if level < self.level:
            return
        if args:
            try:
                message %= args
            except (TypeError, ValueError, KeyError):
                message = f"{message} {args!r}"
        line = normalize_message(message)
        tag = Level(level).tag

        if self._capture is not None:
            self._capture.write(f"[{tag}] {line[:-1]}")
        else:
            self.write(f"{format_timestamp()} [{tag}] {line}")

        if self.reporter is not None and self.reporter.enabled:
            self.reporter.submit(Level(level).remote_name, message)

    def write(self, content: str) -> int:
        """
        Write raw content to the destination.

        The first file sink failure is reported on stdout, later ones are
        ignored. Console failures are dropped without a notice. Never raises
        and always reports the whole content as consumed.
        """
        if self._capture is not None:
            return self._capture.write(content)
        with self._lock:
            try:
                self._destination.write(content)
            except SinkWriteError as e:
                file_errors = [error for sink, error in e.failures if sink.closeable]
                if file_errors:
                    self._report_file_error(file_errors[0])
            except (OSError, ValueError) as e:
                if self._destination.closeable:
                    self._report_file_error(e)
        return len(content)

    def _report_file_error(self, error: Exception):
        if self.shown_error:
            return
        self.shown_error = True
        try:
            print(FAULT_MAPPING["sink_write_failed"].format(filename=self.filename, error=error), file=sys.stdout)
        except (OSError, ValueError):
            # stdout itself is gone
            pass

    def flush(self):
        if self._destination is not None:
            with self._lock:
                self._destination.flush()

    def close(self):
        """Release the destination. Console and capture destinations are left alone."""
        if self._destination is not None and self._destination.closeable:
            with self._lock:
                self._destination.close()
        if self.reporter is not None:
            self.reporter.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class LoggerFactory:
    """
    Holder for the process-wide logger.

    The first configure() builds the logger; later calls return that same
    instance and ignore their arguments. Passing a Logger explicitly is
    preferred where it is practical.
    """

    _logger: Optional[Logger] = None
    _lock = Lock()

    @classmethod
    def configure(cls, filename: str, log_to_stdout: bool = False, **kwargs) -> Logger:
        """
        Create the process-wide logger, or return it if it already exists.

        Example:
            log = LoggerFactory.configure("/var/log/imqs/service.log", log_to_stdout=True)
        """
        with cls._lock:
            if cls._logger is None:
                cls._logger = Logger(filename, log_to_stdout, **kwargs)
            return cls._logger

    @classmethod
    def is_configured(cls) -> bool:
        return cls._logger is not None

    @classmethod
    def get_logger(cls) -> Logger:
        if cls._logger is None:
            raise RuntimeError(FAULT_MAPPING["logger_not_configured"])
        return cls._logger

    @classmethod
    def reset(cls):
        """
        Close and forget the process-wide logger.

        Useful for testing.
        """
        with cls._lock:
            if cls._logger is not None:
                cls._logger.close()
            cls._logger = None

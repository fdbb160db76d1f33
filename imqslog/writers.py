"""
Writers - the sinks a Logger can write formatted lines to

Every writer has the same shape:
    write(content: str) -> int
    flush()
    close()
    closeable: bool  (fixed per class, decides whether Logger.close() closes it)
"""

import sys
from beartype.typing import Any, Callable, List, Tuple

from imqslog.constants import STDOUT, STDERR


class SinkWriteError(OSError):
    """Raised by FanOutWriter when one of its sinks failed.

    Attributes:
        sink: the first writer that failed
        error: the exception raised by that writer
        failures: every (writer, exception) pair, in write order
    """

    def __init__(self, failures: List[Tuple[Any, Exception]]):
        self.failures = list(failures)
        self.sink, self.error = self.failures[0]
        super().__init__("; ".join(f"{sink}: {error}" for sink, error in self.failures))


class ConsoleWriter:
    """
    Writes to the process stdout or stderr.

    The stream is looked up on every write so that redirection of
    sys.stdout/sys.stderr (by test runners, for example) is honoured.
    Closing a ConsoleWriter never closes the process stream.
    """

    closeable = False

    def __init__(self, stream_name: str = STDOUT):
        if stream_name not in (STDOUT, STDERR):
            raise ValueError(f"Console stream must be '{STDOUT}' or '{STDERR}', got '{stream_name}'")
        self.stream_name = stream_name

    def __str__(self):
        return self.stream_name

    @property
    def stream(self):
        return sys.stdout if self.stream_name == STDOUT else sys.stderr

    def write(self, content: str) -> int:
        stream = self.stream
        written = stream.write(content)
        stream.flush()
        return written

    def flush(self):
        self.stream.flush()

    def close(self):
        pass


class FanOutWriter:
    """
    Write to several sinks, in order.

    Every sink is attempted even if an earlier one fails, so a console
    problem can never stop a line reaching the log file. When any sink
    failed, a SinkWriteError carrying every failure is raised after all
    sinks were tried.

    Example:
        writer = FanOutWriter([ConsoleWriter(STDOUT), RotatingFileHandler("/var/log/imqs/app.log")])
        writer.write("Log entry\n")
    """

    def __init__(self, writers: List[Any]):
        self.writers = list(writers)
        self.closeable = any(writer.closeable for writer in self.writers)

    def __str__(self):
        return ", ".join(str(writer) for writer in self.writers)

    def write(self, content: str) -> int:
        failures = []
        for writer in self.writers:
            try:
                writer.write(content)
            except (OSError, ValueError) as e:
                # ValueError is what a closed file object raises on write
                failures.append((writer, e))
        if failures:
            raise SinkWriteError(failures)
        return len(content)

    def flush(self):
        for writer in self.writers:
            writer.flush()

    def close(self):
        """Close the closeable sinks. Console sinks are left open."""
        for writer in self.writers:
            if writer.closeable:
                writer.close()


class CaptureWriter:
    """
    Hand lines to a test harness callable, e.g. print or list.append.
    """

    closeable = False

    def __init__(self, emit: Callable[[str], Any]):
        self.emit = emit

    def __str__(self):
        return getattr(self.emit, "__qualname__", repr(self.emit))

    def write(self, content: str) -> int:
        self.emit(content)
        return len(content)

    def flush(self):
        pass

    def close(self):
        pass

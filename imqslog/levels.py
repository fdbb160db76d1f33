"""
Severity levels for imqslog

Levels are ordered by numeric rank, so they can be compared directly:

    Level.DEBUG < Level.INFO  # True

Each level has a display name, a one letter tag used in formatted lines
and a name understood by the remote error reporter.
"""

from enum import IntEnum
from beartype.typing import Tuple

from imqslog.constants import FAULT_MAPPING


class Level(IntEnum):
    """Log levels, lowest first"""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4

    @property
    def display_name(self) -> str:
        return level_to_name(self)

    @property
    def tag(self) -> str:
        """Single character shown between brackets in a log line, e.g. 'W' for WARN"""
        return level_to_name(self)[0]

    @property
    def remote_name(self) -> str:
        """Severity name used when submitting to the remote reporter"""
        return _REMOTE_NAMES[self]


_NAMES = {
    Level.TRACE: "Trace",
    Level.DEBUG: "Debug",
    Level.INFO: "Info",
    Level.WARN: "Warning",
    Level.ERROR: "Error",
}

# The remote reporter has no trace severity
_REMOTE_NAMES = {
    Level.TRACE: "debug",
    Level.DEBUG: "debug",
    Level.INFO: "info",
    Level.WARN: "warning",
    Level.ERROR: "error",
}

_FIRST_CHARS = {
    "t": Level.TRACE,
    "d": Level.DEBUG,
    "i": Level.INFO,
    "w": Level.WARN,
    "e": Level.ERROR,
}


def level_to_name(level: int) -> str:
    """
    Return the display name of a level.

    Raises ValueError for anything outside the Level enumeration. That is a
    programming error and is not meant to be caught.
    """
    try:
        return _NAMES[level]
    except (KeyError, TypeError):
        raise ValueError(f"Unknown log level {level!r}") from None


def parse_level(text: str) -> Tuple[Level, str]:
    """
    Parse a level string such as "info" or "Warn".

    Only the first character is considered, case-insensitively.

    Returns:
        Tuple of (level, error_message). On failure the level is INFO and
        error_message is not empty, so callers must check the error.

    Example:
        level, error = parse_level("warning")
        if error:
            print(error)
    """
    if text:
        level = _FIRST_CHARS.get(text[0].lower())
        if level is not None:
            return level, ""
    return Level.INFO, FAULT_MAPPING["invalid_level"].format(level=text)

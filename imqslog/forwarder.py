"""
Forwarder - funnel another logging system's output into a Logger

The foreign system usually prefixes each line with its own timestamp. The
Forwarder strips a fixed number of leading characters (or bytes) and logs
the rest at a fixed level, so all lines end up in the same format.

Example, routing the stdlib logging module through imqslog:

    handler = logging.StreamHandler(Forwarder(24, Level.INFO, log))
    handler.setFormatter(logging.Formatter("%(asctime)s %(message)s"))
    logging.getLogger("urllib3").addHandler(handler)
"""

from beartype.typing import Union

from imqslog.constants import FAULT_MAPPING
from imqslog.levels import Level


class Forwarder:
    """
    File-like adapter that forwards writes to Logger.log.

    Attributes:
        strip_prefix_len: number of leading characters/bytes dropped from every write
        level: level assigned to every forwarded message
        target: the Logger receiving messages, not owned by the Forwarder
    """

    def __init__(self, strip_prefix_len: int, level: Level, target):
        if strip_prefix_len < 0:
            raise ValueError(FAULT_MAPPING["negative_prefix"].format(value=strip_prefix_len))
        self.strip_prefix_len = strip_prefix_len
        self.level = level
        self.target = target

    def write(self, data: Union[str, bytes]) -> int:
        """
        Forward one write.

        Input no longer than the prefix is dropped silently; blank and
        keep-alive lines are expected from upstream. Always reports the
        whole input as consumed.
        """
        if len(data) > self.strip_prefix_len:
            message = data[self.strip_prefix_len:]
            if isinstance(message, bytes):
                message = message.decode("utf-8", errors="replace")
            self.target.log(self.level, message)
        return len(data)

    def flush(self):
        pass

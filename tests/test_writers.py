"""
Unit tests for writers.py
"""

import io
import shutil
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from imqslog.file_handler import RotatingFileHandler
from imqslog.writers import CaptureWriter, ConsoleWriter, FanOutWriter, SinkWriteError


class FailingWriter:
    closeable = True

    def __init__(self):
        self.closed = False

    def __str__(self):
        return "failing"

    def write(self, content):
        raise OSError("No space left on device")

    def flush(self):
        pass

    def close(self):
        self.closed = True


class TestConsoleWriter(unittest.TestCase):
    def test_writes_to_current_stdout(self):
        """The stream is looked up at write time"""
        writer = ConsoleWriter("stdout")
        buffer = io.StringIO()

        with mock.patch.object(sys, "stdout", buffer):
            writer.write("hello\n")

        self.assertEqual(buffer.getvalue(), "hello\n")

    def test_writes_to_stderr(self):
        writer = ConsoleWriter("stderr")
        buffer = io.StringIO()

        with mock.patch.object(sys, "stderr", buffer):
            writer.write("oops\n")

        self.assertEqual(buffer.getvalue(), "oops\n")

    def test_close_leaves_stream_open(self):
        writer = ConsoleWriter("stdout")
        buffer = io.StringIO()

        with mock.patch.object(sys, "stdout", buffer):
            writer.close()
            self.assertFalse(buffer.closed)
        self.assertFalse(writer.closeable)

    def test_rejects_unknown_stream(self):
        with self.assertRaises(ValueError):
            ConsoleWriter("/tmp/file.log")


class TestFanOutWriter(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.log_file = Path(self.temp_dir) / "test.log"

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_writes_to_every_sink_in_order(self):
        order = []
        first = CaptureWriter(lambda line: order.append(("first", line)))
        second = CaptureWriter(lambda line: order.append(("second", line)))

        written = FanOutWriter([first, second]).write("entry\n")

        self.assertEqual(order, [("first", "entry\n"), ("second", "entry\n")])
        self.assertEqual(written, len("entry\n"))

    def test_console_failure_does_not_stop_file(self):
        """Every sink is attempted, the first failure is raised afterwards"""
        file_writer = RotatingFileHandler(str(self.log_file))
        writer = FanOutWriter([FailingWriter(), file_writer])

        with self.assertRaises(SinkWriteError) as raised:
            writer.write("entry\n")
        file_writer.close()

        self.assertEqual(self.log_file.read_text(encoding="utf-8"), "entry\n")
        self.assertEqual(str(raised.exception.sink), "failing")
        self.assertIsInstance(raised.exception.error, OSError)

    def test_every_failure_is_reported(self):
        console = mock.Mock(closeable=False)
        console.write.side_effect = BrokenPipeError("Broken pipe")
        failing = FailingWriter()

        with self.assertRaises(SinkWriteError) as raised:
            FanOutWriter([console, failing]).write("entry\n")

        self.assertEqual([sink for sink, _ in raised.exception.failures], [console, failing])
        self.assertIs(raised.exception.sink, console)
        self.assertIsInstance(raised.exception.failures[1][1], OSError)

    def test_closeable_when_any_sink_is(self):
        self.assertTrue(FanOutWriter([ConsoleWriter("stdout"), FailingWriter()]).closeable)
        self.assertFalse(FanOutWriter([ConsoleWriter("stdout"), ConsoleWriter("stderr")]).closeable)

    def test_close_only_closes_closeable_sinks(self):
        failing = FailingWriter()
        console = mock.Mock(closeable=False)

        FanOutWriter([console, failing]).close()

        self.assertTrue(failing.closed)
        console.close.assert_not_called()


class TestCaptureWriter(unittest.TestCase):
    def test_emits_content(self):
        lines = []
        writer = CaptureWriter(lines.append)

        writer.write("[I] hello")

        self.assertEqual(lines, ["[I] hello"])
        self.assertFalse(writer.closeable)


if __name__ == "__main__":
    unittest.main()

"""
Unit tests for levels.py
"""

import unittest

from imqslog.levels import Level, level_to_name, parse_level


class TestLevel(unittest.TestCase):
    """Test Level enum"""

    def test_level_ranks(self):
        """Levels are ranked 0..4 from TRACE to ERROR"""
        self.assertEqual(
            [level.value for level in (Level.TRACE, Level.DEBUG, Level.INFO, Level.WARN, Level.ERROR)],
            [0, 1, 2, 3, 4],
        )

    def test_level_ordering(self):
        """Comparison follows the rank"""
        self.assertLess(Level.TRACE, Level.DEBUG)
        self.assertLess(Level.DEBUG, Level.INFO)
        self.assertLess(Level.INFO, Level.WARN)
        self.assertLess(Level.WARN, Level.ERROR)
        self.assertEqual(sorted(Level, reverse=True)[0], Level.ERROR)

    def test_tags(self):
        """Single character tags, WARN shows as W"""
        self.assertEqual("".join(level.tag for level in Level), "TDIWE")

    def test_display_names(self):
        self.assertEqual(Level.WARN.display_name, "Warning")
        self.assertEqual(Level.TRACE.display_name, "Trace")

    def test_remote_names(self):
        """TRACE has no remote counterpart and is sent as debug"""
        self.assertEqual(Level.TRACE.remote_name, "debug")
        self.assertEqual(Level.DEBUG.remote_name, "debug")
        self.assertEqual(Level.INFO.remote_name, "info")
        self.assertEqual(Level.WARN.remote_name, "warning")
        self.assertEqual(Level.ERROR.remote_name, "error")

    def test_unknown_level_is_fatal(self):
        with self.assertRaises(ValueError):
            level_to_name(7)


class TestParseLevel(unittest.TestCase):
    """Test parse_level"""

    def test_full_names(self):
        self.assertEqual(parse_level("Warn"), (Level.WARN, ""))
        self.assertEqual(parse_level("trace"), (Level.TRACE, ""))
        self.assertEqual(parse_level("ERROR"), (Level.ERROR, ""))

    def test_first_character_only(self):
        self.assertEqual(parse_level("w"), (Level.WARN, ""))
        self.assertEqual(parse_level("Dx"), (Level.DEBUG, ""))
        self.assertEqual(parse_level("information"), (Level.INFO, ""))

    def test_empty_is_invalid(self):
        level, error = parse_level("")
        self.assertEqual(level, Level.INFO)
        self.assertIn("Invalid log level", error)

    def test_unknown_is_invalid(self):
        level, error = parse_level("xyz")
        self.assertEqual(level, Level.INFO)
        self.assertEqual(error, "Invalid log level 'xyz'")


if __name__ == "__main__":
    unittest.main()

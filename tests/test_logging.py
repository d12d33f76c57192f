"""Log record formatting: UTC timestamps behind the Z suffix."""

import logging
import time
import unittest

from app.core.logging import build_formatter


class TestFormatter(unittest.TestCase):
    def test_timestamps_are_utc(self) -> None:
        formatter = build_formatter()
        self.assertIs(formatter.converter, time.gmtime)

        record = logging.LogRecord("app.test", logging.INFO, __file__, 1, "hello", None, None)
        record.created = 0.0
        record.msecs = 0.0
        line = formatter.format(record)
        self.assertTrue(line.startswith("1970-01-01T00:00:00Z INFO app.test hello"), line)


if __name__ == "__main__":
    unittest.main()

"""Logging goes to a file when requested and nowhere otherwise."""

from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path

from marcos.logger import init_logging, parse_log_level


class LoggerTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)

    def tearDown(self) -> None:
        init_logging(None)

    def test_parse_log_level(self) -> None:
        self.assertEqual(parse_log_level(None), logging.INFO)
        self.assertEqual(parse_log_level(" DEBUG "), logging.DEBUG)
        with self.assertRaises(ValueError):
            parse_log_level("chatty")

    def test_records_are_written_to_log_file(self) -> None:
        log_path = Path(self._tmp.name) / "logs" / "marcos.log"
        init_logging(log_path, "debug")

        logging.getLogger("marcos.tab").debug("entered %s", "/tmp")
        for handler in logging.getLogger("marcos").handlers:
            handler.flush()

        content = log_path.read_text(encoding="utf-8")
        self.assertIn("marcos.tab | DEBUG | entered /tmp", content)

    def test_level_filters_records(self) -> None:
        log_path = Path(self._tmp.name) / "marcos.log"
        init_logging(log_path, "warning")

        logging.getLogger("marcos.fs").info("quiet")
        logging.getLogger("marcos.fs").warning("loud")
        for handler in logging.getLogger("marcos").handlers:
            handler.flush()

        content = log_path.read_text(encoding="utf-8")
        self.assertNotIn("quiet", content)
        self.assertIn("loud", content)

    def test_reinitializing_replaces_handlers(self) -> None:
        init_logging(Path(self._tmp.name) / "a.log")
        root = init_logging(None)
        self.assertEqual(len(root.handlers), 1)
        self.assertIsInstance(root.handlers[0], logging.NullHandler)
        self.assertFalse(root.propagate)


if __name__ == "__main__":
    unittest.main()

import json
import logging
import os
import sys
import tempfile
import unittest

from app.core.config import LogOptions
from app.core.logger import COMBINED_LOG_FILE, ERROR_LOG_FILE, JsonFormatter, configure_logging, reset_logging


class LoggerTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        reset_logging()
        configure_logging(LogOptions(directory=self.tmp.name))

    def tearDown(self):
        reset_logging()
        self.tmp.cleanup()

    def _read(self, filename):
        with open(os.path.join(self.tmp.name, filename), encoding="utf-8") as f:
            return [json.loads(line) for line in f if line.strip()]

    def test_error_file_only_gets_errors(self):
        log = logging.getLogger("app.test")
        log.info("Server running on port 3000")
        log.error("Disease search error", extra={"error": "timeout", "tier": "name"})

        combined = self._read(COMBINED_LOG_FILE)
        errors = self._read(ERROR_LOG_FILE)

        self.assertEqual([r["message"] for r in combined], ["Server running on port 3000", "Disease search error"])
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0]["level"], "error")
        self.assertEqual(errors[0]["error"], "timeout")
        self.assertEqual(errors[0]["tier"], "name")
        self.assertIn("timestamp", errors[0])

    def test_configure_twice_keeps_one_set_of_handlers(self):
        before = len(logging.getLogger().handlers)
        configure_logging(LogOptions(directory=self.tmp.name))
        self.assertEqual(len(logging.getLogger().handlers), before)


class JsonFormatterTests(unittest.TestCase):
    def test_exception_is_included(self):
        try:
            raise RuntimeError("bad")
        except RuntimeError:
            record = logging.getLogger("x").makeRecord(
                "x", logging.ERROR, __file__, 1, "failed %s", ("twice",), sys.exc_info()
            )

        payload = json.loads(JsonFormatter().format(record))
        self.assertEqual(payload["message"], "failed twice")
        self.assertEqual(payload["logger"], "x")
        self.assertIn("RuntimeError: bad", payload["exc_info"])


if __name__ == "__main__":
    unittest.main()

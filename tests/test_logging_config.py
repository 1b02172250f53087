import logging
import tempfile
import unittest
from logging.handlers import RotatingFileHandler
from pathlib import Path

from conversation_relay.config.logging_config import LOG_FILE_NAME, configure_logging


class TestLoggingConfig(unittest.TestCase):
    def setUp(self):
        self.log_dir = Path(tempfile.mkdtemp(prefix="relay-logging-"))

    def test_configure_logging(self):
        # Test that the function returns a logger
        logger = configure_logging("INFO", self.log_dir)
        self.assertIsInstance(logger, logging.Logger)

        # Test that the logger has the correct name
        self.assertEqual(logger.name, "conversation_relay")

        # Test that the logger has the correct level
        self.assertEqual(logger.level, logging.INFO)

        # Console handler first, with the shared format
        self.assertGreaterEqual(len(logger.handlers), 1)
        handler = logger.handlers[0]
        self.assertIsInstance(handler, logging.StreamHandler)
        formatter = handler.formatter
        self.assertEqual(formatter._fmt, "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

        self.assertFalse(logger.propagate)

    def test_writes_rotating_log_file(self):
        logger = configure_logging("DEBUG", self.log_dir)

        file_handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
        self.assertEqual(len(file_handlers), 1)

        logger.debug("file handler check")
        file_handlers[0].flush()
        content = (self.log_dir / LOG_FILE_NAME).read_text()
        self.assertIn("Logging configured", content)
        self.assertIn("file handler check", content)

    def test_reconfiguring_replaces_handlers(self):
        configure_logging("INFO", self.log_dir)
        logger = configure_logging("WARNING", self.log_dir)

        self.assertEqual(len(logger.handlers), 2)
        self.assertEqual(logger.level, logging.WARNING)

    def test_unknown_level_falls_back_to_info(self):
        logger = configure_logging("chatty", self.log_dir)

        self.assertEqual(logger.level, logging.INFO)

    def tearDown(self):
        logger = logging.getLogger("conversation_relay")
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()


if __name__ == "__main__":
    unittest.main()

import logging
import tempfile
import unittest
from logging.handlers import RotatingFileHandler
from pathlib import Path

from openai_tools.config.logging_config import LOG_FILE_NAME, configure_logging


class TestLoggingConfig(unittest.TestCase):
    def test_configure_logging(self):
        # Test that the function returns a logger
        logger = configure_logging(level="INFO")
        self.assertIsInstance(logger, logging.Logger)

        # Test that the logger has the correct name
        self.assertEqual(logger.name, "openai_tools")

        # Test that the logger has the correct level
        self.assertEqual(logger.level, logging.INFO)

        # Only the console handler without a log directory
        self.assertEqual(len(logger.handlers), 1)
        handler = logger.handlers[0]
        self.assertIsInstance(handler, logging.StreamHandler)
        formatter = handler.formatter
        self.assertEqual(formatter._fmt, "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        self.assertFalse(logger.propagate)

    def test_level_from_argument(self):
        logger = configure_logging(level="debug")
        self.assertEqual(logger.level, logging.DEBUG)

    def test_reconfigure_replaces_handlers(self):
        configure_logging(level="INFO")
        logger = configure_logging(level="INFO")
        self.assertEqual(len(logger.handlers), 1)

    def test_file_handler(self):
        with tempfile.TemporaryDirectory() as tmp:
            logger = configure_logging(level="INFO", log_dir=Path(tmp) / "logs")
            try:
                file_handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
                self.assertEqual(len(file_handlers), 1)
                self.assertTrue((Path(tmp) / "logs" / LOG_FILE_NAME).exists())
            finally:
                for handler in logger.handlers[:]:
                    handler.close()
                    logger.removeHandler(handler)


if __name__ == "__main__":
    unittest.main()

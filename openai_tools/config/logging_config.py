"""
Configure logging for the library.

The library itself only ever calls ``logging.getLogger(LOGGER_NAME)``; nothing is
configured on import. Applications that want the library's log output formatted
and written to the console (and optionally a rotating file) call
``configure_logging()`` once at startup.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from openai_tools.config.constants import LOGGER_NAME

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Log file configuration
LOG_FILE_NAME = "openai_tools.log"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT = 5


def configure_logging(
    level: Optional[str] = None, log_dir: Optional[Union[str, Path]] = None
) -> logging.Logger:
    """
    Configure the library logger with a console handler and an optional file handler.

    Args:
        level: Level name; defaults to the LOG_LEVEL environment variable, then INFO
        log_dir: Directory for a rotating log file; no file handler when omitted

    Returns:
        logging.Logger: The configured logger instance
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    # Remove existing handlers if any
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir is not None:
        try:
            directory = Path(log_dir)
            directory.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                directory / LOG_FILE_NAME,
                maxBytes=MAX_LOG_SIZE,
                backupCount=BACKUP_COUNT,
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Could not set up file logging: {e}")

    # Prevent log propagation to root logger
    logger.propagate = False

    logger.info("Logging configured")
    return logger

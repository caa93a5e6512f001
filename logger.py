"""Logging for Monthwise.

The CLI prints its reports through the logger, so the console handler writes
plain messages to stdout and only prefixes warnings and errors with their
level. Everything also goes to a dated file under the configured log_dir.
"""

import logging
import sys
from datetime import date
from typing import Optional

from config import Config

LOGGER_NAME = "monthwise"

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ConsoleFormatter(logging.Formatter):
    """Bare report lines for INFO and below, 'LEVEL - message' above."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno > logging.INFO:
            return f"{record.levelname} - {message}"
        return message


def resolve_level(name: str) -> int:
    """Turn a configured level name such as 'debug' into a logging level.

    Raises:
        ValueError: If the name is not a standard logging level.
    """
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level '{name}' in [logging] level")
    return level


def log_file_name(day: date) -> str:
    return f"{LOGGER_NAME}-{day.isoformat()}.log"


def setup_logging(config: Config, today: Optional[date] = None) -> logging.Logger:
    """Attach the console and file handlers to the monthwise logger.

    Calling this again replaces the handlers from the previous call.

    Args:
        config: Application configuration containing log settings.
        today: Date used to name the log file; defaults to date.today().

    Returns:
        The configured logger.
    """
    level = resolve_level(config.log_level)
    config.log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(
        config.log_dir / log_file_name(today or date.today())
    )
    file_handler.setFormatter(
        logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(ConsoleFormatter())

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)

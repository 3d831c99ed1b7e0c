"""Logging setup for the spendtrack package."""

import logging
import sys

LOG_FORMAT = "[%(asctime)s] <%(module)s> %(levelname)s:  %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

LOGGER_NAME = "spendtrack"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure the package logger with a console handler.

    Calling it again replaces the previous handler instead of stacking a new one.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid logging level: {level}")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger

"""
Logging setup for Tunestand.

Log records go to stderr so they never interleave with the tables and player
panels printed on stdout.
"""

import logging
import sys
from typing import Optional
from .config import LOGGING_CONFIG

ROOT_LOGGER_NAME = "tunestand"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure the ``tunestand`` logger with a single stderr handler.

    Args:
        level: Level name, any case; unknown names fall back to INFO

    Returns:
        The ``tunestand`` logger
    """
    level_name = (level or LOGGING_CONFIG["LEVEL"]).upper()
    log_level = logging.getLevelName(level_name)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(log_level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOGGING_CONFIG["FORMAT"]))
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger ``tunestand.<name>``, configuring logging on first use."""
    if not logging.getLogger(ROOT_LOGGER_NAME).handlers:
        setup_logging()
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")

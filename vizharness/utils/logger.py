"""Logging configuration."""

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Setup logger with consistent formatting.

    The level falls back to the VIZHARNESS_LOG_LEVEL environment variable,
    then to WARNING so test output stays quiet unless asked otherwise.

    Args:
        name: Logger name (usually __name__)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    level = level or os.environ.get("VIZHARNESS_LOG_LEVEL") or "WARNING"
    logger.setLevel(getattr(logging, level.upper()))

    return logger


def set_level(level: str) -> None:
    """Apply a level to every logger created under the vizharness namespace."""
    resolved = getattr(logging, level.upper())
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith("vizharness") and isinstance(logger, logging.Logger):
            logger.setLevel(resolved)

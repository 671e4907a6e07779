"""Logging setup for the application logger tree."""
from __future__ import annotations

import logging

LOGGER_NAME = "whattimeisit"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(name: str = LOGGER_NAME, level: str | int = "INFO") -> logging.Logger:
    """Configure logging for the application if it is not already configured."""

    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level if isinstance(level, int) else getattr(logging, str(level).upper(), logging.INFO))

    # Records stop at the application logger; the root logger never sees them.
    logger.propagate = False
    return logger

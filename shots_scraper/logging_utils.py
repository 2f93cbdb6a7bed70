"""Logger setup: console output for humans, a null sink for pipeline runs."""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "shots_scraper"

CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str | int = "INFO", pipeline: bool = False) -> logging.Logger:
    """Configure the package logger and return it.

    Console output always goes to stderr so stdout stays free for JSON.
    In pipeline mode every record is dropped.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    if pipeline:
        logger.addHandler(logging.NullHandler())
        logger.propagate = False
        logger.setLevel(logging.CRITICAL + 1)
        return logger

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(console_handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def null_logger(name: str = PACKAGE_LOGGER + ".silent") -> logging.Logger:
    """A logger that discards everything, for injection into the core."""
    logger = logging.getLogger(name)
    if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
        logger.addHandler(logging.NullHandler())
    logger.propagate = False
    logger.disabled = True
    return logger

"""Logging configuration for the rating_lifecycle package."""

import logging
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, Union

PACKAGE_LOGGER = "rating_lifecycle"


def setup_logging(
    level: Union[str, int] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    format_style: str = "detailed",
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Logging level name or number
        log_file: Optional file to also write logs to
        format_style: "simple" or "detailed"

    Returns:
        The configured package logger
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    if format_style == "simple":
        format_string = "%(levelname)s: %(message)s"
    else:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    formatter = logging.Formatter(format_string)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child of the package logger (usually called with __name__)."""
    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


@contextmanager
def log_timing(logger: logging.Logger, operation: str, level: int = logging.INFO):
    """Log start, completion and elapsed time of an operation."""
    start = time.perf_counter()
    logger.log(level, "Starting %s", operation)
    try:
        yield
    except Exception as exc:
        logger.error("Failed %s after %.2fs: %s", operation, time.perf_counter() - start, exc)
        raise
    logger.log(level, "Completed %s in %.2fs", operation, time.perf_counter() - start)

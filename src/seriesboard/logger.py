"""Logging configuration for seriesboard."""

import logging
import sys

# Create logger for seriesboard
logger = logging.getLogger("seriesboard")


def setup_logger(level: int = logging.INFO) -> None:
    """Setup the seriesboard logger with default configuration.

    Args:
        level: Logging level (default: INFO)
    """
    logger.setLevel(level)
    if logger.handlers:
        # Already configured
        for existing in logger.handlers:
            existing.setLevel(level)
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    formatter = logging.Formatter("seriesboard: %(message)s")
    handler.setFormatter(formatter)

    logger.addHandler(handler)
    logger.propagate = False


def use_handler(handler: logging.Handler) -> None:
    """Route seriesboard log records to a single handler.

    The TUI uses this to keep log output off the terminal it draws on.

    Args:
        handler: Handler replacing the current ones
    """
    handler.setLevel(logger.level)
    handler.setFormatter(logging.Formatter("seriesboard: %(message)s"))
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)


# Initialize logger on import
setup_logger()

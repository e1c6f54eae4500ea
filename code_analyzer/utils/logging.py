"""Logging helpers for the code analyzer.

Every module logs through the ``code_analyzer`` logger. Reports are written
to stdout, so log records go to stderr unless another stream is given.
"""

import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = "code_analyzer"
DEFAULT_FORMAT = "[%(asctime)s] %(levelname)s - %(message)s"

_handler: Optional[logging.Handler] = None


def setup_logging(
    level: int = logging.INFO,
    format_str: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Attach a single stream handler to the package logger.

    Calling it again replaces the handler installed by the previous call, so
    repeated CLI runs in one process do not duplicate output.

    Args:
        level: Logging level (default: INFO)
        format_str: Custom format string
        stream: Destination stream (default: stderr)

    Returns:
        Configured package logger
    """
    global _handler

    logger = logging.getLogger(LOGGER_NAME)
    if _handler is not None:
        logger.removeHandler(_handler)

    _handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    _handler.setFormatter(logging.Formatter(format_str or DEFAULT_FORMAT))
    logger.addHandler(_handler)
    logger.setLevel(level)
    logger.propagate = False

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get the package logger, or a child of it when name is given."""
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")

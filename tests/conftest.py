"""Shared pytest fixtures."""

import logging

import pytest

from code_analyzer.tools import reset_shared_rate_limiter


@pytest.fixture(autouse=True)
def fresh_shared_rate_limiter():
    """Give every test its own process-wide limiter."""
    reset_shared_rate_limiter()
    yield
    reset_shared_rate_limiter()


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo any setup_logging call made during the test."""
    logger = logging.getLogger("code_analyzer")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate

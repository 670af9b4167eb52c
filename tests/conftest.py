"""
Pytest configuration for rating lifecycle tests.
"""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging() so caplog sees package records in every test."""
    yield
    logger = logging.getLogger("rating_lifecycle")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True

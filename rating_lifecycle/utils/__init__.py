"""Utility functions for rating lifecycle."""

from .logging import get_logger, log_timing, setup_logging

__all__ = ["get_logger", "log_timing", "setup_logging"]

"""Cycle observers for recording, logging and persisting outcomes."""

from .observers import LoggingObserver, OutcomeRecorder, ParquetOutcomeWriter

__all__ = ["LoggingObserver", "OutcomeRecorder", "ParquetOutcomeWriter"]

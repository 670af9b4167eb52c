"""Rating cycle engine, lifecycle observers and multi-day runner."""

from .engine import CycleSnapshot, RatingCycle, UpdateFunction
from .errors import CycleConfigurationError, MissingParticipantError, RatingCycleError
from .observer import CycleObserver
from .runner import run_by_day

__all__ = [
    "RatingCycle",
    "CycleSnapshot",
    "UpdateFunction",
    "CycleObserver",
    "RatingCycleError",
    "CycleConfigurationError",
    "MissingParticipantError",
    "run_by_day",
]

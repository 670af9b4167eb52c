"""
Rating Lifecycle - ordered rating updates over head-to-head results.

A RatingCycle applies a rating update function to every result in order,
threading each participant's new rating into the next result they appear
in. Four hooks (before/after each cycle and each result) let callers load
context, log or persist outcomes without touching the engine.

Quick Start:
    from rating_lifecycle import RatingCycle, Elo, ResultRecord, Participant, RatingEntry

    ratings = {
        1: RatingEntry(Participant(1, "Hakuho", "Y1e"), 1500.0),
        2: RatingEntry(Participant(2, "Kakuryu", "Y1w"), 1400.0),
    }
    results = [ResultRecord(cycle_id=201901, day=1, sequence=1,
                            east_id=1, west_id=2, east_win=True, west_win=False)]

    cycle = RatingCycle(201901, 1, ratings, results)
    cycle.calculation(Elo(k_factor=32))
    cycle.after_result(lambda outcome: print(outcome.to_dict()))
    outcomes = cycle.run()

    # Many days from a parquet file, with ratings carried between days
    dataset = ResultDataset.from_parquet("results.parquet")
    outcomes = run_by_day(ratings, dataset, Elo(), observers=[LoggingObserver()])
    print(CycleResults(ratings, outcomes).top(10))

Command-line interface:
    python -m rating_lifecycle run results.parquet --ratings participants.parquet --top 20
    python -m rating_lifecycle movers results.parquet --ratings participants.parquet
"""

from .data import ResultDataset, Participant, ResultRecord, ResultOutcome, SideOutcome
from .base import (
    RatingCalculator,
    RatingEntry,
    RatingMap,
    clone_ratings,
    ratings_from_dataframe,
    ratings_to_dataframe,
)
from .cycle import (
    RatingCycle,
    CycleSnapshot,
    CycleObserver,
    RatingCycleError,
    CycleConfigurationError,
    MissingParticipantError,
    run_by_day,
)
from .systems import Elo, EloConfig
from .results import CycleResults, outcomes_to_dataframe
from .hooks import LoggingObserver, OutcomeRecorder, ParquetOutcomeWriter
from .utils import get_logger, setup_logging

__version__ = "0.1.0"

__all__ = [
    # Data
    "ResultDataset",
    "Participant",
    "ResultRecord",
    "ResultOutcome",
    "SideOutcome",
    # Base
    "RatingCalculator",
    "RatingEntry",
    "RatingMap",
    "clone_ratings",
    "ratings_from_dataframe",
    "ratings_to_dataframe",
    # Cycle
    "RatingCycle",
    "CycleSnapshot",
    "CycleObserver",
    "RatingCycleError",
    "CycleConfigurationError",
    "MissingParticipantError",
    "run_by_day",
    # Systems
    "Elo",
    "EloConfig",
    # Results
    "CycleResults",
    "outcomes_to_dataframe",
    # Hooks
    "LoggingObserver",
    "OutcomeRecorder",
    "ParquetOutcomeWriter",
    # Utils
    "get_logger",
    "setup_logging",
]

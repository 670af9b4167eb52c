"""Ready-made cycle observers for recording, logging and persisting outcomes."""

import logging
from pathlib import Path
from typing import List, Union

import polars as pl

from ..cycle.engine import CycleSnapshot, RatingCycle
from ..cycle.observer import CycleObserver
from ..data.types import ResultOutcome, ResultRecord
from ..results.cycle_results import outcomes_to_dataframe
from ..utils.logging import get_logger

logger = get_logger(__name__)


class OutcomeRecorder(CycleObserver):
    """Collects every outcome and snapshot it sees, across any number of cycles."""

    def __init__(self):
        self.outcomes: List[ResultOutcome] = []
        self.snapshots: List[CycleSnapshot] = []

    def after_result(self, outcome: ResultOutcome) -> None:
        self.outcomes.append(outcome)

    def after_cycle(self, snapshot: CycleSnapshot) -> None:
        self.snapshots.append(snapshot)

    @property
    def num_results(self) -> int:
        return len(self.outcomes)

    def to_dataframe(self) -> pl.DataFrame:
        return outcomes_to_dataframe(self.outcomes)


class LoggingObserver(CycleObserver):
    """
    Logs cycle progress.

    Each result is logged at the given level; results where both or
    neither side won are flagged with a warning, since the engine
    processes them without complaint.
    """

    def __init__(self, level: int = logging.DEBUG):
        self.level = level

    def before_cycle(self, cycle: RatingCycle) -> None:
        logger.info(
            "Cycle %s day %s: %d results for %d participants",
            cycle.cycle_id, cycle.day, len(cycle.results), len(cycle.ratings),
        )

    def before_result(self, record: ResultRecord, index: int) -> None:
        if not record.is_decisive:
            logger.warning(
                "Result %d (sequence %d) is not decisive: east_win=%s west_win=%s",
                index, record.sequence, record.east_win, record.west_win,
            )

    def after_result(self, outcome: ResultOutcome) -> None:
        logger.log(
            self.level,
            "#%d %s %.1f -> %.1f (%+.2f) vs %s %.1f -> %.1f (%+.2f)",
            outcome.sequence,
            outcome.east.name or outcome.east.participant_id,
            outcome.east.score_pre, outcome.east.score_post, outcome.east.change,
            outcome.west.name or outcome.west.participant_id,
            outcome.west.score_pre, outcome.west.score_post, outcome.west.change,
        )

    def after_cycle(self, snapshot: CycleSnapshot) -> None:
        logger.info(
            "Cycle %s day %s finished: %d outcomes",
            snapshot.cycle_id, snapshot.day, snapshot.num_results,
        )


class ParquetOutcomeWriter(CycleObserver):
    """
    Persists outcomes to parquet at the end of each cycle.

    Outcomes are buffered per result and written after the cycle as one
    part file per (cycle_id, day) under ``directory``, so each cycle costs
    only its own rows. Nothing is written for a cycle that aborts. Use
    ``read()`` to load every part back as a single frame.

    Args:
        directory: Output directory, created if needed
    """

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)
        self._buffer: List[ResultOutcome] = []
        self._rows_written = 0
        self._parts: List[Path] = []

    def before_cycle(self, cycle: RatingCycle) -> None:
        self._buffer = []

    def after_result(self, outcome: ResultOutcome) -> None:
        self._buffer.append(outcome)

    def after_cycle(self, snapshot: CycleSnapshot) -> None:
        rows = outcomes_to_dataframe(self._buffer)
        self._buffer = []

        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / f"cycle-{snapshot.cycle_id}-day-{snapshot.day:03d}.parquet"
        rows.write_parquet(path)

        if path not in self._parts:
            self._parts.append(path)
        self._rows_written += rows.height
        logger.debug("Wrote %d outcome rows to %s", rows.height, path)

    @property
    def rows_written(self) -> int:
        return self._rows_written

    @property
    def parts(self) -> List[Path]:
        """Part files written so far, in write order."""
        return list(self._parts)

    def read(self) -> pl.DataFrame:
        """Load every part file in the directory as one frame."""
        files = sorted(self.directory.glob("*.parquet"))
        if not files:
            return outcomes_to_dataframe([])
        return pl.concat(
            [pl.read_parquet(f) for f in files], how="vertical_relaxed"
        ).sort(["cycle_id", "day", "sequence"], maintain_order=True)

"""
Rating cycle engine.

A RatingCycle threads ratings through an ordered list of head-to-head
results. For every result it computes both sides' new ratings from their
pre-result values, records an outcome and commits the new ratings into the
shared rating map. Four optional hooks let callers observe or extend the
cycle without touching the engine:

    before_cycle(cycle)          once, before the first result
    before_result(record, index) per result, with a copy of the record
    after_result(outcome)        per result, before ratings are committed
    after_cycle(snapshot)        once, after the last result

Example:
    >>> cycle = RatingCycle(cycle_id=202401, day=1, ratings=ratings, results=results)
    >>> cycle.calculation(Elo(k_factor=32))
    >>> cycle.after_result(lambda outcome: store.save(outcome.to_dict()))
    >>> outcomes = cycle.run()
"""

import copy
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from ..base.rating_entry import RatingEntry
from ..data.types import ResultOutcome, ResultRecord, SideOutcome
from ..utils.logging import get_logger
from .errors import CycleConfigurationError, MissingParticipantError
from .observer import CycleObserver, overridden_hooks

logger = get_logger(__name__)

UpdateFunction = Callable[[float, float, bool], float]


@dataclass(frozen=True)
class CycleSnapshot:
    """Read-only view of a cycle after its last result."""

    cycle_id: int
    day: int
    ratings: Mapping[int, RatingEntry]
    outcomes: Tuple[ResultOutcome, ...]

    @property
    def num_results(self) -> int:
        return len(self.outcomes)


def _chain(first: Callable, second: Callable) -> Callable:
    def chained(*args):
        first(*args)
        second(*args)
    return chained


class RatingCycle:
    """
    Single pass of rating updates over an ordered list of results.

    A cycle is single-use: running it twice reprocesses the same results
    against ratings that already include them.

    Args:
        cycle_id: Identifier of the cycle (e.g. a tournament)
        day: Day or stage within the cycle
        ratings: Mapping of participant id -> RatingEntry, updated in place
        results: Results to process, in order
    """

    def __init__(
        self,
        cycle_id: int,
        day: int,
        ratings: Dict[int, RatingEntry],
        results: Sequence[ResultRecord],
    ):
        self.cycle_id = cycle_id
        self.day = day
        self.ratings = ratings
        self.results = list(results)
        self._outcomes: List[ResultOutcome] = []
        self._runs = 0

        self._before_cycle: Optional[Callable[["RatingCycle"], None]] = None
        self._before_result: Optional[Callable[[ResultRecord, int], None]] = None
        self._after_result: Optional[Callable[[ResultOutcome], None]] = None
        self._after_cycle: Optional[Callable[[CycleSnapshot], None]] = None
        self._calculate: Optional[UpdateFunction] = None

    # =========================================================================
    # Hook registration
    # =========================================================================

    def before_cycle(self, fn: Callable[["RatingCycle"], None]) -> "RatingCycle":
        """Set the function run once before any result is processed."""
        self._before_cycle = fn
        return self

    def before_result(self, fn: Callable[[ResultRecord, int], None]) -> "RatingCycle":
        """Set the function run before each result. It receives a copy of the record."""
        self._before_result = fn
        return self

    def after_result(self, fn: Callable[[ResultOutcome], None]) -> "RatingCycle":
        """Set the function run after each result, before ratings are committed."""
        self._after_result = fn
        return self

    def after_cycle(self, fn: Callable[[CycleSnapshot], None]) -> "RatingCycle":
        """Set the function run once after all results. A good time to save data."""
        self._after_cycle = fn
        return self

    def calculation(self, fn: UpdateFunction) -> "RatingCycle":
        """
        Set the rating update function.

        fn(subject, opponent, subject_won) returns the subject's new rating.
        """
        self._calculate = fn
        return self

    def attach(self, observer: CycleObserver) -> "RatingCycle":
        """
        Register every hook the observer overrides.

        Hooks already set are kept and run before the observer's.
        """
        for name, method in overridden_hooks(observer).items():
            slot = f"_{name}"
            existing = getattr(self, slot)
            setattr(self, slot, method if existing is None else _chain(existing, method))
        return self

    # =========================================================================
    # State
    # =========================================================================

    @property
    def outcomes(self) -> Tuple[ResultOutcome, ...]:
        """Outcomes recorded so far, in processing order."""
        return tuple(self._outcomes)

    def snapshot(self) -> CycleSnapshot:
        return CycleSnapshot(
            cycle_id=self.cycle_id,
            day=self.day,
            ratings=MappingProxyType(dict(self.ratings)),
            outcomes=tuple(self._outcomes),
        )

    def validate(self) -> None:
        """Raise CycleConfigurationError if the cycle cannot run."""
        if self._calculate is None:
            raise CycleConfigurationError("No calculate function set")
        if len(self.ratings) == 0:
            raise CycleConfigurationError("No participant ratings provided")
        if len(self.results) == 0:
            raise CycleConfigurationError("No result list provided")

    # =========================================================================
    # Run
    # =========================================================================

    def run(self) -> Tuple[ResultOutcome, ...]:
        """
        Process every result in order.

        Returns:
            The outcome log, one outcome per result

        Raises:
            CycleConfigurationError: before any hook runs, if the cycle is not ready
            MissingParticipantError: when a result references an unknown id.
                Ratings and outcomes from earlier results are kept.
        """
        self.validate()

        if self._runs:
            logger.warning(
                "Cycle %s day %s has already run; results will be applied again",
                self.cycle_id, self.day,
            )
        self._runs += 1

        logger.debug(
            "Starting cycle %s day %s: %d results, %d participants",
            self.cycle_id, self.day, len(self.results), len(self.ratings),
        )

        if self._before_cycle is not None:
            self._before_cycle(self)

        for index, record in enumerate(self.results):
            self._process(record, index)

        if self._after_cycle is not None:
            self._after_cycle(self.snapshot())

        logger.debug("Finished cycle %s day %s: %d outcomes", self.cycle_id, self.day, len(self._outcomes))
        return tuple(self._outcomes)

    def _process(self, record: ResultRecord, index: int) -> None:
        # Read everything needed from the record before the hook sees a copy
        east_id = record.east_id
        west_id = record.west_id
        east_win = record.east_win
        west_win = record.west_win

        if self._before_result is not None:
            self._before_result(copy.deepcopy(record), index)

        east = self.ratings.get(east_id)
        if east is None:
            raise MissingParticipantError(east_id, index)
        west = self.ratings.get(west_id)
        if west is None:
            raise MissingParticipantError(west_id, index)

        # Both sides are computed from pre-result ratings
        east_new = self._calculate(east.rating, west.rating, east_win)
        west_new = self._calculate(west.rating, east.rating, west_win)

        outcome = ResultOutcome(
            cycle_id=record.cycle_id,
            day=record.day,
            sequence=record.sequence,
            east=_side_outcome(east, east_new),
            west=_side_outcome(west, west_new),
        )

        if self._after_result is not None:
            self._after_result(outcome)

        self.ratings[east_id] = east.with_rating(east_new)
        self.ratings[west_id] = west.with_rating(west_new)

        self._outcomes.append(outcome)

    def __repr__(self) -> str:
        status = "run" if self._runs else "not run"
        return (
            f"RatingCycle(cycle_id={self.cycle_id}, day={self.day}, "
            f"participants={len(self.ratings)}, results={len(self.results)}, {status})"
        )


def _side_outcome(entry: RatingEntry, new_rating: float) -> SideOutcome:
    return SideOutcome(
        participant_id=entry.id,
        name=entry.name,
        rank=entry.rank,
        score_pre=entry.rating,
        score_post=float(new_rating),
        change=float(new_rating) - entry.rating,
    )

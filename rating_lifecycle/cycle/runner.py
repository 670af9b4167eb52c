"""Run one rating cycle per (cycle, day) over a ResultDataset."""

from typing import Dict, Iterable, List, Optional

from ..base.rating_entry import RatingEntry
from ..data import ResultDataset, ResultOutcome
from ..utils.logging import get_logger
from .engine import RatingCycle, UpdateFunction
from .errors import CycleConfigurationError
from .observer import CycleObserver

logger = get_logger(__name__)


def run_by_day(
    ratings: Dict[int, RatingEntry],
    dataset: ResultDataset,
    calculator: UpdateFunction,
    observers: Iterable[CycleObserver] = (),
    cycle_id: Optional[int] = None,
) -> List[ResultOutcome]:
    """
    Run a RatingCycle for each (cycle_id, day) group of a dataset, in
    processing order.

    Every cycle shares the same rating map, so ratings carry forward from
    one day to the next and from one cycle to the next. The first error
    aborts the remaining groups; ratings committed before it are kept.

    Args:
        ratings: Mapping of participant id -> RatingEntry (updated in place)
        dataset: Results to process
        calculator: Rating update function
        observers: Observers attached to every cycle
        cycle_id: Identifier passed to every cycle. Defaults to the
            CycleId of each group.

    Returns:
        Outcomes from every group, in processing order

    Raises:
        CycleConfigurationError: if the dataset has no results
        MissingParticipantError: if a result references an unknown id
    """
    if dataset.num_results == 0:
        raise CycleConfigurationError("No result list provided")

    observers = list(observers)
    outcomes: List[ResultOutcome] = []

    for group_cycle_id, day, results in dataset.iter_days():
        cycle = RatingCycle(
            cycle_id=cycle_id if cycle_id is not None else group_cycle_id,
            day=day,
            ratings=ratings,
            results=results,
        )
        cycle.calculation(calculator)
        for observer in observers:
            cycle.attach(observer)

        outcomes.extend(cycle.run())

    logger.info("Processed %d results over %d cycle days", len(outcomes), dataset.num_days)
    return outcomes

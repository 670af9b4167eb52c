"""Results of rating cycles."""

from .cycle_results import CycleResults, outcomes_to_dataframe

__all__ = ["CycleResults", "outcomes_to_dataframe"]

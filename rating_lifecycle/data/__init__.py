"""Data loading and types for rating cycles."""

from .dataset import ResultDataset
from .types import Participant, ResultOutcome, ResultRecord, SideOutcome

__all__ = ["ResultDataset", "Participant", "ResultRecord", "ResultOutcome", "SideOutcome"]

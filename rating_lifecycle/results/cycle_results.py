"""
Queryable results of one or more rating cycles.

Wraps the final rating map and the outcome log so they can be ranked,
exported and inspected without re-running anything.
"""

from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Union

import numpy as np
import polars as pl

from ..base.rating_entry import RatingEntry, ratings_to_dataframe
from ..data.types import ResultOutcome

OUTCOME_SCHEMA = {
    "cycle_id": pl.Int64,
    "day": pl.Int64,
    "sequence": pl.Int64,
    "side": pl.Utf8,
    "participant_id": pl.Int64,
    "name": pl.Utf8,
    "rank": pl.Utf8,
    "score_pre": pl.Float64,
    "score_post": pl.Float64,
    "change": pl.Float64,
}


def outcomes_to_dataframe(outcomes: Iterable[ResultOutcome]) -> pl.DataFrame:
    """Flatten outcomes into one row per participant per result."""
    rows = [row for outcome in outcomes for row in outcome.to_rows()]
    return pl.DataFrame(rows, schema=OUTCOME_SCHEMA)


def _compute_ranks(ratings: np.ndarray) -> np.ndarray:
    """ranks[i] = rank of entry i (1 = highest rating). Ties keep input order."""
    n = len(ratings)
    sorted_indices = np.argsort(-ratings, kind="stable")
    ranks = np.empty(n, dtype=np.int64)
    ranks[sorted_indices] = np.arange(1, n + 1)
    return ranks


class CycleResults:
    """
    Final ratings and outcome log of a cycle (or several chained cycles).

    Example:
        >>> cycle.after_cycle(lambda snap: print(CycleResults.from_snapshot(snap).top(5)))
        >>> results = CycleResults(ratings, outcomes)
        >>> results.movers(10)
    """

    def __init__(
        self,
        ratings: Mapping[int, RatingEntry],
        outcomes: Iterable[ResultOutcome] = (),
    ):
        self.ratings = dict(ratings)
        self.outcomes: List[ResultOutcome] = list(outcomes)

        self._ids = np.array(sorted(self.ratings), dtype=np.int64)
        self._values = np.array([self.ratings[pid].rating for pid in self._ids], dtype=np.float64)
        self._ranks: Optional[np.ndarray] = None

    @classmethod
    def from_snapshot(cls, snapshot) -> "CycleResults":
        """Build from a CycleSnapshot."""
        return cls(snapshot.ratings, snapshot.outcomes)

    @property
    def num_participants(self) -> int:
        return len(self._ids)

    @property
    def num_results(self) -> int:
        return len(self.outcomes)

    @property
    def ranks(self) -> np.ndarray:
        """Lazily computed ranks aligned with sorted participant ids."""
        if self._ranks is None:
            self._ranks = _compute_ranks(self._values)
        return self._ranks

    def get_rating(self, participant_id: int) -> float:
        if participant_id not in self.ratings:
            raise KeyError(f"Unknown participant {participant_id}")
        return self.ratings[participant_id].rating

    def rank(self, participant_id: int) -> int:
        """Rank of a participant (1 = highest rated)."""
        if participant_id not in self.ratings:
            raise KeyError(f"Unknown participant {participant_id}")
        idx = int(np.searchsorted(self._ids, participant_id))
        return int(self.ranks[idx])

    # =========================================================================
    # Top/Bottom
    # =========================================================================

    def to_dataframe(self) -> pl.DataFrame:
        """Final ratings with ranks, ordered by participant id."""
        return ratings_to_dataframe(self.ratings).with_columns(
            pl.Series("position", self.ranks, dtype=pl.Int64)
        )

    def top(self, n: int = 10) -> pl.DataFrame:
        """Top N participants by rating."""
        return self.to_dataframe().sort("position").head(n)

    def bottom(self, n: int = 10) -> pl.DataFrame:
        """Bottom N participants by rating."""
        return self.to_dataframe().sort("position", descending=True).head(n)

    # =========================================================================
    # Outcomes
    # =========================================================================

    def outcomes_to_dataframe(self) -> pl.DataFrame:
        return outcomes_to_dataframe(self.outcomes)

    def history(self, participant_id: int) -> pl.DataFrame:
        """Every outcome row for one participant, in processing order."""
        return self.outcomes_to_dataframe().filter(pl.col("participant_id") == participant_id)

    def movers(self, n: int = 10) -> pl.DataFrame:
        """
        Participants with the largest absolute net change over the outcomes.

        Returns DataFrame with columns: participant_id, name, results,
        first_pre, last_post, net_change
        """
        df = self.outcomes_to_dataframe()
        if df.height == 0:
            return pl.DataFrame(schema={
                "participant_id": pl.Int64,
                "name": pl.Utf8,
                "results": pl.UInt32,
                "first_pre": pl.Float64,
                "last_post": pl.Float64,
                "net_change": pl.Float64,
            })

        summary = (
            df.with_row_index("order")
            .group_by("participant_id", maintain_order=True)
            .agg(
                pl.col("name").first(),
                pl.len().alias("results"),
                pl.col("score_pre").sort_by("order").first().alias("first_pre"),
                pl.col("score_post").sort_by("order").last().alias("last_post"),
            )
            .with_columns((pl.col("last_post") - pl.col("first_pre")).alias("net_change"))
        )
        return (
            summary.sort(pl.col("net_change").abs(), descending=True, maintain_order=True)
            .head(n)
        )

    # =========================================================================
    # Export
    # =========================================================================

    def save(self, path: Union[str, Path]) -> None:
        """Save final ratings to a parquet file."""
        self.to_dataframe().write_parquet(path)

    def save_outcomes(self, path: Union[str, Path]) -> None:
        """Save the flattened outcome log to a parquet file."""
        self.outcomes_to_dataframe().write_parquet(path)

    def __repr__(self) -> str:
        return f"CycleResults(participants={self.num_participants}, results={self.num_results})"

"""Dataset class for loading head-to-head results.

Uses Polars for sorting and grouping results by cycle and day.
"""

from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

import numpy as np
import polars as pl

from .types import ResultRecord

REQUIRED_COLUMNS = {"CycleId", "Day", "Sequence", "EastId", "WestId", "EastWin", "WestWin"}


class ResultDataset:
    """
    Container for result data loaded from parquet files or DataFrames.

    Results are sorted by (CycleId, Day, Sequence) on load so that iteration
    follows the order in which bouts were fought, one cycle after another.
    Boundaries of each (cycle, day) group are pre-computed, so grouping is
    just slicing.

    Expected columns: CycleId, Day, Sequence, EastId, WestId, EastWin, WestWin
    """

    def __init__(self, df=None):
        """
        Initialize dataset.

        Args:
            df: DataFrame with the result columns (pandas or polars)
        """
        self._df: Optional[pl.DataFrame] = None
        self._cycle_indices: Optional[np.ndarray] = None
        self._day_indices: Optional[np.ndarray] = None
        self._day_offsets: Optional[np.ndarray] = None

        if df is not None:
            self._load_dataframe(df)

    def _load_dataframe(self, df) -> None:
        """Validate, sort and index a DataFrame."""
        if not isinstance(df, pl.DataFrame):
            # Assume pandas DataFrame
            df = pl.from_pandas(df)

        missing = REQUIRED_COLUMNS - set(df.columns)
        if missing:
            raise ValueError(f"Missing required columns: {sorted(missing)}")

        df = df.select(
            pl.col("CycleId").cast(pl.Int64),
            pl.col("Day").cast(pl.Int64),
            pl.col("Sequence").cast(pl.Int64),
            pl.col("EastId").cast(pl.Int64),
            pl.col("WestId").cast(pl.Int64),
            pl.col("EastWin").cast(pl.Boolean),
            pl.col("WestWin").cast(pl.Boolean),
        ).sort(["CycleId", "Day", "Sequence"], maintain_order=True)

        day_groups = df.group_by(["CycleId", "Day"], maintain_order=True).agg(pl.len().alias("count"))
        self._cycle_indices = day_groups["CycleId"].to_numpy().astype(np.int64)
        self._day_indices = day_groups["Day"].to_numpy().astype(np.int64)
        counts = day_groups["count"].to_numpy()

        # Offsets: start index of each (cycle, day) group, plus the total at the end
        self._day_offsets = np.zeros(len(counts) + 1, dtype=np.int64)
        np.cumsum(counts, out=self._day_offsets[1:])

        self._df = df

    @classmethod
    def from_parquet(cls, path: Union[str, Path]) -> "ResultDataset":
        """Load dataset from a parquet file."""
        return cls(df=pl.read_parquet(path))

    @classmethod
    def from_dataframe(cls, df) -> "ResultDataset":
        """Create dataset from a DataFrame (pandas or polars)."""
        return cls(df=df)

    @classmethod
    def from_records(cls, records: List[ResultRecord]) -> "ResultDataset":
        """Create dataset from ResultRecord objects."""
        return cls(df=pl.DataFrame(
            {
                "CycleId": [r.cycle_id for r in records],
                "Day": [r.day for r in records],
                "Sequence": [r.sequence for r in records],
                "EastId": [r.east_id for r in records],
                "WestId": [r.west_id for r in records],
                "EastWin": [r.east_win for r in records],
                "WestWin": [r.west_win for r in records],
            },
            schema={
                "CycleId": pl.Int64,
                "Day": pl.Int64,
                "Sequence": pl.Int64,
                "EastId": pl.Int64,
                "WestId": pl.Int64,
                "EastWin": pl.Boolean,
                "WestWin": pl.Boolean,
            },
        ))

    @property
    def num_results(self) -> int:
        """Total number of results."""
        if self._df is None:
            return 0
        return self._df.height

    @property
    def num_days(self) -> int:
        """Number of (cycle, day) groups."""
        if self._day_indices is None:
            return 0
        return len(self._day_indices)

    @property
    def cycle_days(self) -> List[Tuple[int, int]]:
        """(cycle_id, day) groups in processing order."""
        if self._day_indices is None:
            return []
        return list(zip(self._cycle_indices.tolist(), self._day_indices.tolist()))

    @property
    def days(self) -> List[int]:
        """Unique days in sorted order, across all cycles."""
        if self._day_indices is None:
            return []
        return np.unique(self._day_indices).tolist()

    @property
    def cycle_ids(self) -> List[int]:
        if self._cycle_indices is None:
            return []
        return np.unique(self._cycle_indices).tolist()

    @property
    def participant_ids(self) -> List[int]:
        """Sorted ids of every participant referenced by a result."""
        if self._df is None:
            return []
        ids = pl.concat([self._df["EastId"], self._df["WestId"]]).unique().sort()
        return ids.to_list()

    def _slice_records(self, start: int, end: int) -> List[ResultRecord]:
        rows = self._df.slice(start, end - start).iter_rows()
        return [
            ResultRecord(
                cycle_id=cycle_id,
                day=day,
                sequence=sequence,
                east_id=east_id,
                west_id=west_id,
                east_win=east_win,
                west_win=west_win,
            )
            for cycle_id, day, sequence, east_id, west_id, east_win, west_win in rows
        ]

    def to_records(self) -> List[ResultRecord]:
        """All results as ResultRecord objects, in processing order."""
        if self._df is None:
            return []
        return self._slice_records(0, self._df.height)

    def get_day(self, day: int, cycle_id: Optional[int] = None) -> List[ResultRecord]:
        """
        Get all results for a specific day.

        Args:
            day: Day to fetch
            cycle_id: Cycle the day belongs to. May be omitted when only one
                cycle has that day.
        """
        if self._day_indices is None:
            raise ValueError("No data loaded")

        matches = np.flatnonzero(self._day_indices == day)
        if cycle_id is not None:
            matches = matches[self._cycle_indices[matches] == cycle_id]

        if len(matches) == 0:
            where = f" of cycle {cycle_id}" if cycle_id is not None else ""
            raise ValueError(f"No results found for day {day}{where}")
        if len(matches) > 1:
            raise ValueError(
                f"Day {day} appears in cycles {self._cycle_indices[matches].tolist()}; pass cycle_id"
            )

        idx = int(matches[0])
        return self._slice_records(int(self._day_offsets[idx]), int(self._day_offsets[idx + 1]))

    def iter_days(self) -> Iterator[Tuple[int, int, List[ResultRecord]]]:
        """Iterate over (cycle_id, day, results) in processing order."""
        if self._day_indices is None:
            return

        for i, (cycle_id, day) in enumerate(zip(self._cycle_indices, self._day_indices)):
            start = int(self._day_offsets[i])
            end = int(self._day_offsets[i + 1])
            yield int(cycle_id), int(day), self._slice_records(start, end)

    def to_dataframe(self) -> pl.DataFrame:
        if self._df is None:
            raise ValueError("No data loaded")
        return self._df.clone()

    def __len__(self) -> int:
        return self.num_results

    def __repr__(self) -> str:
        if self._df is None:
            return "ResultDataset(empty)"
        return (
            f"ResultDataset(results={self.num_results:,}, "
            f"participants={len(self.participant_ids):,}, cycles={len(self.cycle_ids):,}, "
            f"days={self.num_days:,})"
        )

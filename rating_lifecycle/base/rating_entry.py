"""Participant rating entries and helpers for rating maps."""

from dataclasses import dataclass
from typing import Dict, Mapping, Optional

import polars as pl

from ..data.types import Participant


@dataclass(frozen=True)
class RatingEntry:
    """
    A participant and their current rating.

    Entries are immutable; the cycle engine commits a new rating by
    replacing the entry in the rating map, so anything holding an old
    entry keeps seeing the old rating.
    """

    participant: Participant
    rating: float

    def __post_init__(self):
        """Ratings are always stored as double precision."""
        object.__setattr__(self, "rating", float(self.rating))

    @property
    def id(self) -> int:
        return self.participant.id

    @property
    def name(self) -> str:
        return self.participant.name

    @property
    def rank(self) -> str:
        return self.participant.rank

    def with_rating(self, rating: float) -> "RatingEntry":
        return RatingEntry(participant=self.participant, rating=rating)


RatingMap = Dict[int, RatingEntry]


def ratings_from_dataframe(df, initial_rating: Optional[float] = 1500.0) -> RatingMap:
    """
    Build a rating map from a DataFrame of participants.

    Args:
        df: DataFrame (pandas or polars) with columns id, name and optionally
            rank and rating
        initial_rating: Rating for rows without one. If None, a rating
            column is required.

    Returns:
        Mapping of participant id -> RatingEntry
    """
    if not isinstance(df, pl.DataFrame):
        df = pl.from_pandas(df)

    missing = {"id", "name"} - set(df.columns)
    if missing:
        raise ValueError(f"Missing required columns: {sorted(missing)}")

    if "rating" not in df.columns:
        if initial_rating is None:
            raise ValueError("No rating column and no initial_rating given")
        df = df.with_columns(pl.lit(initial_rating, dtype=pl.Float64).alias("rating"))
    elif initial_rating is not None:
        df = df.with_columns(pl.col("rating").cast(pl.Float64).fill_null(initial_rating))
    elif df["rating"].null_count() > 0:
        raise ValueError("Null ratings found and no initial_rating given")

    if "rank" not in df.columns:
        df = df.with_columns(pl.lit("").alias("rank"))

    ratings: RatingMap = {}
    for row in df.select("id", "name", "rank", "rating").iter_rows(named=True):
        participant = Participant(
            id=int(row["id"]),
            name=row["name"] or "",
            rank=row["rank"] or "",
        )
        ratings[participant.id] = RatingEntry(participant=participant, rating=row["rating"])
    return ratings


def ratings_to_dataframe(ratings: Mapping[int, RatingEntry]) -> pl.DataFrame:
    """Convert a rating map to a Polars DataFrame, ordered by participant id."""
    entries = [ratings[pid] for pid in sorted(ratings)]
    return pl.DataFrame(
        {
            "id": [e.id for e in entries],
            "name": [e.name for e in entries],
            "rank": [e.rank for e in entries],
            "rating": [e.rating for e in entries],
        },
        schema={"id": pl.Int64, "name": pl.Utf8, "rank": pl.Utf8, "rating": pl.Float64},
    )


def clone_ratings(ratings: Mapping[int, RatingEntry]) -> RatingMap:
    """Shallow copy of a rating map (entries are immutable)."""
    return dict(ratings)

"""Base classes for rating cycles."""

from .rating_calculator import RatingCalculator
from .rating_entry import (
    RatingEntry,
    RatingMap,
    clone_ratings,
    ratings_from_dataframe,
    ratings_to_dataframe,
)

__all__ = [
    "RatingCalculator",
    "RatingEntry",
    "RatingMap",
    "clone_ratings",
    "ratings_from_dataframe",
    "ratings_to_dataframe",
]

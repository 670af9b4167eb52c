"""
Fixed-K Elo rating update function.

The calculator is a pure scalar function of (subject, opponent, won), so it
can be plugged into a RatingCycle. The arithmetic runs in Numba.
"""

from dataclasses import dataclass
from typing import List, Union

import numpy as np

from ...base import RatingCalculator
from ._numba_core import expected_score, expected_scores_batch, update_rating


@dataclass
class EloConfig:
    """Configuration for the Elo calculator."""

    initial_rating: float = 1500.0
    k_factor: float = 32.0
    scale: float = 400.0  # Rating difference for 10x expected score


class Elo(RatingCalculator):
    """
    Classic Elo with a fixed K-factor.

    new = subject + k * (actual - 1 / (1 + 10 ** ((opponent - subject) / scale)))

    Parameters:
        initial_rating: Rating for participants without one (default: 1500)
        k_factor: Maximum rating change per result (default: 32)
        scale: Rating difference where one side is 10x stronger (default: 400)

    Example:
        >>> elo = Elo(k_factor=32)
        >>> cycle.calculation(elo)
        >>> elo(1500.0, 1400.0, True)
        1511.5179...
    """

    def __init__(
        self,
        initial_rating: float = 1500.0,
        k_factor: float = 32.0,
        scale: float = 400.0,
    ):
        if k_factor < 0:
            raise ValueError(f"k_factor must be non-negative, got {k_factor}")
        if scale <= 0:
            raise ValueError(f"scale must be positive, got {scale}")
        self.config = EloConfig(
            initial_rating=initial_rating,
            k_factor=k_factor,
            scale=scale,
        )

    def compute_rating(self, subject: float, opponent: float, subject_won: bool) -> float:
        return float(update_rating(
            float(subject),
            float(opponent),
            1.0 if subject_won else 0.0,
            self.config.k_factor,
            self.config.scale,
        ))

    def expected_score(self, subject: float, opponent: float) -> float:
        """Probability that the subject beats the opponent."""
        return float(expected_score(float(subject), float(opponent), self.config.scale))

    def expected_scores(
        self,
        subjects: Union[np.ndarray, List[float]],
        opponents: Union[np.ndarray, List[float]],
    ) -> np.ndarray:
        """Expected scores for arrays of subject and opponent ratings."""
        a = np.ascontiguousarray(subjects, dtype=np.float64)
        b = np.ascontiguousarray(opponents, dtype=np.float64)
        if a.shape != b.shape:
            raise ValueError(f"Shape mismatch: {a.shape} vs {b.shape}")
        return expected_scores_batch(a, b, self.config.scale)

    def __repr__(self) -> str:
        return (
            f"Elo(k_factor={self.config.k_factor}, "
            f"initial_rating={self.config.initial_rating}, "
            f"scale={self.config.scale})"
        )

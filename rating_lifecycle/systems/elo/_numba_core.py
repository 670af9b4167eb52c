"""
Numba-accelerated core functions for the Elo calculator.

Scalar functions are compiled without fastmath so that results are plain
IEEE doubles and match the closed-form Elo expression bit for bit.
"""

import numpy as np
from numba import njit, prange


@njit(cache=True)
def expected_score(rating_a: float, rating_b: float, scale: float) -> float:
    """Expected score for player A against player B."""
    return 1.0 / (1.0 + 10.0 ** ((rating_b - rating_a) / scale))


@njit(cache=True)
def update_rating(
    subject: float,
    opponent: float,
    actual: float,
    k_factor: float,
    scale: float,
) -> float:
    """New rating for the subject given the actual score (1.0 win, 0.0 loss)."""
    expected = 1.0 / (1.0 + 10.0 ** ((opponent - subject) / scale))
    return subject + k_factor * (actual - expected)


@njit(cache=True, parallel=True)
def expected_scores_batch(
    ratings_a: np.ndarray,
    ratings_b: np.ndarray,
    scale: float,
) -> np.ndarray:
    """Expected scores for a batch of matchups (fully parallel)."""
    n = len(ratings_a)
    out = np.empty(n, dtype=np.float64)

    for i in prange(n):
        out[i] = 1.0 / (1.0 + 10.0 ** ((ratings_b[i] - ratings_a[i]) / scale))

    return out

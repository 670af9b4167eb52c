"""Rating update functions.

- Elo: Classic fixed-K Elo

Any callable (subject, opponent, subject_won) -> new rating works with
RatingCycle; subclass RatingCalculator for a configurable strategy.
"""

from .elo import Elo, EloConfig

__all__ = ["Elo", "EloConfig"]

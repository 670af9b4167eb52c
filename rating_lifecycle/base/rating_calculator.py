"""Abstract base class for rating update functions."""

from abc import ABC, abstractmethod


class RatingCalculator(ABC):
    """
    Abstract base class for rating update strategies.

    Subclasses must implement:
    - compute_rating(): New rating for a subject after one result

    Instances are callable with the same signature, so they can be
    handed straight to RatingCycle.calculation().
    """

    @abstractmethod
    def compute_rating(self, subject: float, opponent: float, subject_won: bool) -> float:
        """
        Compute the subject's new rating after a result.

        Must be pure: the cycle calls it twice per result with the
        arguments swapped and relies on neither call seeing the other.

        Args:
            subject: Subject's rating before the result
            opponent: Opponent's rating before the result
            subject_won: Whether the subject won

        Returns:
            Subject's new rating
        """
        pass

    def __call__(self, subject: float, opponent: float, subject_won: bool) -> float:
        return self.compute_rating(subject, opponent, subject_won)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"

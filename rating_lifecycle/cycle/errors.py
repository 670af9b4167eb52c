"""Errors raised by a rating cycle."""


class RatingCycleError(ValueError):
    """Base class for errors detected by the cycle engine."""


class CycleConfigurationError(RatingCycleError):
    """The cycle is not ready to run (no update function, ratings or results)."""


class MissingParticipantError(RatingCycleError, KeyError):
    """A result references a participant that is not in the rating map."""

    def __init__(self, participant_id: int, index: int):
        self.participant_id = participant_id
        self.index = index
        super().__init__(
            f"Participant with id {participant_id} was not provided "
            f"but appears in result {index}"
        )

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]

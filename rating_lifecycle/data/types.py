"""Data types for rating cycles."""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Participant:
    """Profile of a rated competitor. Owned by the caller's model."""

    id: int
    name: str = ""
    rank: str = ""


@dataclass
class ResultRecord:
    """A single head-to-head result between an east and a west participant."""

    cycle_id: int
    day: int
    sequence: int
    east_id: int
    west_id: int
    east_win: bool
    west_win: bool

    @property
    def is_decisive(self) -> bool:
        """True when exactly one side won."""
        return self.east_win != self.west_win


@dataclass(frozen=True)
class SideOutcome:
    """One participant's rating movement in a single result."""

    participant_id: int
    name: str
    rank: str
    score_pre: float
    score_post: float
    change: float

    def to_dict(self) -> Dict:
        return {
            "participant_id": self.participant_id,
            "name": self.name,
            "rank": self.rank,
            "score_pre": self.score_pre,
            "score_post": self.score_post,
            "change": self.change,
        }


@dataclass(frozen=True)
class ResultOutcome:
    """Before/after rating snapshot for both sides of a processed result."""

    cycle_id: int
    day: int
    sequence: int
    east: SideOutcome
    west: SideOutcome

    def to_dict(self) -> Dict:
        return {
            "cycle_id": self.cycle_id,
            "day": self.day,
            "sequence": self.sequence,
            "east": self.east.to_dict(),
            "west": self.west.to_dict(),
        }

    def to_rows(self) -> list:
        """Flatten into one row per side (used for tabular export)."""
        rows = []
        for side, outcome in (("east", self.east), ("west", self.west)):
            rows.append({
                "cycle_id": self.cycle_id,
                "day": self.day,
                "sequence": self.sequence,
                "side": side,
                **outcome.to_dict(),
            })
        return rows

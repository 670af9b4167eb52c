"""Observer interface for the four lifecycle points of a rating cycle."""

from typing import TYPE_CHECKING

from ..data.types import ResultOutcome, ResultRecord

if TYPE_CHECKING:
    from .engine import CycleSnapshot, RatingCycle


class CycleObserver:
    """
    Base class for objects that want to be notified during a cycle.

    All methods are no-ops; override the ones you need and register the
    observer with RatingCycle.attach(). Only overridden methods are
    registered as hooks.
    """

    def before_cycle(self, cycle: "RatingCycle") -> None:
        """Called once before any result is processed."""

    def before_result(self, record: ResultRecord, index: int) -> None:
        """Called with a copy of each result before it is processed."""

    def after_result(self, outcome: ResultOutcome) -> None:
        """Called with each outcome, before its ratings are committed."""

    def after_cycle(self, snapshot: "CycleSnapshot") -> None:
        """Called once after every result has been processed."""


HOOK_NAMES = ("before_cycle", "before_result", "after_result", "after_cycle")


def overridden_hooks(observer: CycleObserver) -> dict:
    """Map hook name -> bound method for each hook the observer overrides."""
    hooks = {}
    for name in HOOK_NAMES:
        method = getattr(observer, name, None)
        if method is None:
            continue
        base = getattr(CycleObserver, name)
        if getattr(method, "__func__", None) is base:
            continue
        hooks[name] = method
    return hooks

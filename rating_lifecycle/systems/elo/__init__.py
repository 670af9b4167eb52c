"""Elo rating calculator."""

from .elo import Elo, EloConfig

__all__ = ["Elo", "EloConfig"]

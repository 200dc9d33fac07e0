"""Utilities for the prize draw subsystem."""

from .engine import DrawOutcome, DrawWinner, PrizeDrawEngine
from .errors import (
    AlreadyDrawn,
    DrawError,
    IncompleteWeek,
    NoEligiblePlayers,
    NoEntries,
    NoMatches,
    NoPrizes,
)
from .message import build_winner_message, normalize_prize_codes
from .sampling import weighted_sample_without_replacement

__all__ = [
    "AlreadyDrawn",
    "DrawError",
    "DrawOutcome",
    "DrawWinner",
    "IncompleteWeek",
    "NoEligiblePlayers",
    "NoEntries",
    "NoMatches",
    "NoPrizes",
    "PrizeDrawEngine",
    "build_winner_message",
    "normalize_prize_codes",
    "weighted_sample_without_replacement",
]

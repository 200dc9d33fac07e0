"""Outcome resolution and entry scoring."""

from .outcome import Outcome, outcome_from_scores
from .points import POINTS_CURVE, count_correct_picks, points_for_correct_picks
from .engine import (
    AlignmentMismatch,
    EntryScore,
    EntryScorer,
    ScoringSummary,
    WeekScore,
)

__all__ = [
    "AlignmentMismatch",
    "EntryScore",
    "EntryScorer",
    "Outcome",
    "POINTS_CURVE",
    "ScoringSummary",
    "WeekScore",
    "count_correct_picks",
    "outcome_from_scores",
    "points_for_correct_picks",
]

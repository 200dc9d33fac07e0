"""Failure modes of the weekly prize draw.

Every condition here is expected and recoverable by the caller; the message
of each exception is meant to be shown to an admin as-is.
"""

from __future__ import annotations


class DrawError(ValueError):
    """Base class for conditions that prevent a draw from running."""

    def __init__(self, week_id: str, message: str) -> None:
        self.week_id = week_id
        super().__init__(message)


class NoMatches(DrawError):
    def __init__(self, week_id: str) -> None:
        super().__init__(week_id, f"No matches found for week {week_id}.")


class IncompleteWeek(DrawError):
    def __init__(self, week_id: str, unfinished: int) -> None:
        self.unfinished = unfinished
        super().__init__(
            week_id,
            f"All match scores must be set before drawing winners "
            f"({unfinished} match(es) in week {week_id} still unfinished).",
        )


class NoEntries(DrawError):
    def __init__(self, week_id: str) -> None:
        super().__init__(week_id, f"No entries found for week {week_id}.")


class NoEligiblePlayers(DrawError):
    def __init__(self, week_id: str, min_points: int) -> None:
        self.min_points = min_points
        super().__init__(
            week_id,
            f"No players reached {min_points} point(s) in week {week_id}.",
        )


class NoPrizes(DrawError):
    def __init__(self, week_id: str) -> None:
        super().__init__(week_id, "At least one prize code is required.")


class AlreadyDrawn(DrawError):
    def __init__(self, week_id: str) -> None:
        super().__init__(week_id, f"Winners have already been drawn for week {week_id}.")


__all__ = [
    "AlreadyDrawn",
    "DrawError",
    "IncompleteWeek",
    "NoEligiblePlayers",
    "NoEntries",
    "NoMatches",
    "NoPrizes",
]

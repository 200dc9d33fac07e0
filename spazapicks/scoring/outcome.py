"""Match outcome resolution."""

from __future__ import annotations

import enum
from typing import Optional


class Outcome(str, enum.Enum):
    """Result of a match from the home side's perspective.

    The values double as the pick codes players submit, so a pick is correct
    exactly when it equals the resolved :class:`Outcome`.
    """

    HOME = "H"
    DRAW = "D"
    AWAY = "A"

    @classmethod
    def parse(cls, value: "Outcome | str") -> "Outcome":
        """Return the :class:`Outcome` for ``value``.

        Accepts an existing member or one of the single-letter codes
        ``"H"``, ``"D"``, ``"A"`` (case and surrounding whitespace ignored).

        Raises
        ------
        ValueError
            If ``value`` is not one of the three codes.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise TypeError("pick must be a string or Outcome")
        try:
            return cls(value.strip().upper())
        except ValueError as exc:
            raise ValueError(
                f"Invalid pick {value!r}; expected one of 'H', 'D', 'A'"
            ) from exc


def outcome_from_scores(
    home_score: Optional[int], away_score: Optional[int]
) -> Optional[Outcome]:
    """Derive the :class:`Outcome` of a match from its final scores.

    Returns ``None`` while either score is missing, i.e. the match has not
    finished and cannot be scored yet.
    """
    if home_score is None or away_score is None:
        return None
    if home_score > away_score:
        return Outcome.HOME
    if home_score < away_score:
        return Outcome.AWAY
    return Outcome.DRAW


__all__ = ["Outcome", "outcome_from_scores"]

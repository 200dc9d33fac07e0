"""Points curve and correct-pick counting."""

from __future__ import annotations

from typing import Hashable, Mapping, Optional

from .outcome import Outcome

# Index is the number of correct picks; anything past the end earns the last value.
POINTS_CURVE: tuple[int, ...] = (0, 1, 2, 10, 20, 50, 100, 200, 400, 800, 1600)


def points_for_correct_picks(correct_picks: int) -> int:
    """Return the points awarded for ``correct_picks`` correct predictions."""
    if correct_picks <= 0:
        return 0
    if correct_picks >= len(POINTS_CURVE):
        return POINTS_CURVE[-1]
    return POINTS_CURVE[correct_picks]


def count_correct_picks(
    picks: Mapping[Hashable, Outcome],
    outcomes: Mapping[Hashable, Optional[Outcome]],
) -> int:
    """Count picks that match the resolved outcome of their match.

    Both mappings are keyed by match id. Matches without a resolved outcome
    and matches the entry has no pick for are left out of the comparison.
    """
    correct = 0
    for match_id, outcome in outcomes.items():
        if outcome is None:
            continue
        if picks.get(match_id) == outcome:
            correct += 1
    return correct


__all__ = ["POINTS_CURVE", "count_correct_picks", "points_for_correct_picks"]

"""Weighted random selection without replacement."""

from __future__ import annotations

import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


def weighted_sample_without_replacement(
    candidates: Sequence[tuple[T, int]],
    k: int,
    rng: Optional[random.Random] = None,
) -> list[tuple[T, int]]:
    """Draw up to ``k`` distinct candidates, each round weighted by ticket count.

    Each round picks ``r`` uniformly from ``[1, remaining_total]`` and walks
    the remaining pool subtracting weights until ``r`` drops to zero or
    below; that candidate is selected and leaves the pool. A candidate with
    weight 100 is therefore 100 times as likely to be picked in a round as
    one with weight 1.

    Parameters
    ----------
    candidates : Sequence[tuple[T, int]]
        ``(item, weight)`` pairs. Weights must be positive integers.
    k : int
        Maximum number of selections.
    rng : Optional[random.Random], default: None
        Random source; ``random.SystemRandom()`` when omitted.

    Returns
    -------
    list[tuple[T, int]]
        Selected pairs in draw order; ``min(k, len(candidates))`` long.
    """

    if k < 0:
        raise ValueError("k must be non-negative")
    for _, weight in candidates:
        if isinstance(weight, bool) or not isinstance(weight, int):
            raise TypeError("weights must be integers")
        if weight <= 0:
            raise ValueError("weights must be positive")

    rng = rng or random.SystemRandom()
    pool = list(candidates)
    remaining_total = sum(weight for _, weight in pool)
    selected: list[tuple[T, int]] = []

    while pool and len(selected) < k:
        r = rng.randint(1, remaining_total)
        for index, (_, weight) in enumerate(pool):
            r -= weight
            if r <= 0:
                chosen = pool.pop(index)
                selected.append(chosen)
                remaining_total -= chosen[1]
                break

    return selected


__all__ = ["weighted_sample_without_replacement"]

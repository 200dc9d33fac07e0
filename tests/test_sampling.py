from __future__ import annotations

import random
import unittest
from collections import Counter

from spazapicks.prize_draw import (
    build_winner_message,
    normalize_prize_codes,
    weighted_sample_without_replacement,
)


class WeightedSamplingTests(unittest.TestCase):
    def test_selection_is_proportional_to_weight(self) -> None:
        rng = random.Random(20260126)
        wins: Counter[str] = Counter()
        for _ in range(100_000):
            [(winner, _)] = weighted_sample_without_replacement(
                [("A", 100), ("B", 1)], 1, rng
            )
            wins[winner] += 1

        self.assertEqual(wins["A"] + wins["B"], 100_000)
        self.assertGreater(wins["B"], 0)
        ratio = wins["A"] / wins["B"]
        self.assertGreater(ratio, 80)
        self.assertLess(ratio, 125)

    def test_no_candidate_is_selected_twice(self) -> None:
        rng = random.Random(7)
        candidates = [(f"p{i}", i + 1) for i in range(10)]
        for k in (1, 3, 10, 15):
            selected = weighted_sample_without_replacement(candidates, k, rng)
            names = [name for name, _ in selected]
            self.assertEqual(len(names), min(k, len(candidates)))
            self.assertEqual(len(set(names)), len(names))

    def test_selected_pairs_keep_their_weights(self) -> None:
        selected = weighted_sample_without_replacement(
            [("a", 5), ("b", 9)], 2, random.Random(1)
        )
        self.assertEqual(sorted(selected), [("a", 5), ("b", 9)])

    def test_zero_k_or_empty_pool_returns_nothing(self) -> None:
        self.assertEqual(weighted_sample_without_replacement([("a", 1)], 0), [])
        self.assertEqual(weighted_sample_without_replacement([], 3), [])

    def test_invalid_weights_raise(self) -> None:
        with self.assertRaises(ValueError):
            weighted_sample_without_replacement([("a", 0)], 1)
        with self.assertRaises(ValueError):
            weighted_sample_without_replacement([("a", -2)], 1)
        with self.assertRaises(TypeError):
            weighted_sample_without_replacement([("a", 1.5)], 1)  # type: ignore[list-item]
        with self.assertRaises(ValueError):
            weighted_sample_without_replacement([("a", 1)], -1)


class PrizeCodeHelperTests(unittest.TestCase):
    def test_normalize_prize_codes(self) -> None:
        codes = normalize_prize_codes([" P1 ", "", "P2", "P1", None, "  ", "P3"])
        self.assertEqual(codes, ["P1", "P2", "P3"])
        self.assertEqual(normalize_prize_codes(None), [])

    def test_winner_message_ends_with_code(self) -> None:
        message = build_winner_message("AIRTIME-123")
        lines = message.split("\n")
        self.assertEqual(
            lines,
            [
                "Congratulations you've won on your picks this week.",
                "Please go to your home spaza to claim your prize.",
                "AIRTIME-123",
            ],
        )
        with self.assertRaises(ValueError):
            build_winner_message("")


if __name__ == "__main__":
    unittest.main()

from __future__ import annotations

import unittest

from spazapicks.scoring import (
    POINTS_CURVE,
    Outcome,
    count_correct_picks,
    outcome_from_scores,
    points_for_correct_picks,
)


class OutcomeTests(unittest.TestCase):
    def test_outcome_follows_score_comparison(self) -> None:
        for home in range(0, 5):
            for away in range(0, 5):
                outcome = outcome_from_scores(home, away)
                if home > away:
                    self.assertIs(outcome, Outcome.HOME)
                elif home < away:
                    self.assertIs(outcome, Outcome.AWAY)
                else:
                    self.assertIs(outcome, Outcome.DRAW)

    def test_missing_score_has_no_outcome(self) -> None:
        self.assertIsNone(outcome_from_scores(None, 1))
        self.assertIsNone(outcome_from_scores(2, None))
        self.assertIsNone(outcome_from_scores(None, None))

    def test_parse_accepts_codes_and_members(self) -> None:
        self.assertIs(Outcome.parse("H"), Outcome.HOME)
        self.assertIs(Outcome.parse(" d "), Outcome.DRAW)
        self.assertIs(Outcome.parse(Outcome.AWAY), Outcome.AWAY)

    def test_parse_rejects_unknown_values(self) -> None:
        with self.assertRaises(ValueError):
            Outcome.parse("X")
        with self.assertRaises(ValueError):
            Outcome.parse("")
        with self.assertRaises(TypeError):
            Outcome.parse(1)  # type: ignore[arg-type]


class PointsCurveTests(unittest.TestCase):
    def test_curve_values(self) -> None:
        expected = {
            0: 0,
            1: 1,
            2: 2,
            3: 10,
            4: 20,
            5: 50,
            6: 100,
            7: 200,
            8: 400,
            9: 800,
            10: 1600,
            11: 1600,
            25: 1600,
        }
        for correct, points in expected.items():
            self.assertEqual(points_for_correct_picks(correct), points, correct)

    def test_negative_counts_score_zero(self) -> None:
        self.assertEqual(points_for_correct_picks(-3), 0)

    def test_curve_is_non_decreasing(self) -> None:
        previous = -1
        for correct in range(0, 20):
            points = points_for_correct_picks(correct)
            self.assertGreaterEqual(points, previous)
            previous = points
        self.assertEqual(len(POINTS_CURVE), 11)


class CountCorrectPicksTests(unittest.TestCase):
    def test_only_resolved_matches_are_compared(self) -> None:
        outcomes = {1: Outcome.HOME, 2: None, 3: Outcome.DRAW}
        picks = {1: Outcome.HOME, 2: Outcome.AWAY, 3: Outcome.AWAY}
        self.assertEqual(count_correct_picks(picks, outcomes), 1)

    def test_missing_picks_are_not_correct(self) -> None:
        outcomes = {1: Outcome.HOME, 2: Outcome.DRAW}
        self.assertEqual(count_correct_picks({2: Outcome.DRAW}, outcomes), 1)
        self.assertEqual(count_correct_picks({}, outcomes), 0)


if __name__ == "__main__":
    unittest.main()

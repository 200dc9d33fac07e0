from __future__ import annotations

import os
import unittest
from datetime import datetime, timezone
from unittest.mock import patch

from support import DBTestCase

from spazapicks.models import Match, User
from spazapicks.scoring import Outcome
from spazapicks.workflows import (
    DEFAULT_FIXTURES,
    create_matches,
    player_week_detail,
    player_week_history,
    preseed_week,
    record_match_scores,
)

WEEK = "2026-W04"
NOW = datetime(2026, 1, 20, 9, 0, tzinfo=timezone.utc)


class CreateMatchesTests(DBTestCase):
    def test_creates_matches_with_parsed_kickoffs(self) -> None:
        with self.Session.begin() as session:
            created = create_matches(
                session,
                [
                    {
                        "home_team": " Chiefs ",
                        "away_team": "Pirates",
                        "kickoff_at": "2026-01-24T15:00:00Z",
                    },
                    {
                        "home_team": "Sundowns",
                        "away_team": "SuperSport",
                        "kickoff_at": datetime(2026, 1, 24, 17, 30),
                        "week_id": "2026-W05",
                    },
                ],
                week_id=WEEK,
            )

            self.assertEqual([m.week_id for m in created], [WEEK, "2026-W05"])
            self.assertEqual(created[0].home_team, "Chiefs")
            self.assertEqual(
                created[0].kickoff_at, datetime(2026, 1, 24, 15, 0, tzinfo=timezone.utc)
            )
            self.assertEqual(created[1].kickoff_at.tzinfo, timezone.utc)
            self.assertTrue(all(m.id is not None for m in created))

    def test_default_week_comes_from_environment(self) -> None:
        with patch.dict(os.environ, {"CURRENT_WEEK_ID": "2026-W09"}):
            with self.Session.begin() as session:
                created = create_matches(
                    session,
                    [{"home_team": "A", "away_team": "B", "kickoff_at": "2026-02-28T15:00"}],
                )

        self.assertEqual(created[0].week_id, "2026-W09")

    def test_invalid_fixture_adds_nothing(self) -> None:
        with self.Session.begin() as session:
            valid = {"home_team": "A", "away_team": "B", "kickoff_at": "2026-01-24T15:00"}
            for bad in (
                {"home_team": "A", "away_team": " ", "kickoff_at": "2026-01-24T15:00"},
                {"home_team": "A", "away_team": "B"},
                {"home_team": "A", "away_team": "B", "kickoff_at": "Saturday"},
            ):
                with self.assertRaises(ValueError):
                    create_matches(session, [valid, bad], week_id=WEEK)
            with self.assertRaises(ValueError):
                create_matches(session, [], week_id=WEEK)

            self.assertEqual(Match.for_week(session, WEEK), [])


class PreseedWeekTests(DBTestCase):
    def test_fills_empty_week_once(self) -> None:
        with self.Session.begin() as session:
            created = preseed_week(session, WEEK, now=NOW)

            self.assertEqual(len(created), len(DEFAULT_FIXTURES))
            self.assertEqual(created[0].home_team, "Chiefs")
            self.assertEqual(
                created[0].kickoff_at, datetime(2026, 1, 21, 15, 0, tzinfo=timezone.utc)
            )
            self.assertEqual(
                created[-1].kickoff_at, datetime(2026, 1, 23, 19, 0, tzinfo=timezone.utc)
            )

            with self.assertRaises(ValueError):
                preseed_week(session, WEEK, now=NOW)
            self.assertEqual(len(Match.for_week(session, WEEK)), len(DEFAULT_FIXTURES))


class PlayerWeekTests(DBTestCase):
    def _seed_player(self, session) -> list[Match]:
        user = User("27820000001", state="ACTIVE")
        session.add(user)
        user.assign_leaderboard_id(session, "thandi")
        return self.add_matches(session, WEEK, [(None, None), (None, None), (None, None)])

    def test_detail_lists_picks_against_results(self) -> None:
        with self.Session.begin() as session:
            matches = self._seed_player(session)
            first = self.add_entry(session, "27820000001", matches, ["A", "A", "A"])
            first.submitted_at = datetime(2026, 1, 22, 8, 0, tzinfo=timezone.utc)
            latest = self.add_entry(session, "27820000001", matches[:2], ["H", "D"])
            latest.submitted_at = datetime(2026, 1, 23, 8, 0, tzinfo=timezone.utc)
            record_match_scores(session, [(matches[0].id, 2, 0), (matches[1].id, 1, 0)])

            detail = player_week_detail(session, "THANDI", WEEK)

            self.assertEqual(detail.leaderboard_id, "THANDI")
            self.assertEqual(detail.points, 1)
            self.assertEqual(
                [(row.pick, row.is_finished, row.is_correct) for row in detail.matches],
                [
                    (Outcome.HOME, True, True),
                    (Outcome.DRAW, True, False),
                    (None, False, None),
                ],
            )
            data = detail.to_json()
            self.assertEqual(data["submitted_at"], "2026-01-23T08:00:00+00:00")
            self.assertEqual(data["matches"][0]["pick"], "H")
            self.assertIsNone(data["matches"][2]["pick"])

    def test_history_groups_entries_per_week(self) -> None:
        with self.Session.begin() as session:
            matches = self._seed_player(session)
            later = self.add_matches(session, "2026-W05", [(1, 0)])
            self.add_entry(session, "27820000001", matches, ["H", "H", "H"])
            self.add_entry(session, "27820000001", matches, ["D", "D", "D"])
            recent = self.add_entry(session, "27820000001", later, ["H"])
            recent.submitted_at = datetime(2030, 1, 1, tzinfo=timezone.utc)
            record_match_scores(session, [(later[0].id, 1, 0)])

            history = player_week_history(session, "thandi")

            self.assertEqual(
                [(row.week_id, row.entry_count, row.total_points) for row in history],
                [("2026-W05", 1, 1), (WEEK, 2, 0)],
            )
            self.assertEqual(
                history[0].to_json()["latest_submitted_at"], "2030-01-01T00:00:00+00:00"
            )

    def test_unknown_player_or_missing_entry(self) -> None:
        with self.Session.begin() as session:
            self._seed_player(session)

            with self.assertRaises(ValueError):
                player_week_history(session, "NOBODY")
            with self.assertRaises(ValueError):
                player_week_detail(session, "NOBODY", WEEK)
            with self.assertRaises(ValueError):
                player_week_detail(session, "THANDI", WEEK)
            self.assertEqual(player_week_history(session, "THANDI"), [])


if __name__ == "__main__":
    unittest.main()

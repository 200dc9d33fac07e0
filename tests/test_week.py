import os
import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from spazapicks.week import current_week_id, is_valid_week_id, week_id_for


class WeekIdTests(unittest.TestCase):
    def test_iso_week_format(self):
        self.assertEqual(
            week_id_for(datetime(2026, 1, 29, 12, 0, tzinfo=timezone.utc)), "2026-W05"
        )

    def test_iso_year_differs_from_calendar_year(self):
        self.assertEqual(week_id_for(datetime(2027, 1, 1, tzinfo=timezone.utc)), "2026-W53")
        self.assertEqual(week_id_for(datetime(2025, 12, 29, tzinfo=timezone.utc)), "2026-W01")

    def test_aware_datetimes_are_read_in_utc(self):
        # Monday 01:00 in UTC+2 is still Sunday in UTC
        sast = timezone(timedelta(hours=2))
        self.assertEqual(week_id_for(datetime(2026, 2, 2, 1, 0, tzinfo=sast)), "2026-W05")

    def test_override_from_environment(self):
        with patch.dict(os.environ, {"CURRENT_WEEK_ID": " 2026-W10 "}):
            self.assertEqual(current_week_id(), "2026-W10")

    def test_blank_override_is_ignored(self):
        now = datetime(2026, 1, 29, tzinfo=timezone.utc)
        with patch.dict(os.environ, {"CURRENT_WEEK_ID": "  "}):
            self.assertEqual(current_week_id(now), "2026-W05")

    def test_is_valid_week_id(self):
        self.assertTrue(is_valid_week_id("2026-W05"))
        self.assertTrue(is_valid_week_id("2026-W53"))
        for value in ("", None, "2026-W5", "2026-W00", "2026-W54", "2026W05", "26-W05"):
            self.assertFalse(is_valid_week_id(value), value)


if __name__ == "__main__":
    unittest.main()

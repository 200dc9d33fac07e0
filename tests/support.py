"""Shared database fixtures for the test suites."""

from __future__ import annotations

import unittest
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from spazapicks.models import Base, Entry, Match

KICKOFF = datetime(2026, 1, 24, 15, 0, tzinfo=timezone.utc)


class DBTestCase(unittest.TestCase):
    def setUp(self) -> None:
        # In-memory SQLite for isolation
        self.engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(
            bind=self.engine, future=True, expire_on_commit=False
        )
        self._token_counter = 0

    def tearDown(self) -> None:
        self.engine.dispose()

    def add_matches(
        self,
        session: Session,
        week_id: str,
        scores: Sequence[tuple[Optional[int], Optional[int]]],
    ) -> list[Match]:
        """Create one match per ``(home, away)`` pair, in kickoff order."""
        matches = [
            Match(
                week_id=week_id,
                home_team=f"Home {i}",
                away_team=f"Away {i}",
                kickoff_at=KICKOFF + timedelta(hours=2 * i),
                home_score=home,
                away_score=away,
            )
            for i, (home, away) in enumerate(scores)
        ]
        session.add_all(matches)
        session.flush()
        return matches

    def add_entry(
        self,
        session: Session,
        wa_number: str,
        matches: Sequence[Match],
        picks: Sequence[str],
        *,
        week_id: Optional[str] = None,
    ) -> Entry:
        """Create an entry pairing ``picks`` with ``matches`` by position."""
        self._token_counter += 1
        entry = Entry(
            wa_number=wa_number,
            week_id=week_id or matches[0].week_id,
            link_token=f"token-{self._token_counter}",
        )
        for match, pick in zip(matches, picks):
            entry.add_pick(match, pick)
        session.add(entry)
        session.flush()
        return entry

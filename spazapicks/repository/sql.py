"""SQLAlchemy-backed :class:`WeekRepository`."""

from __future__ import annotations

from datetime import datetime
from typing import Hashable, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .base import (
    DrawRecord,
    EntryRecord,
    MatchRecord,
    PickRecord,
    PlayerTickets,
    WeekRepository,
)
from ..models import Entry, EntryPick, Match, PrizeDraw


class SqlAlchemyWeekRepository(WeekRepository):
    """Repository bound to a SQLAlchemy session.

    Writes are flushed but never committed; transaction boundaries belong to
    the caller that owns ``session``.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_matches(self, week_id: str) -> list[MatchRecord]:
        return [
            MatchRecord(id=m.id, home_score=m.home_score, away_score=m.away_score)
            for m in Match.for_week(self._session, week_id)
        ]

    def get_entries(self, week_id: str) -> list[EntryRecord]:
        return [
            EntryRecord(id=e.id, player_id=e.player_id)
            for e in Entry.for_week(self._session, week_id)
        ]

    def get_picks(self, entry_id: Hashable) -> list[PickRecord]:
        stmt = (
            select(EntryPick)
            .where(EntryPick.entry_id == entry_id)
            .order_by(EntryPick.id.asc())
        )
        return [
            PickRecord(match_id=p.match_id, pick=p.pick)
            for p in self._session.scalars(stmt).all()
        ]

    def update_entry(
        self,
        entry_id: Hashable,
        *,
        correct_picks: int,
        points: int,
        scored_at: Optional[datetime],
    ) -> None:
        entry = self._session.get(Entry, entry_id)
        if entry is None:
            raise ValueError(f"Entry {entry_id!r} does not exist")
        entry.correct_picks = correct_picks
        entry.points = points
        entry.scored_at = scored_at

    def get_aggregate_points(self, week_id: str) -> list[PlayerTickets]:
        # Pending score updates must be visible to the aggregate query.
        self._session.flush()
        stmt = (
            select(Entry.wa_number, func.coalesce(func.sum(Entry.points), 0))
            .where(Entry.week_id == week_id)
            .group_by(Entry.wa_number)
            .order_by(Entry.wa_number.asc())
        )
        return [
            PlayerTickets(player_id=wa_number, total_points=int(total))
            for wa_number, total in self._session.execute(stmt).all()
        ]

    def insert_draw_records(self, records: Sequence[DrawRecord]) -> None:
        if not records:
            return
        # Single flush in the caller's transaction; a failed flush rolls back
        # every record of the batch.
        self._session.add_all(
            [
                PrizeDraw(
                    week_id=record.week_id,
                    wa_number=record.player_id,
                    prize_code=record.prize_code,
                    message=record.message,
                    tickets_held=record.tickets_held,
                )
                for record in records
            ]
        )
        self._session.flush()

    def has_draw(self, week_id: str) -> bool:
        stmt = select(PrizeDraw.id).where(PrizeDraw.week_id == week_id).limit(1)
        return self._session.scalar(stmt) is not None

    def list_week_ids(self) -> list[str]:
        match_weeks = set(self._session.scalars(select(Match.week_id).distinct()).all())
        entry_weeks = set(self._session.scalars(select(Entry.week_id).distinct()).all())
        return sorted(match_weeks | entry_weeks)


__all__ = ["SqlAlchemyWeekRepository"]

"""Persistence contract consumed by the scorer and the draw engine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Hashable, Optional, Sequence

if TYPE_CHECKING:
    from ..scoring.outcome import Outcome


@dataclass(frozen=True)
class MatchRecord:
    """Scores of one match as seen by the scorer."""

    id: Hashable
    home_score: Optional[int]
    away_score: Optional[int]

    @property
    def is_finished(self) -> bool:
        return self.home_score is not None and self.away_score is not None


@dataclass(frozen=True)
class EntryRecord:
    id: Hashable
    player_id: str


@dataclass(frozen=True)
class PickRecord:
    match_id: Hashable
    pick: Outcome


@dataclass(frozen=True)
class PlayerTickets:
    """Points a player accumulated across all of their entries in a week."""

    player_id: str
    total_points: int


@dataclass(frozen=True)
class DrawRecord:
    week_id: str
    player_id: str
    prize_code: str
    message: str
    tickets_held: Optional[int] = None


class WeekRepository(ABC):
    """Week-scoped reads and writes needed by scoring and prize draws.

    Implementations must give a consistent view of match scores and entries
    for the duration of one scoring pass, and write draw records atomically.
    """

    @abstractmethod
    def get_matches(self, week_id: str) -> list[MatchRecord]:
        """Return the matches of ``week_id`` ordered by kickoff time."""

    @abstractmethod
    def get_entries(self, week_id: str) -> list[EntryRecord]:
        """Return every entry submitted for ``week_id``."""

    @abstractmethod
    def get_picks(self, entry_id: Hashable) -> list[PickRecord]:
        """Return the picks of one entry."""

    @abstractmethod
    def update_entry(
        self,
        entry_id: Hashable,
        *,
        correct_picks: int,
        points: int,
        scored_at: Optional[datetime],
    ) -> None:
        """Overwrite the scoring fields of one entry."""

    @abstractmethod
    def get_aggregate_points(self, week_id: str) -> list[PlayerTickets]:
        """Return summed entry points per player for ``week_id``."""

    @abstractmethod
    def insert_draw_records(self, records: Sequence[DrawRecord]) -> None:
        """Persist all ``records`` or none of them."""

    @abstractmethod
    def has_draw(self, week_id: str) -> bool:
        """Return ``True`` when at least one draw record exists for ``week_id``."""

    @abstractmethod
    def list_week_ids(self) -> list[str]:
        """Return every week that has matches or entries, oldest first."""


__all__ = [
    "DrawRecord",
    "EntryRecord",
    "MatchRecord",
    "PickRecord",
    "PlayerTickets",
    "WeekRepository",
]

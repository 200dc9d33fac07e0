"""Database model for fixtures players predict on."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Optional

from sqlalchemy import DateTime, Integer, String, Index, select
from sqlalchemy.orm import Mapped, Session, mapped_column, relationship, validates

from .base import Base
from ..db.utils import dt_iso
from ..scoring.outcome import Outcome, outcome_from_scores

if TYPE_CHECKING:
    from .entry import EntryPick


class Match(Base):
    """A single fixture belonging to a week."""

    __tablename__ = "matches"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    """Primary key."""

    week_id: Mapped[str] = mapped_column(String(16), nullable=False)
    """Week the match is played in, e.g. ``"2026-W05"``."""

    home_team: Mapped[str] = mapped_column(String(100), nullable=False)
    away_team: Mapped[str] = mapped_column(String(100), nullable=False)

    kickoff_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    """Kickoff time; also defines the order of matches within a week."""

    home_score: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    """Final home score, ``None`` until an admin records it."""

    away_score: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    """Final away score, ``None`` until an admin records it."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    picks: Mapped[list["EntryPick"]] = relationship(back_populates="match")

    __table_args__ = (
        Index("matches_week_id_idx", "week_id"),
        Index("matches_kickoff_at_idx", "kickoff_at"),
    )

    def __init__(
        self,
        *,
        week_id: str,
        home_team: str,
        away_team: str,
        kickoff_at: datetime,
        home_score: Optional[int] = None,
        away_score: Optional[int] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ) -> None:
        if not week_id or not week_id.strip():
            raise ValueError("week_id must not be empty")
        if not home_team or not away_team:
            raise ValueError("home_team and away_team are required")
        self.week_id = week_id.strip()
        self.home_team = home_team.strip()
        self.away_team = away_team.strip()
        self.kickoff_at = kickoff_at
        self.home_score = home_score
        self.away_score = away_score
        if created_at is not None:
            self.created_at = created_at
        if updated_at is not None:
            self.updated_at = updated_at

    def __repr__(self) -> str:  # pragma: no cover - repr is trivial
        return (
            f"<Match(id={self.id}, week_id={self.week_id}, "
            f"{self.home_team} {self.home_score}-{self.away_score} {self.away_team})>"
        )

    @validates("home_score", "away_score")
    def _validate_score(self, key: str, value: Optional[int]) -> Optional[int]:
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{key} must be an integer or None")
        if value < 0:
            raise ValueError(f"{key} must not be negative")
        return value

    @property
    def is_finished(self) -> bool:
        """``True`` once both final scores are recorded."""
        return self.home_score is not None and self.away_score is not None

    @property
    def outcome(self) -> Optional[Outcome]:
        """Resolved outcome, or ``None`` while the match is unfinished."""
        return outcome_from_scores(self.home_score, self.away_score)

    def set_score(self, home_score: Optional[int], away_score: Optional[int]) -> None:
        """Overwrite both final scores; ``None`` clears a side."""
        self.home_score = home_score
        self.away_score = away_score

    def to_json(self) -> dict[str, Any]:
        outcome = self.outcome
        return {
            "id": self.id,
            "week_id": self.week_id,
            "home_team": self.home_team,
            "away_team": self.away_team,
            "kickoff_at": dt_iso(self.kickoff_at),
            "home_score": self.home_score,
            "away_score": self.away_score,
            "is_finished": self.is_finished,
            "outcome": outcome.value if outcome is not None else None,
        }

    @classmethod
    def for_week(cls, session: Session, week_id: str) -> list["Match"]:
        """Return the matches of ``week_id`` ordered by kickoff."""

        stmt = (
            select(cls)
            .where(cls.week_id == week_id)
            .order_by(cls.kickoff_at.asc(), cls.id.asc())
        )
        return list(session.scalars(stmt).all())


__all__ = ["Match"]

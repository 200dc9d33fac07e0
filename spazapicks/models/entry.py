"""Database models for weekly prediction entries."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Optional

from sqlalchemy import (
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    select,
)
from sqlalchemy.orm import Mapped, Session, mapped_column, relationship, validates

from .base import Base
from .utils import normalize_wa_number
from ..db.utils import dt_iso
from ..scoring.outcome import Outcome

if TYPE_CHECKING:
    from .match import Match


OUTCOME_ENUM = Enum(
    Outcome,
    name="pick_outcome",
    values_callable=lambda members: [member.value for member in members],
    native_enum=False,
    length=1,
    validate_strings=True,
)


class Entry(Base):
    """One player's set of predictions for one week."""

    __tablename__ = "entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    """Primary key."""

    wa_number: Mapped[str] = mapped_column(String(32), nullable=False)
    """Digits-only WhatsApp number of the submitting player."""

    week_id: Mapped[str] = mapped_column(String(16), nullable=False)
    """Week the entry was submitted for."""

    link_token: Mapped[str] = mapped_column(String(128), nullable=False)
    """Prediction link the entry was submitted through; one entry per link."""

    correct_picks: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    """Correct picks among finished matches; ``None`` until first scored."""

    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    """Points derived from ``correct_picks`` via the points curve."""

    scored_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    """Set when the entry was scored against a fully finished week."""

    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
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

    picks: Mapped[list["EntryPick"]] = relationship(
        back_populates="entry",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        UniqueConstraint("link_token", name="entries_link_token_uq"),
        Index("entries_wa_week_idx", "wa_number", "week_id"),
        Index("entries_points_idx", "points"),
    )

    def __init__(
        self,
        *,
        wa_number: str,
        week_id: str,
        link_token: str,
        submitted_at: Optional[datetime] = None,
        picks: Optional[list["EntryPick"]] = None,
    ) -> None:
        self.wa_number = wa_number
        self.week_id = week_id
        self.link_token = link_token
        self.points = 0
        self.correct_picks = None
        self.scored_at = None
        if submitted_at is not None:
            self.submitted_at = submitted_at
        if picks is not None:
            self.picks = picks

    @validates("wa_number")
    def _validate_wa_number(self, key: str, value: str) -> str:
        return normalize_wa_number(value)

    def __repr__(self) -> str:  # pragma: no cover - repr is trivial
        return (
            f"<Entry(id={self.id}, wa_number={self.wa_number}, week_id={self.week_id}, "
            f"correct_picks={self.correct_picks}, points={self.points})>"
        )

    @property
    def player_id(self) -> str:
        """Stable identity used when aggregating tickets per player."""
        return self.wa_number

    @property
    def is_scored(self) -> bool:
        return self.scored_at is not None

    def add_pick(self, match: "Match", pick: "Outcome | str") -> "EntryPick":
        """Attach a prediction for ``match`` to this entry."""
        if match.week_id != self.week_id:
            raise ValueError("Cannot pick a match from a different week")
        if any(existing.match is match for existing in self.picks):
            raise ValueError("Entry already has a pick for this match")
        return EntryPick(entry=self, match=match, pick=pick)

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "wa_number": self.wa_number,
            "week_id": self.week_id,
            "correct_picks": self.correct_picks,
            "points": self.points,
            "scored_at": dt_iso(self.scored_at),
            "submitted_at": dt_iso(self.submitted_at),
        }

    @classmethod
    def for_week(cls, session: Session, week_id: str) -> list["Entry"]:
        """Return the entries submitted for ``week_id`` in submission order."""

        stmt = (
            select(cls)
            .where(cls.week_id == week_id)
            .order_by(cls.submitted_at.asc(), cls.id.asc())
        )
        return list(session.scalars(stmt).all())


class EntryPick(Base):
    """A single Home/Draw/Away prediction on one match."""

    __tablename__ = "entry_picks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    entry_id: Mapped[int] = mapped_column(
        ForeignKey("entries.id", ondelete="CASCADE"), nullable=False, index=True
    )
    match_id: Mapped[int] = mapped_column(
        ForeignKey("matches.id", ondelete="CASCADE"), nullable=False, index=True
    )
    pick: Mapped[Outcome] = mapped_column(OUTCOME_ENUM, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    entry: Mapped["Entry"] = relationship(back_populates="picks")
    match: Mapped["Match"] = relationship(back_populates="picks")

    __table_args__ = (
        UniqueConstraint("entry_id", "match_id", name="entry_picks_entry_match_uq"),
    )

    def __init__(
        self,
        *,
        pick: "Outcome | str",
        entry: Optional["Entry"] = None,
        entry_id: Optional[int] = None,
        match: Optional["Match"] = None,
        match_id: Optional[int] = None,
    ) -> None:
        self.pick = pick
        if entry is not None:
            self.entry = entry
        if entry_id is not None:
            self.entry_id = entry_id
        if match is not None:
            self.match = match
        if match_id is not None:
            self.match_id = match_id

    @validates("pick")
    def _validate_pick(self, key: str, value: "Outcome | str") -> Outcome:
        return Outcome.parse(value)

    def __repr__(self) -> str:  # pragma: no cover - repr is trivial
        return f"<EntryPick(entry_id={self.entry_id}, match_id={self.match_id}, pick={self.pick.value})>"


__all__ = ["Entry", "EntryPick"]

"""Database model for prize draw winner records."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import DateTime, Index, Integer, String, Text, select
from sqlalchemy.orm import Mapped, Session, mapped_column

from .base import Base
from ..db.utils import dt_iso


class PrizeDraw(Base):
    """Record of one prize code awarded to one player in a weekly draw.

    Rows are only ever inserted. Running the draw again for the same week adds
    a new, independent set of rows.
    """

    __tablename__ = "prize_draws"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    """Surrogate primary key."""

    week_id: Mapped[str] = mapped_column(String(16), nullable=False)
    """Week the draw was run for."""

    wa_number: Mapped[str] = mapped_column(String(32), nullable=False)
    """Player identity (digits-only WhatsApp number) of the winner."""

    prize_code: Mapped[str] = mapped_column(String(255), nullable=False)
    """Prize code assigned to the winner."""

    message: Mapped[str] = mapped_column(Text, nullable=False)
    """Notification text generated for the winner."""

    tickets_held: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    """Ticket count the winner held when drawn."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("prize_draws_week_id_idx", "week_id"),
        Index("prize_draws_wa_number_idx", "wa_number"),
    )

    def __init__(
        self,
        *,
        week_id: str,
        wa_number: str,
        prize_code: str,
        message: str,
        tickets_held: Optional[int] = None,
        created_at: Optional[datetime] = None,
    ) -> None:
        self.week_id = week_id
        self.wa_number = wa_number
        self.prize_code = prize_code
        self.message = message
        self.tickets_held = tickets_held
        if created_at is not None:
            self.created_at = created_at

    def __repr__(self) -> str:  # pragma: no cover - repr is trivial
        return "<PrizeDraw(id={id}, week_id={week}, wa_number={wa}, prize_code={code})>".format(
            id=self.id,
            week=self.week_id,
            wa=self.wa_number,
            code=self.prize_code,
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "week_id": self.week_id,
            "wa_number": self.wa_number,
            "prize_code": self.prize_code,
            "message": self.message,
            "tickets_held": self.tickets_held,
            "created_at": dt_iso(self.created_at),
        }

    @classmethod
    def for_week(cls, session: Session, week_id: str) -> list["PrizeDraw"]:
        """Return the draw records of ``week_id`` oldest first."""

        stmt = (
            select(cls)
            .where(cls.week_id == week_id)
            .order_by(cls.created_at.asc(), cls.id.asc())
        )
        return list(session.scalars(stmt).all())


__all__ = ["PrizeDraw"]

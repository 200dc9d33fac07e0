from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, Integer, String, Index, func, select
from sqlalchemy.orm import Session, Mapped, mapped_column, relationship, validates

from .base import Base
from .utils import generate_unique_leaderboard_id, normalize_wa_number

if TYPE_CHECKING:
    from .entry import Entry


USER_STATES = ("UNKNOWN", "PENDING_REGISTRATION", "ACTIVE")


class User(Base):
    """A player reachable over WhatsApp."""

    def __init__(
        self,
        wa_number: str,
        state: str = "UNKNOWN",
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        home_sid: Optional[str] = None,
        leaderboard_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        """Create a new :class:`User` record.

        Parameters
        ----------
        wa_number : str
            WhatsApp number. Stored in its digits-only form.
        state : str, default: "UNKNOWN"
            Registration state, one of ``USER_STATES``.
        first_name, last_name : str, optional
            Name captured during registration.
        home_sid : str, optional
            Identifier of the spaza shop where prizes are claimed.
        leaderboard_id : str, optional
            Public alias shown on leaderboards. See
            :meth:`assign_leaderboard_id` for generating a unique one.
        created_at, updated_at : datetime, optional
            Explicit timestamps.
        """

        if state not in USER_STATES:
            raise ValueError(f"Unknown user state {state!r}")
        self.wa_number = wa_number
        self.state = state
        self.first_name = first_name
        self.last_name = last_name
        self.home_sid = home_sid
        self.leaderboard_id = leaderboard_id
        if created_at is not None:
            self.created_at = created_at
        if updated_at is not None:
            self.updated_at = updated_at

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    wa_number: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    state: Mapped[str] = mapped_column(String(32), nullable=False, default="UNKNOWN")
    home_sid: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    leaderboard_id: Mapped[Optional[str]] = mapped_column(
        String(64), unique=True, nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    entries: Mapped[list["Entry"]] = relationship(
        "Entry",
        primaryjoin="User.wa_number==foreign(Entry.wa_number)",
        viewonly=True,
        order_by="Entry.submitted_at",
    )

    __table_args__ = (Index("users_state_idx", "state"),)

    @validates("wa_number")
    def _validate_wa_number(self, key: str, value: str) -> str:
        return normalize_wa_number(value)

    def __repr__(self) -> str:
        return (
            f"<User(id={self.id}, wa_number='{self.wa_number}', "
            f"state='{self.state}', leaderboard_id='{self.leaderboard_id}')>"
        )

    @classmethod
    def get_by_wa_number(cls, session: Session, wa_number: str) -> Optional["User"]:
        """Retrieve a user by WhatsApp number in any formatting."""

        return session.scalar(
            select(cls).where(cls.wa_number == normalize_wa_number(wa_number))
        )

    @classmethod
    def get_by_leaderboard_id(
        cls, session: Session, leaderboard_id: str
    ) -> Optional["User"]:
        """Retrieve a user by leaderboard id (case-insensitive)."""

        return session.scalar(
            select(cls).where(cls.leaderboard_id == leaderboard_id.upper())
        )

    def assign_leaderboard_id(self, session: Session, desired: Optional[str]) -> str:
        """Give this user a unique leaderboard id derived from ``desired``."""

        self.leaderboard_id = generate_unique_leaderboard_id(desired, session)
        return self.leaderboard_id

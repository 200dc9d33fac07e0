"""Utility helpers for the models package."""

from __future__ import annotations

import re
from typing import Optional

from sqlalchemy.orm import Session

_NON_DIGITS = re.compile(r"[^0-9]")
_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")

DEFAULT_LEADERBOARD_ID = "AAA"


def normalize_wa_number(wa_number: str) -> str:
    """Return the digits-only form of a WhatsApp number.

    This is the stable player identity used when grouping entries and
    recording draw winners, so ``"+27 82-555 0101"`` and ``"27825550101"``
    refer to the same player.
    """
    if wa_number is None:
        raise ValueError("wa_number must not be None")
    if not isinstance(wa_number, str):
        raise TypeError("wa_number must be a string")
    normalized = _NON_DIGITS.sub("", wa_number)
    if not normalized:
        raise ValueError("wa_number must contain at least one digit")
    return normalized


def normalize_leaderboard_id(value: Optional[str]) -> str:
    """Strip everything but ASCII letters and digits and upper-case the rest."""
    if not value:
        return ""
    return _NON_ALNUM.sub("", value).upper()


def generate_unique_leaderboard_id(
    desired: Optional[str],
    session: Optional[Session] = None,
    max_attempts: int = 10_000,
) -> str:
    """Return a leaderboard id based on ``desired`` that no user holds yet.

    The desired text is normalized first (falling back to ``"AAA"`` when
    nothing usable is left). When a session is provided, numeric suffixes
    ``1``, ``2``, ... are appended until the candidate is free among both
    persisted and pending users.
    """

    base = normalize_leaderboard_id(desired) or DEFAULT_LEADERBOARD_ID
    if session is None:
        return base

    from sqlalchemy import select
    from .user import User

    pending = {
        obj.leaderboard_id
        for obj in session.new
        if isinstance(obj, User) and obj.leaderboard_id is not None
    }

    def _taken(candidate: str) -> bool:
        if candidate in pending:
            return True
        exists = session.scalar(
            select(User.id).where(User.leaderboard_id == candidate)
        )
        return exists is not None

    if not _taken(base):
        return base

    for suffix in range(1, max_attempts + 1):
        candidate = f"{base}{suffix}"
        if not _taken(candidate):
            return candidate

    raise RuntimeError(
        "Unable to generate a unique leaderboard identifier after multiple attempts"
    )

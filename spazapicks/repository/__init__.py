"""Persistence layer used by the scoring and draw subsystems.

The SQLAlchemy implementation is imported from :mod:`spazapicks.repository.sql`.
"""

from .base import (
    DrawRecord,
    EntryRecord,
    MatchRecord,
    PickRecord,
    PlayerTickets,
    WeekRepository,
)

__all__ = [
    "DrawRecord",
    "EntryRecord",
    "MatchRecord",
    "PickRecord",
    "PlayerTickets",
    "WeekRepository",
]

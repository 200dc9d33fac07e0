from .base import Base

# import models so Alembic/autoloaders can discover mappers
from .user import User  # noqa: F401
from .match import Match  # noqa: F401
from .entry import Entry, EntryPick  # noqa: F401
from .prize_draw import PrizeDraw  # noqa: F401

__all__ = [
    "Base",
    "User",
    "Match",
    "Entry",
    "EntryPick",
    "PrizeDraw",
]

from sqlalchemy.orm import DeclarativeBase
from spazapicks.db.metadata import metadata_obj


class Base(DeclarativeBase):
    """Declarative base for users, matches, entries and draw records."""

    metadata = metadata_obj

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .utils import resolve_sqlite_url

load_dotenv()
# Repo root; relative sqlite paths in DB_URL are resolved against it
ROOT_DIR = Path(__file__).resolve().parents[2]
DEFAULT_SQLITE_URL = resolve_sqlite_url(
    os.getenv("DB_URL", "sqlite:///./spazapicks.db"), ROOT_DIR
)


def _echo_from_env() -> bool:
    return os.getenv("DB_ECHO", "").strip().lower() in {"1", "true", "yes", "on"}


def make_engine(database_url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """Create the engine for ``database_url`` (``DB_URL`` when omitted).

    ``echo`` falls back to the ``DB_ECHO`` environment flag. SQLite
    connections get foreign keys switched on, and in-memory databases share
    one connection so every session sees the same tables.
    """
    url = database_url or DEFAULT_SQLITE_URL
    kwargs = {}
    if url.startswith("sqlite") and ":memory:" in url:
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}

    engine = create_engine(
        url,
        echo=_echo_from_env() if echo is None else echo,
        future=True,
        **kwargs,
    )
    if url.startswith("sqlite"):
        # entry picks cascade with their entry and match
        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def get_sessionmaker(engine: Engine) -> sessionmaker[Session]:
    # Keep scored entries and draw records readable after commit
    return sessionmaker(bind=engine, expire_on_commit=False, future=True)

from __future__ import annotations

from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import func, inspect, select

from spazapicks.db.engine import get_sessionmaker, make_engine
from spazapicks.models import Entry, Match, PrizeDraw, User


def upgrade_db(target_revision: str = "head") -> None:
    """Apply Alembic migrations up to the requested revision."""
    project_root = Path(__file__).resolve().parents[1]
    alembic_cfg = Config(str(project_root / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(project_root / "alembic"))
    command.upgrade(alembic_cfg, target_revision)


def report(engine) -> None:
    """Print the migrated tables and how many rows the game tables hold."""
    tables = sorted(inspect(engine).get_table_names())
    print("Tables:", ", ".join(tables))

    Session = get_sessionmaker(engine)
    with Session() as session:
        for model in (User, Match, Entry, PrizeDraw):
            count = session.scalar(select(func.count()).select_from(model))
            print(f"  {model.__tablename__}: {count} row(s)")


def main() -> None:
    upgrade_db()
    report(make_engine())


if __name__ == "__main__":
    main()

from __future__ import annotations

import sys

from alembic.autogenerate import api as ag_api
from alembic.runtime.migration import MigrationContext

from spazapicks.db.engine import make_engine
from spazapicks.models import Base


def _describe(ops, indent: int = 0) -> list[str]:
    lines = []
    for op in ops:
        lines.append(f"{'  ' * indent}- {op}")
        lines.extend(_describe(getattr(op, "ops", None) or [], indent + 1))
    return lines


def main() -> int:
    """Compare the migrated schema with the spazapicks models.

    Exits 0 when the migrations match the models, 1 when a new revision is
    needed and 2 when the database could not be inspected.
    """
    engine = make_engine()
    target = engine.url.render_as_string(hide_password=True)
    try:
        with engine.connect() as connection:
            context = MigrationContext.configure(
                connection=connection,
                opts={
                    "compare_type": True,
                    "render_as_batch": connection.dialect.name == "sqlite",
                },
            )
            upgrade_ops = ag_api.produce_migrations(context, Base.metadata).upgrade_ops
    except Exception as exc:
        print(f"Cannot inspect {target}: {exc}", file=sys.stderr)
        return 2

    if upgrade_ops is None or upgrade_ops.is_empty():
        print(f"{target}: migrations match the models.")
        return 0

    print(f"{target}: models differ from the migrated schema; add a revision:")
    print("\n".join(_describe(upgrade_ops.ops or [])))
    return 1


if __name__ == "__main__":
    raise SystemExit(main())

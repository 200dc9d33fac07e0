"""initial schema: users, matches, entries, entry picks, prize draws

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-01-26 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "0001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("wa_number", sa.String(length=32), nullable=False),
        sa.Column("state", sa.String(length=32), nullable=False),
        sa.Column("home_sid", sa.String(length=64), nullable=True),
        sa.Column("first_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=True),
        sa.Column("leaderboard_id", sa.String(length=64), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="users_pkey"),
        sa.UniqueConstraint("wa_number", name="users_wa_number_key"),
        sa.UniqueConstraint("leaderboard_id", name="users_leaderboard_id_key"),
    )
    op.create_index("users_state_idx", "users", ["state"], unique=False)

    op.create_table(
        "matches",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("week_id", sa.String(length=16), nullable=False),
        sa.Column("home_team", sa.String(length=100), nullable=False),
        sa.Column("away_team", sa.String(length=100), nullable=False),
        sa.Column("kickoff_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("home_score", sa.Integer(), nullable=True),
        sa.Column("away_score", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="matches_pkey"),
    )
    op.create_index("matches_week_id_idx", "matches", ["week_id"], unique=False)
    op.create_index("matches_kickoff_at_idx", "matches", ["kickoff_at"], unique=False)

    op.create_table(
        "entries",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("wa_number", sa.String(length=32), nullable=False),
        sa.Column("week_id", sa.String(length=16), nullable=False),
        sa.Column("link_token", sa.String(length=128), nullable=False),
        sa.Column("correct_picks", sa.Integer(), nullable=True),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("scored_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="entries_pkey"),
        sa.UniqueConstraint("link_token", name="entries_link_token_uq"),
    )
    op.create_index(
        "entries_wa_week_idx", "entries", ["wa_number", "week_id"], unique=False
    )
    op.create_index("entries_points_idx", "entries", ["points"], unique=False)

    op.create_table(
        "entry_picks",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("entry_id", sa.Integer(), nullable=False),
        sa.Column("match_id", sa.Integer(), nullable=False),
        sa.Column("pick", sa.Enum("H", "D", "A", name="pick_outcome", native_enum=False, length=1), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["entry_id"],
            ["entries.id"],
            name="entry_picks_entry_id_fkey",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["match_id"],
            ["matches.id"],
            name="entry_picks_match_id_fkey",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="entry_picks_pkey"),
        sa.UniqueConstraint(
            "entry_id", "match_id", name="entry_picks_entry_match_uq"
        ),
    )
    op.create_index(
        "ix_entry_picks_entry_id", "entry_picks", ["entry_id"], unique=False
    )
    op.create_index(
        "ix_entry_picks_match_id", "entry_picks", ["match_id"], unique=False
    )

    op.create_table(
        "prize_draws",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("week_id", sa.String(length=16), nullable=False),
        sa.Column("wa_number", sa.String(length=32), nullable=False),
        sa.Column("prize_code", sa.String(length=255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("tickets_held", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="prize_draws_pkey"),
    )
    op.create_index("prize_draws_week_id_idx", "prize_draws", ["week_id"], unique=False)
    op.create_index(
        "prize_draws_wa_number_idx", "prize_draws", ["wa_number"], unique=False
    )


def downgrade() -> None:
    op.drop_index("prize_draws_wa_number_idx", table_name="prize_draws")
    op.drop_index("prize_draws_week_id_idx", table_name="prize_draws")
    op.drop_table("prize_draws")
    op.drop_index("ix_entry_picks_match_id", table_name="entry_picks")
    op.drop_index("ix_entry_picks_entry_id", table_name="entry_picks")
    op.drop_table("entry_picks")
    op.drop_index("entries_points_idx", table_name="entries")
    op.drop_index("entries_wa_week_idx", table_name="entries")
    op.drop_table("entries")
    op.drop_index("matches_kickoff_at_idx", table_name="matches")
    op.drop_index("matches_week_id_idx", table_name="matches")
    op.drop_table("matches")
    op.drop_index("users_state_idx", table_name="users")
    op.drop_table("users")

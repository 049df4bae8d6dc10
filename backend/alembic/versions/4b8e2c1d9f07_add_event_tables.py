"""add users, events, participants, stages and player statistics

Revision ID: 4b8e2c1d9f07
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ENUM

from alembic import op

# revision identifiers, used by Alembic.
revision: str | None = "4b8e2c1d9f07"
down_revision: str | None = None
branch_labels: str | None = None
depends_on: str | None = None

account_type_enum = ENUM("PLAYER", "STORE", "ADMIN", name="account_type", create_type=False)
event_format_enum = ENUM(
    "CONSTRUCTED",
    "LIMITED",
    "CHAMPIONSHIP",
    "CASUAL",
    "STANDARD",
    name="event_format",
    create_type=False,
)
event_status_enum = ENUM(
    "UPCOMING", "ONGOING", "COMPLETED", "CANCELLED", name="event_status", create_type=False
)


def upgrade() -> None:
    account_type_enum.create(op.get_bind(), checkfirst=True)
    event_format_enum.create(op.get_bind(), checkfirst=True)
    event_status_enum.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("created", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("membership_id", sa.String(), nullable=True),
        sa.Column("avatar_url", sa.String(), nullable=True),
        sa.Column("store_name", sa.String(), nullable=True),
        sa.Column("account_type", account_type_enum, server_default="PLAYER", nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "events",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("store_id", sa.BigInteger(), nullable=False),
        sa.Column("store_name", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), server_default="", nullable=False),
        sa.Column("format", event_format_enum, server_default="CONSTRUCTED", nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("max_participants", sa.Integer(), nullable=True),
        sa.Column("entry_fee", sa.Float(), nullable=True),
        sa.Column("prize_pool", sa.String(), server_default="", nullable=False),
        sa.Column("location_address", sa.String(), server_default="", nullable=False),
        sa.Column("location_city", sa.String(), server_default="", nullable=False),
        sa.Column("location_state", sa.String(), server_default="", nullable=False),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("standings", sa.JSON(), server_default="[]", nullable=False),
        sa.Column("current_stage", sa.Integer(), server_default="0", nullable=False),
        sa.Column("status", event_status_enum, server_default="UPCOMING", nullable=False),
        sa.Column("created", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["store_id"], ["users.id"], name="events_store_id_fkey", ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_events_id"), "events", ["id"], unique=False)
    op.create_index(op.f("ix_events_name"), "events", ["name"], unique=False)
    op.create_index(op.f("ix_events_status"), "events", ["status"], unique=False)
    op.create_index(op.f("ix_events_store_id"), "events", ["store_id"], unique=False)

    op.create_table(
        "event_participants",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("event_id", sa.BigInteger(), nullable=False),
        sa.Column("player_id", sa.BigInteger(), nullable=False),
        sa.Column("player_name", sa.String(), nullable=False),
        sa.Column("membership_id", sa.String(), nullable=True),
        sa.Column("deck_name", sa.String(), nullable=True),
        sa.Column(
            "registered_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
        sa.Column("dropped", sa.Boolean(), server_default="f", nullable=False),
        sa.ForeignKeyConstraint(
            ["event_id"], ["events.id"], name="event_participants_event_id_fkey", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["player_id"], ["users.id"], name="event_participants_player_id_fkey", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("event_id", "player_id", name="uq_event_participants_event_id_player_id"),
    )
    op.create_index(op.f("ix_event_participants_id"), "event_participants", ["id"], unique=False)
    op.create_index(
        op.f("ix_event_participants_event_id"), "event_participants", ["event_id"], unique=False
    )
    op.create_index(
        op.f("ix_event_participants_player_id"), "event_participants", ["player_id"], unique=False
    )

    op.create_table(
        "event_stages",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("event_id", sa.BigInteger(), nullable=False),
        sa.Column("stage_number", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_completed", sa.Boolean(), server_default="f", nullable=False),
        sa.Column("standings", sa.JSON(), server_default="[]", nullable=False),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("event_id", "stage_number", name="uq_event_stages_event_id_stage_number"),
    )
    op.create_index(op.f("ix_event_stages_id"), "event_stages", ["id"], unique=False)
    op.create_index(op.f("ix_event_stages_event_id"), "event_stages", ["event_id"], unique=False)

    op.create_table(
        "player_statistics",
        sa.Column("player_id", sa.BigInteger(), nullable=False),
        sa.Column("events_joined", sa.Integer(), server_default="0", nullable=False),
        sa.Column("events_completed", sa.Integer(), server_default="0", nullable=False),
        sa.Column("stages_played", sa.Integer(), server_default="0", nullable=False),
        sa.Column("total_points", sa.Integer(), server_default="0", nullable=False),
        sa.Column("wins", sa.Integer(), server_default="0", nullable=False),
        sa.Column("losses", sa.Integer(), server_default="0", nullable=False),
        sa.Column("win_percentage", sa.Float(), server_default="0", nullable=False),
        sa.Column("best_cumulative_rank", sa.Integer(), nullable=True),
        sa.Column("best_stage_rank", sa.Integer(), nullable=True),
        sa.Column("updated", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["player_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("player_id"),
    )


def downgrade() -> None:
    op.drop_table("player_statistics")
    op.drop_table("event_stages")
    op.drop_table("event_participants")
    op.drop_table("events")
    op.drop_table("users")
    event_status_enum.drop(op.get_bind(), checkfirst=True)
    event_format_enum.drop(op.get_bind(), checkfirst=True)
    account_type_enum.drop(op.get_bind(), checkfirst=True)

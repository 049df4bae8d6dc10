from sqlalchemy import Column, ForeignKey, Integer, String, Table, UniqueConstraint, func
from sqlalchemy.orm import declarative_base  # type: ignore[attr-defined]
from sqlalchemy.sql.sqltypes import JSON, BigInteger, Boolean, DateTime, Enum, Float, Text

Base = declarative_base()
metadata = Base.metadata
DateTimeTZ = DateTime(timezone=True)

users = Table(
    "users",
    metadata,
    Column("id", BigInteger, primary_key=True, index=True, autoincrement=True),
    Column("email", String, nullable=False, index=True, unique=True),
    Column("name", String, nullable=False),
    Column("created", DateTimeTZ, nullable=False, server_default=func.now()),
    Column("membership_id", String, nullable=True),
    Column("avatar_url", String, nullable=True),
    Column("store_name", String, nullable=True),
    Column(
        "account_type",
        Enum(
            "PLAYER",
            "STORE",
            "ADMIN",
            name="account_type",
        ),
        nullable=False,
        server_default="PLAYER",
    ),
)

events = Table(
    "events",
    metadata,
    Column("id", BigInteger, primary_key=True, index=True, autoincrement=True),
    Column("store_id", BigInteger, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False),
    Column("store_name", String, nullable=False),
    Column("name", String, nullable=False, index=True),
    Column("description", Text, nullable=False, server_default=""),
    Column(
        "format",
        Enum(
            "CONSTRUCTED",
            "LIMITED",
            "CHAMPIONSHIP",
            "CASUAL",
            "STANDARD",
            name="event_format",
        ),
        nullable=False,
        server_default="CONSTRUCTED",
    ),
    Column("start_time", DateTimeTZ, nullable=False),
    Column("end_time", DateTimeTZ, nullable=False),
    Column("max_participants", Integer, nullable=True),
    Column("entry_fee", Float, nullable=True),
    Column("prize_pool", String, nullable=False, server_default=""),
    Column("location_address", String, nullable=False, server_default=""),
    Column("location_city", String, nullable=False, server_default=""),
    Column("location_state", String, nullable=False, server_default=""),
    Column("latitude", Float, nullable=True),
    Column("longitude", Float, nullable=True),
    Column("standings", JSON, nullable=False, server_default="[]"),
    Column("current_stage", Integer, nullable=False, server_default="0"),
    Column(
        "status",
        Enum(
            "UPCOMING",
            "ONGOING",
            "COMPLETED",
            "CANCELLED",
            name="event_status",
        ),
        nullable=False,
        server_default="UPCOMING",
        index=True,
    ),
    Column("created", DateTimeTZ, nullable=False, server_default=func.now()),
    Column("updated", DateTimeTZ, nullable=False, server_default=func.now()),
)

event_participants = Table(
    "event_participants",
    metadata,
    Column("id", BigInteger, primary_key=True, index=True, autoincrement=True),
    Column("event_id", BigInteger, ForeignKey("events.id", ondelete="CASCADE"), index=True, nullable=False),
    Column("player_id", BigInteger, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False),
    Column("player_name", String, nullable=False),
    Column("membership_id", String, nullable=True),
    Column("deck_name", String, nullable=True),
    Column("registered_at", DateTimeTZ, nullable=False, server_default=func.now()),
    Column("dropped", Boolean, nullable=False, server_default="f"),
    UniqueConstraint("event_id", "player_id", name="uq_event_participants_event_id_player_id"),
)

event_stages = Table(
    "event_stages",
    metadata,
    Column("id", BigInteger, primary_key=True, index=True, autoincrement=True),
    Column("event_id", BigInteger, ForeignKey("events.id", ondelete="CASCADE"), index=True, nullable=False),
    Column("stage_number", Integer, nullable=False),
    Column("name", String, nullable=False),
    Column("date", DateTimeTZ, nullable=False),
    Column("is_completed", Boolean, nullable=False, server_default="f"),
    Column("standings", JSON, nullable=False, server_default="[]"),
    UniqueConstraint("event_id", "stage_number", name="uq_event_stages_event_id_stage_number"),
)

player_statistics = Table(
    "player_statistics",
    metadata,
    Column("player_id", BigInteger, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("events_joined", Integer, nullable=False, server_default="0"),
    Column("events_completed", Integer, nullable=False, server_default="0"),
    Column("stages_played", Integer, nullable=False, server_default="0"),
    Column("total_points", Integer, nullable=False, server_default="0"),
    Column("wins", Integer, nullable=False, server_default="0"),
    Column("losses", Integer, nullable=False, server_default="0"),
    Column("win_percentage", Float, nullable=False, server_default="0"),
    Column("best_cumulative_rank", Integer, nullable=True),
    Column("best_stage_rank", Integer, nullable=True),
    Column("updated", DateTimeTZ, nullable=False, server_default=func.now()),
)

decks = Table(
    "decks",
    metadata,
    Column("id", BigInteger, primary_key=True, index=True, autoincrement=True),
    Column("user_id", BigInteger, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False),
    Column("name", String, nullable=False),
    Column("format", String, nullable=False, server_default="Standard"),
    Column("leader_card_id", String, nullable=True),
    Column("leader_name", String, nullable=True),
    Column("cards", JSON, nullable=False, server_default="[]"),
    Column("is_public", Boolean, nullable=False, server_default="f"),
    Column("created", DateTimeTZ, nullable=False, server_default=func.now()),
    Column("updated", DateTimeTZ, nullable=False, server_default=func.now()),
)

news_articles = Table(
    "news_articles",
    metadata,
    Column("id", BigInteger, primary_key=True, index=True, autoincrement=True),
    Column("title", String, nullable=False),
    Column("excerpt", Text, nullable=False, server_default=""),
    Column("content", Text, nullable=False, server_default=""),
    Column("image_url", String, nullable=True),
    Column("author", String, nullable=False, server_default=""),
    Column("published_at", DateTimeTZ, nullable=False, index=True),
    Column("source", String, nullable=False, server_default=""),
    Column("source_url", String, nullable=False, server_default=""),
    Column("category", String, nullable=False, server_default="General", index=True),
    Column("tags", JSON, nullable=False, server_default="[]"),
    Column("is_official", Boolean, nullable=False, server_default="f"),
)

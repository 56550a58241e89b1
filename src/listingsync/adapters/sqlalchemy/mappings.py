"""SQLAlchemy table metadata for persisted listing collections."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Dialect,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    TypeDecorator,
    UniqueConstraint,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

metadata = MetaData()


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


listing_table = Table(
    "listing",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("collection", String, nullable=False),
    Column("position", Integer, nullable=False),
    Column("unique_id", String, nullable=False),
    Column("status", String, nullable=False),
    Column("agent_name", String, nullable=True),
    Column("mod_time", UTCDateTime(), nullable=True),
    Column("attributes", JSON, nullable=False, default=dict),
    UniqueConstraint("collection", "unique_id"),
    Index("ix_listing_collection_position", "collection", "position"),
)


def create_all_tables(engine: Engine) -> None:
    metadata.create_all(engine)

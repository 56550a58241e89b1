"""SQLAlchemy adapter package for listingsync."""

from __future__ import annotations

from .mappings import create_all_tables, listing_table, metadata
from .repositories import SqlAlchemyCollectionStore
from .unit_of_work import (
    SqlAlchemyListingUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyCollectionStore",
    "SqlAlchemyListingUnitOfWork",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "listing_table",
    "metadata",
    "shutdown",
    "startup",
]

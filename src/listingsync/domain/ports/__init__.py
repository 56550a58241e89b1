"""Domain port definitions for adapters."""

from __future__ import annotations

from .archiving import Archiver
from .feed import FeedDocument, FeedParseError, FeedParser, RawRecord
from .persistence import CollectionStore
from .publishing import Publisher, RebuildTrigger
from .unit_of_work import ListingRepositories, ListingUnitOfWork

__all__ = [
    "Archiver",
    "CollectionStore",
    "FeedDocument",
    "FeedParseError",
    "FeedParser",
    "ListingRepositories",
    "ListingUnitOfWork",
    "Publisher",
    "RawRecord",
    "RebuildTrigger",
]

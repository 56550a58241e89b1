"""Domain model for listing reconciliation."""

from __future__ import annotations

from .collection import CURRENT_COLLECTION, SOLD_COLLECTION, ListingCollection
from .listing import Listing, ListingStatus

__all__ = [
    "CURRENT_COLLECTION",
    "SOLD_COLLECTION",
    "Listing",
    "ListingCollection",
    "ListingStatus",
]

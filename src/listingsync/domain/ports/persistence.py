"""Ports for persisting listing collections."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from listingsync.domain.model import ListingCollection


@runtime_checkable
class CollectionStore(Protocol):
    """Durable storage for named listing collections."""

    def load(self, name: str) -> ListingCollection: ...

    def save(self, name: str, collection: ListingCollection) -> None: ...

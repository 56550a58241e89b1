"""Ordered, id-keyed listing collections."""

from __future__ import annotations

from typing import TYPE_CHECKING

from listingsync.domain.errors import DuplicateListingError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from .listing import Listing

CURRENT_COLLECTION = "current"
SOLD_COLLECTION = "sold"


class ListingCollection:
    """Insertion-ordered set of listings keyed by ``unique_id``."""

    def __init__(self, name: str, listings: Iterable[Listing] = ()) -> None:
        self.name = name
        self._items: dict[str, Listing] = {}
        for listing in listings:
            self.insert(listing)

    def get(self, unique_id: str) -> Listing | None:
        return self._items.get(unique_id)

    def insert(self, listing: Listing) -> None:
        if listing.unique_id in self._items:
            raise DuplicateListingError(self.name, listing.unique_id)
        self._items[listing.unique_id] = listing

    def remove(self, unique_id: str) -> Listing | None:
        """Remove ``unique_id`` if present; absent ids are a no-op."""

        return self._items.pop(unique_id, None)

    def listings(self) -> tuple[Listing, ...]:
        return tuple(self._items.values())

    def ids(self) -> tuple[str, ...]:
        return tuple(self._items)

    def __contains__(self, unique_id: object) -> bool:
        return unique_id in self._items

    def __iter__(self) -> Iterator[Listing]:
        return iter(tuple(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"ListingCollection(name={self.name!r}, size={len(self)})"

"""Bounded retention for the sold collection."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from listingsync.domain.model import Listing, ListingCollection

DEFAULT_SOLD_LIMIT: Final[int] = 3

_OLDEST: Final[datetime] = datetime.min.replace(tzinfo=UTC)

log = getLogger(__name__)


def eviction_key(listing: Listing) -> tuple[bool, datetime, str]:
    """Total order for eviction: missing modTime first, then oldest, then by id."""

    return (listing.mod_time is not None, listing.mod_time or _OLDEST, listing.unique_id)


@dataclass(frozen=True, slots=True)
class SoldRetentionPolicy:
    limit: int = DEFAULT_SOLD_LIMIT

    def __post_init__(self) -> None:
        if self.limit < 0:
            raise ValueError(f"Sold limit must be non-negative, got {self.limit}")

    def enforce(self, sold: ListingCollection) -> list[Listing]:
        """Evict the oldest entries until ``sold`` is back within the limit."""

        evicted: list[Listing] = []
        while len(sold) > self.limit:
            oldest = min(sold, key=eviction_key)
            sold.remove(oldest.unique_id)
            evicted.append(oldest)
            log.debug(
                "Evicted sold listing %s (modTime=%s)", oldest.unique_id, oldest.mod_time
            )
        return evicted

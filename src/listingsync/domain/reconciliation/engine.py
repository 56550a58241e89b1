"""Per-listing reconciliation of the current and sold collections.

Decision table, evaluated in order:

- ``sold``: drop from current, replace in sold, then enforce sold retention.
- anything other than ``sold``/``current``: drop from current, insert nowhere.
- ``current``: drop the stale entry from current and any sold entry, then insert
  the fresh one into current.

Removal always precedes insertion so an id is never present twice, and an
absent id is never an error.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from listingsync.domain.errors import ValidationError
from listingsync.domain.model import ListingStatus

from .retention import SoldRetentionPolicy

if TYPE_CHECKING:
    from listingsync.domain.model import Listing, ListingCollection

log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationOutcome:
    """What happened to the collections for one listing."""

    unique_id: str
    action: ListingStatus
    was_current: bool = False
    evicted: list[Listing] = field(default_factory=list["Listing"])


@dataclass(slots=True)
class ReconciliationEngine:
    """Apply listings one at a time to a current/sold pair."""

    retention: SoldRetentionPolicy = field(default_factory=SoldRetentionPolicy)

    def reconcile(
        self,
        listing: Listing,
        *,
        current: ListingCollection,
        sold: ListingCollection,
    ) -> ReconciliationOutcome:
        if not listing.unique_id or not listing.unique_id.strip():
            raise ValidationError("Listing has no uniqueID")

        action = listing.kind
        was_current = current.remove(listing.unique_id) is not None
        outcome = ReconciliationOutcome(
            unique_id=listing.unique_id,
            action=action,
            was_current=was_current,
        )

        if action is ListingStatus.SOLD:
            sold.remove(listing.unique_id)
            sold.insert(listing)
            outcome.evicted = self.retention.enforce(sold)
        elif action is ListingStatus.CURRENT:
            sold.remove(listing.unique_id)
            current.insert(listing)

        log.debug(
            "Reconciled %s: status=%r action=%s was_current=%s",
            listing.unique_id,
            listing.status,
            action,
            was_current,
        )
        return outcome

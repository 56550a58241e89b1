"""Ports for republishing reconciled collections."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from listingsync.domain.model import ListingCollection


@runtime_checkable
class Publisher(Protocol):
    """Push the final current/sold collections to an external target."""

    def __call__(self, current: ListingCollection, sold: ListingCollection) -> None: ...


@runtime_checkable
class RebuildTrigger(Protocol):
    """Notify a downstream site that freshly published data is available."""

    def __call__(self) -> bool: ...

"""Unit-of-work abstractions for coordinating collection stores."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from listingsync.domain.ports.persistence import CollectionStore


@dataclass(slots=True)
class ListingRepositories:
    """Stores required to reconcile a batch."""

    collections: CollectionStore


@runtime_checkable
class ListingUnitOfWork(Protocol):
    """Transaction boundary around the listing stores."""

    @property
    def repositories(self) -> ListingRepositories: ...

    def __enter__(self) -> ListingUnitOfWork: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...

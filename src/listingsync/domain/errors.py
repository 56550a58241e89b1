"""Domain error hierarchy for listing reconciliation."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from listingsync.domain.data_integration import BatchResult


class ReconciliationError(ValueError):
    """Base class for per-record failures raised by the reconciliation core."""


class ShapeError(ReconciliationError):
    """Raised when a feed field expected to be scalar is not a single-element wrapper."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field


class ValidationError(ReconciliationError):
    """Raised when a normalized listing is missing required identity data."""


class DuplicateListingError(ReconciliationError):
    """Raised when inserting an id that is already present in a collection."""

    def __init__(self, collection: str, unique_id: str) -> None:
        super().__init__(f"Listing {unique_id!r} already present in {collection!r}")
        self.collection = collection
        self.unique_id = unique_id


class BatchAbortedError(RuntimeError):
    """Raised under the fail-fast policy when a record in the batch fails."""

    def __init__(self, message: str, *, result: BatchResult) -> None:
        super().__init__(message)
        self.result = result

from __future__ import annotations

import pytest

from listingsync.domain.errors import DuplicateListingError
from listingsync.domain.model import ListingCollection, ListingStatus
from tests.helpers.listings import make_listing


def test_collection_preserves_insertion_order() -> None:
    collection = ListingCollection("current", [make_listing("b"), make_listing("a")])
    collection.insert(make_listing("c"))

    assert collection.ids() == ("b", "a", "c")
    assert [listing.unique_id for listing in collection] == ["b", "a", "c"]
    assert len(collection) == 3


def test_insert_rejects_duplicate_ids() -> None:
    collection = ListingCollection("sold", [make_listing("x")])

    with pytest.raises(DuplicateListingError) as excinfo:
        collection.insert(make_listing("x", "sold"))

    assert excinfo.value.collection == "sold"
    assert excinfo.value.unique_id == "x"


def test_remove_returns_listing_and_is_idempotent() -> None:
    listing = make_listing("x")
    collection = ListingCollection("current", [listing])

    assert collection.remove("x") is listing
    assert "x" not in collection
    assert collection.remove("x") is None
    assert collection.remove("never-seen") is None


def test_iteration_is_safe_while_mutating() -> None:
    collection = ListingCollection("current", [make_listing("a"), make_listing("b")])

    for listing in collection:
        collection.remove(listing.unique_id)

    assert len(collection) == 0


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        ("current", ListingStatus.CURRENT),
        ("sold", ListingStatus.SOLD),
        ("withdrawn", ListingStatus.REMOVED),
        ("offmarket", ListingStatus.REMOVED),
        ("Sold", ListingStatus.REMOVED),
        ("", ListingStatus.REMOVED),
        (None, ListingStatus.REMOVED),
    ],
)
def test_status_classification(status: str | None, expected: ListingStatus) -> None:
    assert ListingStatus.classify(status) is expected

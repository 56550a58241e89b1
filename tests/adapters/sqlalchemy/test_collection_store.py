from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from listingsync.adapters.sqlalchemy import SqlAlchemyCollectionStore
from listingsync.domain.model import ListingCollection
from tests.helpers.listings import make_listing

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


def test_store_round_trips_order_and_fields(sqlite_engine: Engine) -> None:
    nested = {"$": {"display": "yes"}, "_": "500000"}
    collection = ListingCollection(
        "current",
        [
            make_listing("b", step=2, price=nested),
            replace(make_listing("a", agent_name=None), mod_time=None),
        ],
    )

    with Session(sqlite_engine) as session:
        SqlAlchemyCollectionStore(session).save("current", collection)
        session.commit()

    with Session(sqlite_engine) as session:
        loaded = SqlAlchemyCollectionStore(session).load("current")

    assert loaded.name == "current"
    assert loaded.listings() == collection.listings()


def test_save_replaces_previous_contents(sqlite_engine: Engine) -> None:
    with Session(sqlite_engine) as session:
        store = SqlAlchemyCollectionStore(session)
        store.save("sold", ListingCollection("sold", [make_listing("x", "sold")]))
        store.save("sold", ListingCollection("sold", [make_listing("y", "sold")]))
        session.commit()

        assert store.load("sold").ids() == ("y",)


def test_collections_are_isolated_by_name(sqlite_engine: Engine) -> None:
    with Session(sqlite_engine) as session:
        store = SqlAlchemyCollectionStore(session)
        store.save("current", ListingCollection("current", [make_listing("x")]))
        store.save("sold", ListingCollection("sold", [make_listing("x", "sold")]))
        store.save("current", ListingCollection("current"))
        session.commit()

        assert len(store.load("current")) == 0
        assert store.load("sold").ids() == ("x",)


def test_load_unknown_collection_is_empty(sqlite_engine: Engine) -> None:
    with Session(sqlite_engine) as session:
        assert len(SqlAlchemyCollectionStore(session).load("current")) == 0

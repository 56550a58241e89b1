from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from listingsync.adapters.sqlalchemy.mappings import create_all_tables
from listingsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyListingUnitOfWork,
    shutdown,
    startup,
)
from listingsync.domain.model import CURRENT_COLLECTION, SOLD_COLLECTION, ListingCollection

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyListingUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyListingUnitOfWork:
        return SqlAlchemyListingUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()


@pytest.fixture
def current() -> ListingCollection:
    return ListingCollection(CURRENT_COLLECTION)


@pytest.fixture
def sold() -> ListingCollection:
    return ListingCollection(SOLD_COLLECTION)

"""Collection store implementation backed by SQLAlchemy sessions."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import delete, insert, select

from listingsync.adapters.sqlalchemy.mappings import listing_table
from listingsync.domain.model import Listing, ListingCollection

if TYPE_CHECKING:
    from sqlalchemy.engine import Row
    from sqlalchemy.orm import Session

log = getLogger(__name__)


class SqlAlchemyCollectionStore:
    def __init__(self, session: Session) -> None:
        self.session = session

    def load(self, name: str) -> ListingCollection:
        stmt = (
            select(listing_table)
            .where(listing_table.c.collection == name)
            .order_by(listing_table.c.position)
        )
        rows = self.session.execute(stmt).all()
        collection = ListingCollection(name, (self._to_listing(row) for row in rows))
        log.debug(f"Loaded {len(collection)} listings into {name!r}")
        return collection

    def save(self, name: str, collection: ListingCollection) -> None:
        """Replace the stored contents of ``name`` with ``collection``, keeping order."""

        self.session.execute(delete(listing_table).where(listing_table.c.collection == name))
        rows = [
            {
                "collection": name,
                "position": position,
                "unique_id": listing.unique_id,
                "status": listing.status,
                "agent_name": listing.agent_name,
                "mod_time": listing.mod_time,
                "attributes": dict(listing.attributes),
            }
            for position, listing in enumerate(collection)
        ]
        if rows:
            self.session.execute(insert(listing_table), rows)
        log.debug(f"Saved {len(rows)} listings from {name!r}")

    @staticmethod
    def _to_listing(row: Row[Any]) -> Listing:
        mapping = row._mapping  # noqa: SLF001
        return Listing(
            unique_id=mapping["unique_id"],
            status=mapping["status"],
            agent_name=mapping["agent_name"],
            mod_time=mapping["mod_time"],
            attributes=cast("dict[str, Any]", mapping["attributes"] or {}),
        )


if TYPE_CHECKING:
    from listingsync.domain.ports.persistence import CollectionStore

    _session_stub = cast("Session", object())
    _store_check: CollectionStore = SqlAlchemyCollectionStore(_session_stub)

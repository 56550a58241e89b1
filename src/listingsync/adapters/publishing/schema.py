"""Pydantic models describing the published listing JSON."""

from __future__ import annotations

import json
from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

if TYPE_CHECKING:
    from collections.abc import Iterable

    from listingsync.domain.model import Listing


class PublishedListing(BaseModel):
    """One listing as written to the site repository; field order is the JSON order."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    unique_id: str = Field(alias="uniqueID")
    status: str
    agent_name: str | None = Field(default=None, alias="agentName")
    mod_time: datetime | None = Field(default=None, alias="modTime")
    attributes: dict[str, Any] = Field(default_factory=dict)

    @field_validator("unique_id", mode="before")
    @classmethod
    def _normalize_unique_id(cls, value: object) -> object:
        if isinstance(value, list | tuple) and len(value) == 1:
            value = value[0]
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @classmethod
    def from_listing(cls, listing: Listing) -> PublishedListing:
        return cls(
            unique_id=listing.unique_id,
            status=listing.status,
            agent_name=listing.agent_name,
            mod_time=listing.mod_time,
            attributes=dict(listing.attributes),
        )


_PUBLISHED_LIST = TypeAdapter(list[PublishedListing])


def serialize_listings(listings: Iterable[Listing]) -> str:
    """Render listings as stable, indented JSON in collection order."""

    published = [PublishedListing.from_listing(listing) for listing in listings]
    payload = _PUBLISHED_LIST.dump_python(published, mode="json", by_alias=True)
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def parse_published(text: str) -> list[PublishedListing]:
    return _PUBLISHED_LIST.validate_json(text)

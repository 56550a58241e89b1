"""Builders for listings and xml2js-shaped raw feed records."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from listingsync.domain.model import Listing
from listingsync.domain.ports import FeedDocument

AGENT = "Therese Plath"
BASE_TIME = datetime(2017, 1, 1, 12, 0, tzinfo=UTC)


def mod_time(step: int) -> datetime:
    return BASE_TIME + timedelta(minutes=step)


def make_listing(
    unique_id: str,
    status: str = "current",
    *,
    step: int = 0,
    agent_name: str | None = AGENT,
    **attributes: Any,
) -> Listing:
    return Listing(
        unique_id=unique_id,
        status=status,
        agent_name=agent_name,
        mod_time=mod_time(step),
        attributes=attributes,
    )


def make_record(
    unique_id: str | None,
    status: str | None = "current",
    *,
    mod_time_text: str | None = "2017-01-01-12:00:00",
    agent_name: str | None = AGENT,
    **fields: Any,
) -> dict[str, Any]:
    attrs: dict[str, str] = {}
    if status is not None:
        attrs["status"] = status
    if mod_time_text is not None:
        attrs["modTime"] = mod_time_text
    record: dict[str, Any] = {"$": attrs}
    if unique_id is not None:
        record["uniqueID"] = [unique_id]
    if agent_name is not None:
        record["listingAgent"] = [{"$": {"id": "1"}, "name": [agent_name]}]
    for key, value in fields.items():
        record[key] = [value]
    return record


def make_document(source_id: str, *records: dict[str, Any]) -> FeedDocument:
    return FeedDocument(source_id=source_id, records=records)


def feed_xml(*listings: str, root: str = "propertyList") -> str:
    body = "\n".join(listings)
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        f'<{root} date="2017-01-01-12:00:00">\n{body}\n</{root}>\n'
    )


def residential_xml(
    unique_id: str,
    status: str = "current",
    *,
    mod_time_text: str = "2017-01-01-12:00:00",
    agent_name: str = AGENT,
    headline: str = "Sunny cottage",
) -> str:
    return (
        f'<residential modTime="{mod_time_text}" status="{status}">'
        f"<agentID>XNWXNW</agentID>"
        f"<uniqueID>{unique_id}</uniqueID>"
        f'<listingAgent id="1"><name>{agent_name}</name>'
        '<telephone type="BH">0500 000 000</telephone></listingAgent>'
        f"<headline>{headline}</headline>"
        f'<price display="yes">500000</price>'
        f"</residential>"
    )

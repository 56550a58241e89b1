"""Agent scoping for incoming listings."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from listingsync.domain.model import Listing


def in_agent_scope(listing: Listing, agent_name: str) -> bool:
    """Exact, case-sensitive match; listings without an agent are out of scope."""

    return listing.agent_name is not None and listing.agent_name == agent_name


def select_agent_listings(listings: Iterable[Listing], agent_name: str) -> list[Listing]:
    return [listing for listing in listings if in_agent_scope(listing, agent_name)]

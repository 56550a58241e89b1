"""Public interface for the publishing adapters."""

from __future__ import annotations

from .git import GitPublisher, run_git
from .hook import SiteRebuildHook
from .schema import PublishedListing, parse_published, serialize_listings

__all__ = [
    "GitPublisher",
    "PublishedListing",
    "SiteRebuildHook",
    "parse_published",
    "run_git",
    "serialize_listings",
]

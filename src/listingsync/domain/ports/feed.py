"""Ports for reading listing feeds."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

type RawRecord = Mapping[str, object]


class FeedParseError(ValueError):
    """Raised when a feed document cannot be parsed into raw records."""

    def __init__(self, source_id: str, message: str) -> None:
        super().__init__(f"{source_id}: {message}")
        self.source_id = source_id


@dataclass(frozen=True, slots=True)
class FeedDocument:
    """All raw records parsed from a single feed source, in document order."""

    source_id: str
    records: Sequence[RawRecord] = ()


@runtime_checkable
class FeedParser(Protocol):
    """Callable port turning one feed document into raw records.

    ``content`` is usually the undecoded file so the document's own encoding
    declaration applies.
    """

    def __call__(self, source_id: str, content: str | bytes) -> FeedDocument: ...


__all__ = ["FeedDocument", "FeedParseError", "FeedParser", "RawRecord"]

"""Parse XML listing feeds into xml2js-shaped raw records."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final
from xml.etree.ElementTree import Element, ParseError, fromstring

from listingsync.config.sync import DEFAULT_FEED_CATEGORIES
from listingsync.domain.ports.feed import FeedDocument, FeedParseError, FeedParser

if TYPE_CHECKING:
    from listingsync.domain.ports.feed import RawRecord

ROOT_TAG: Final[str] = "propertyList"
ATTRIBUTES_KEY: Final[str] = "$"
TEXT_KEY: Final[str] = "_"

log = getLogger(__name__)


def element_to_payload(element: Element) -> object:
    """Convert an element the way xml2js does with ``explicitArray`` enabled.

    Children become lists keyed by tag, attributes go under ``"$"`` and text
    that sits next to attributes or children goes under ``"_"``. A bare element
    collapses to its stripped text.
    """

    text = (element.text or "").strip()
    children = list(element)
    if not element.attrib and not children:
        return text

    payload: dict[str, object] = {}
    if element.attrib:
        payload[ATTRIBUTES_KEY] = dict(element.attrib)
    for child in children:
        values = payload.setdefault(child.tag, [])
        if isinstance(values, list):
            values.append(element_to_payload(child))
    if text:
        payload[TEXT_KEY] = text
    return payload


@dataclass(frozen=True, slots=True)
class ReaxmlFeedParser:
    """Read the configured listing categories from a ``<propertyList>`` document."""

    categories: tuple[str, ...] = field(default=DEFAULT_FEED_CATEGORIES)

    def __call__(self, source_id: str, content: str | bytes) -> FeedDocument:
        try:
            root = fromstring(content)  # noqa: S314
        except (ParseError, UnicodeError, LookupError) as exc:
            raise FeedParseError(source_id, f"invalid XML: {exc}") from exc

        if root.tag != ROOT_TAG:
            raise FeedParseError(source_id, f"expected <{ROOT_TAG}> root, found <{root.tag}>")

        records: list[RawRecord] = []
        for element in root:
            if element.tag not in self.categories:
                continue
            payload = element_to_payload(element)
            if not isinstance(payload, dict):
                # empty <residential/> carries nothing to reconcile
                continue
            records.append(payload)

        log.debug(f"Parsed {len(records)} records from {source_id}")
        return FeedDocument(source_id=source_id, records=tuple(records))


if TYPE_CHECKING:
    _parser_check: FeedParser = ReaxmlFeedParser()

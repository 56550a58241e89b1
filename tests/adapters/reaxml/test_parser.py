from __future__ import annotations

from xml.etree.ElementTree import fromstring

import pytest

from listingsync.adapters.reaxml import ReaxmlFeedParser, element_to_payload
from listingsync.domain.ports import FeedParseError
from listingsync.domain.reconciliation import normalize_record
from tests.helpers.listings import AGENT, feed_xml, residential_xml


def test_element_to_payload_mirrors_xml2js_shape() -> None:
    element = fromstring(
        '<residential status="sold"><uniqueID>A1</uniqueID>'
        '<price display="no">100</price><empty/></residential>'
    )

    payload = element_to_payload(element)

    assert payload == {
        "$": {"status": "sold"},
        "uniqueID": ["A1"],
        "price": [{"$": {"display": "no"}, "_": "100"}],
        "empty": [""],
    }


def test_parser_reads_residential_listings_in_document_order() -> None:
    text = feed_xml(residential_xml("B2"), residential_xml("A1", "sold"))

    document = ReaxmlFeedParser()("feed.xml", text)

    assert document.source_id == "feed.xml"
    listings = [normalize_record(record) for record in document.records]
    assert [listing.unique_id for listing in listings] == ["B2", "A1"]
    assert listings[1].status == "sold"
    assert listings[0].agent_name == AGENT
    assert listings[0].attributes["price"] == {"$": {"display": "yes"}, "_": "500000"}


def test_parser_ignores_unconfigured_categories() -> None:
    text = feed_xml(
        residential_xml("R1"),
        '<rental status="current"><uniqueID>L1</uniqueID></rental>',
        "<residential/>",
    )

    assert len(ReaxmlFeedParser()("feed.xml", text).records) == 1
    both = ReaxmlFeedParser(categories=("residential", "rental"))
    assert len(both("feed.xml", text).records) == 2


def test_parser_rejects_malformed_xml() -> None:
    with pytest.raises(FeedParseError) as excinfo:
        ReaxmlFeedParser()("broken.xml", "<propertyList><residential>")

    assert excinfo.value.source_id == "broken.xml"


def test_parser_rejects_unexpected_root() -> None:
    with pytest.raises(FeedParseError, match="propertyList"):
        ReaxmlFeedParser()("other.xml", feed_xml(residential_xml("A"), root="listings"))


def _latin1_feed(*, declared: str) -> bytes:
    text = feed_xml(residential_xml("L1", headline="Café"))
    return text.replace('encoding="utf-8"', f'encoding="{declared}"').encode("latin-1")


def test_parser_honours_declared_encoding() -> None:
    document = ReaxmlFeedParser()("latin.xml", _latin1_feed(declared="ISO-8859-1"))

    listing = normalize_record(document.records[0])
    assert listing.attributes["headline"] == "Café"


def test_parser_reports_bytes_that_do_not_match_the_declaration() -> None:
    with pytest.raises(FeedParseError) as excinfo:
        ReaxmlFeedParser()("latin.xml", _latin1_feed(declared="utf-8"))

    assert excinfo.value.source_id == "latin.xml"

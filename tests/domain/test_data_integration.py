from __future__ import annotations

import pytest

from listingsync.adapters.publishing import serialize_listings
from listingsync.domain.data_integration import ErrorPolicy, reconcile_batch
from listingsync.domain.errors import BatchAbortedError
from listingsync.domain.model import ListingCollection
from listingsync.domain.reconciliation import ReconciliationEngine, SoldRetentionPolicy
from tests.helpers.listings import AGENT, make_document, make_listing, make_record


def _bad_record() -> dict[str, object]:
    record = make_record("BAD")
    record["uniqueID"] = ["one", "two"]
    return record


def test_batch_processes_documents_in_sorted_source_order(
    current: ListingCollection, sold: ListingCollection
) -> None:
    # b.xml relists X after a.xml sells it; arrival order must not matter
    documents = [
        make_document("b.xml", make_record("X", "current")),
        make_document("a.xml", make_record("X", "sold")),
    ]

    result = reconcile_batch(documents, current=current, sold=sold, agent_name=AGENT)

    assert current.ids() == ("X",)
    assert "X" not in sold
    assert result.sold == 1
    assert result.updated == 1
    assert result.completed_sources == ["a.xml", "b.xml"]


def test_later_records_observe_earlier_mutations(
    current: ListingCollection, sold: ListingCollection
) -> None:
    document = make_document(
        "feed.xml",
        make_record("X", "current"),
        make_record("X", "sold"),
        make_record("X", "current"),
    )

    result = reconcile_batch([document], current=current, sold=sold, agent_name=AGENT)

    assert current.ids() == ("X",)
    assert sold.ids() == ()
    assert result.processed == 3


def test_other_agents_never_reach_the_engine(
    current: ListingCollection, sold: ListingCollection
) -> None:
    current.insert(make_listing("X"))
    document = make_document(
        "feed.xml",
        make_record("X", "withdrawn", agent_name="Somebody Else"),
        make_record("Y", "sold", agent_name="Somebody Else"),
        make_record("Z", "current", agent_name=None),
    )

    result = reconcile_batch([document], current=current, sold=sold, agent_name=AGENT)

    assert current.ids() == ("X",)
    assert len(sold) == 0
    assert result.skipped == 3
    assert result.processed == 3


def test_out_of_scope_records_with_blank_ids_are_skipped_not_failed(
    current: ListingCollection, sold: ListingCollection
) -> None:
    document = make_document("feed.xml", make_record(None, agent_name="Other"))

    result = reconcile_batch([document], current=current, sold=sold, agent_name=AGENT)

    assert result.skipped == 1
    assert result.failed == 0


def test_failures_are_reported_and_batch_continues(
    current: ListingCollection, sold: ListingCollection
) -> None:
    archived: list[str] = []
    documents = [
        make_document("a.xml", make_record("A"), _bad_record(), make_record("B")),
        make_document("b.xml", make_record(None), make_record("C")),
        make_document("c.xml", make_record("D", "sold")),
    ]

    result = reconcile_batch(
        documents,
        current=current,
        sold=sold,
        agent_name=AGENT,
        archive=archived.append,
    )

    assert current.ids() == ("A", "B", "C")
    assert sold.ids() == ("D",)
    assert result.failed == 2
    assert [(f.source_id, f.index) for f in result.failures] == [("a.xml", 1), ("b.xml", 0)]
    assert result.failures[0].unique_id is None
    assert "uniqueID" in result.failures[0].error
    assert archived == ["c.xml"]
    assert result.completed_sources == ["c.xml"]


def test_fail_fast_aborts_on_first_failure(
    current: ListingCollection, sold: ListingCollection
) -> None:
    archived: list[str] = []
    documents = [
        make_document("a.xml", make_record("A")),
        make_document("b.xml", make_record("B"), _bad_record(), make_record("C")),
        make_document("c.xml", make_record("D")),
    ]

    with pytest.raises(BatchAbortedError) as excinfo:
        reconcile_batch(
            documents,
            current=current,
            sold=sold,
            agent_name=AGENT,
            error_policy=ErrorPolicy.FAIL_FAST,
            archive=archived.append,
        )

    result = excinfo.value.result
    assert result.failed == 1
    assert result.processed == 3
    assert archived == ["a.xml"]
    assert "C" not in current
    assert "D" not in current


def test_empty_documents_are_completed(current: ListingCollection, sold: ListingCollection) -> None:
    archived: list[str] = []

    result = reconcile_batch(
        [make_document("empty.xml")],
        current=current,
        sold=sold,
        agent_name=AGENT,
        archive=archived.append,
    )

    assert archived == ["empty.xml"]
    assert result.processed == 0


def test_evictions_are_reported(current: ListingCollection, sold: ListingCollection) -> None:
    document = make_document(
        "feed.xml",
        *(
            make_record(f"S{step}", "sold", mod_time_text=f"2017-01-0{step}-12:00:00")
            for step in (4, 1, 3, 2)
        ),
    )

    result = reconcile_batch(
        [document],
        current=current,
        sold=sold,
        agent_name=AGENT,
        engine=ReconciliationEngine(retention=SoldRetentionPolicy(limit=3)),
    )

    assert result.evicted == ["S1"]
    assert set(sold.ids()) == {"S2", "S3", "S4"}


def test_identical_runs_are_byte_identical() -> None:
    def run() -> tuple[str, str]:
        current = ListingCollection("current", [make_listing("seed", headline="x")])
        sold = ListingCollection("sold")
        documents = [
            make_document("b.xml", make_record("B", "sold", headline="b")),
            make_document(
                "a.xml",
                make_record("A", "current", headline="a"),
                make_record("seed", "withdrawn"),
            ),
        ]
        reconcile_batch(documents, current=current, sold=sold, agent_name=AGENT)
        return serialize_listings(current), serialize_listings(sold)

    assert run() == run()


def test_out_of_range_mod_time_fails_only_its_record(
    current: ListingCollection, sold: ListingCollection
) -> None:
    document = make_document(
        "feed.xml",
        make_record("EARLY", mod_time_text="0001-01-01T00:00:00+01:00"),
        make_record("LATER"),
    )

    result = reconcile_batch([document], current=current, sold=sold, agent_name=AGENT)

    assert current.ids() == ("LATER",)
    assert [failure.unique_id for failure in result.failures] == ["EARLY"]
    assert result.completed_sources == []

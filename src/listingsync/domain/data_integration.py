"""Batch driver: apply parsed feed documents to the listing collections."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from listingsync.domain.errors import BatchAbortedError, ReconciliationError
from listingsync.domain.model import ListingStatus
from listingsync.domain.reconciliation import (
    ReconciliationEngine,
    in_agent_scope,
    normalize_record,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from listingsync.domain.model import ListingCollection
    from listingsync.domain.ports import Archiver, FeedDocument, RawRecord

log = getLogger(__name__)


class ErrorPolicy(StrEnum):
    CONTINUE = "continue"
    FAIL_FAST = "fail_fast"


@dataclass(frozen=True, slots=True)
class RecordFailure:
    """A record that could not be normalized or validated."""

    source_id: str
    index: int
    error: str
    unique_id: str | None = None


@dataclass(slots=True)
class BatchResult:
    """Aggregate outcome of one batch run."""

    processed: int = 0
    updated: int = 0
    sold: int = 0
    removed: int = 0
    skipped: int = 0
    failed: int = 0
    evicted: list[str] = field(default_factory=list[str])
    failures: list[RecordFailure] = field(default_factory=list[RecordFailure])
    completed_sources: list[str] = field(default_factory=list[str])

    def record(self, action: ListingStatus) -> None:
        if action is ListingStatus.SOLD:
            self.sold += 1
        elif action is ListingStatus.CURRENT:
            self.updated += 1
        else:
            self.removed += 1


def reconcile_batch(  # noqa: PLR0913
    documents: Iterable[FeedDocument],
    *,
    current: ListingCollection,
    sold: ListingCollection,
    agent_name: str,
    engine: ReconciliationEngine | None = None,
    error_policy: ErrorPolicy = ErrorPolicy.CONTINUE,
    archive: Archiver | None = None,
) -> BatchResult:
    """Reconcile every record of every document, strictly in order.

    Documents are processed in lexicographic ``source_id`` order and records in
    document order, so later records observe all earlier mutations (including
    sold evictions). A document counts as completed, and is handed to ``archive``,
    only when none of its records failed.
    """

    effective_engine = engine or ReconciliationEngine()
    result = BatchResult()
    ordered = sorted(documents, key=lambda document: document.source_id)

    log.info(
        f"Starting batch: documents={len(ordered)}, current={len(current)}, "
        f"sold={len(sold)}, policy={error_policy}"
    )

    for document in ordered:
        document_failed = False
        for index, record in enumerate(document.records):
            result.processed += 1
            try:
                _reconcile_record(
                    record,
                    current=current,
                    sold=sold,
                    agent_name=agent_name,
                    engine=effective_engine,
                    result=result,
                )
            except ReconciliationError as exc:
                document_failed = True
                failure = RecordFailure(
                    source_id=document.source_id,
                    index=index,
                    error=str(exc),
                    unique_id=_peek_unique_id(record),
                )
                result.failed += 1
                result.failures.append(failure)
                log.warning(
                    f"Failed to reconcile record {index} of {document.source_id}: {exc}"
                )
                if error_policy is ErrorPolicy.FAIL_FAST:
                    raise BatchAbortedError(
                        f"Batch aborted at {document.source_id}[{index}]: {exc}",
                        result=result,
                    ) from exc

        if document_failed:
            log.warning(f"Not archiving {document.source_id}: it contains failed records")
            continue
        if archive is not None:
            archive(document.source_id)
        result.completed_sources.append(document.source_id)

    log.info(
        f"Finished batch: processed={result.processed}, updated={result.updated}, "
        f"sold={result.sold}, removed={result.removed}, skipped={result.skipped}, "
        f"failed={result.failed}, evicted={len(result.evicted)}"
    )
    return result


def _reconcile_record(  # noqa: PLR0913
    record: RawRecord,
    *,
    current: ListingCollection,
    sold: ListingCollection,
    agent_name: str,
    engine: ReconciliationEngine,
    result: BatchResult,
) -> None:
    listing = normalize_record(record)
    if not in_agent_scope(listing, agent_name):
        result.skipped += 1
        return
    outcome = engine.reconcile(listing, current=current, sold=sold)
    result.record(outcome.action)
    result.evicted.extend(evicted.unique_id for evicted in outcome.evicted)


def _peek_unique_id(record: RawRecord) -> str | None:
    if not isinstance(record, Mapping):
        return None
    value = record.get("uniqueID")
    if isinstance(value, list | tuple) and len(value) == 1 and isinstance(value[0], str):
        return value[0].strip() or None
    return None

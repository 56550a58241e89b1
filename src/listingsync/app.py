"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from listingsync.adapters.filesystem import DirectoryArchiver, list_feed_files, read_feed_file
from listingsync.adapters.publishing import GitPublisher, SiteRebuildHook
from listingsync.adapters.reaxml import ReaxmlFeedParser
from listingsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyListingUnitOfWork,
    is_started,
    startup,
)
from listingsync.config.publishing import get_publish_config
from listingsync.config.storage import get_storage_config
from listingsync.domain.data_integration import BatchResult, ErrorPolicy, reconcile_batch
from listingsync.domain.model import CURRENT_COLLECTION, SOLD_COLLECTION
from listingsync.domain.ports import FeedParseError, ListingUnitOfWork
from listingsync.domain.reconciliation import ReconciliationEngine, SoldRetentionPolicy

if TYPE_CHECKING:
    from pathlib import Path

    from listingsync.config.publishing import PublishConfig
    from listingsync.config.storage import StorageConfig
    from listingsync.config.sync import SyncConfig
    from listingsync.domain.ports import (
        Archiver,
        FeedDocument,
        FeedParser,
        Publisher,
        RebuildTrigger,
    )

UnitOfWorkFactory = Callable[[], ListingUnitOfWork]

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SourceFailure:
    """A feed source that could not be parsed at all."""

    source_id: str
    error: str


@dataclass(slots=True)
class SyncListingsResult:
    """Outcome of one feed-directory sync."""

    sources: list[str] = field(default_factory=list[str])
    batch: BatchResult = field(default_factory=BatchResult)
    parse_failures: list[SourceFailure] = field(default_factory=list[SourceFailure])
    archived: list[str] = field(default_factory=list[str])
    published: bool = False
    rebuild_triggered: bool = False

    @property
    def ok(self) -> bool:
        return not self.parse_failures and not self.batch.failures


def sync_listing_feeds(  # noqa: PLR0913
    *,
    sync_config: SyncConfig,
    storage: StorageConfig | None = None,
    publish_config: PublishConfig | None = None,
    publish: bool = True,
    parser: FeedParser | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    archiver: Archiver | None = None,
    publisher: Publisher | None = None,
    rebuild: RebuildTrigger | None = None,
) -> SyncListingsResult:
    """Reconcile every pending feed file, persist, archive, then publish."""

    storage_config = storage or get_storage_config()
    feed_dir = storage_config.resolve_feed_dir()
    sources = list_feed_files(feed_dir)
    if not sources:
        log.info(f"No feed files in {feed_dir}; nothing to do")
        return SyncListingsResult()

    log.info(
        "Starting listing sync: sources=%s, agent=%r, sold_limit=%s, policy=%s",
        len(sources),
        sync_config.agent_name,
        sync_config.sold_limit,
        sync_config.error_policy,
    )

    effective_parser = parser or ReaxmlFeedParser(categories=sync_config.feed_categories)
    documents, parse_failures = _parse_sources(
        sources, feed_dir, effective_parser, sync_config.error_policy
    )

    if unit_of_work_factory is None:
        if not is_started():
            startup()
        unit_of_work_factory = SqlAlchemyListingUnitOfWork

    engine = ReconciliationEngine(retention=SoldRetentionPolicy(limit=sync_config.sold_limit))
    with unit_of_work_factory() as uow:
        store = uow.repositories.collections
        current = store.load(CURRENT_COLLECTION)
        sold = store.load(SOLD_COLLECTION)
        batch = reconcile_batch(
            documents,
            current=current,
            sold=sold,
            agent_name=sync_config.agent_name,
            engine=engine,
            error_policy=sync_config.error_policy,
        )
        store.save(CURRENT_COLLECTION, current)
        store.save(SOLD_COLLECTION, sold)
        uow.commit()

    # only after commit, so an archived file is always reflected in the store
    effective_archiver = archiver or DirectoryArchiver(
        feed_dir=feed_dir,
        history_dir=storage_config.resolve_history_dir(),
    )
    for source_id in batch.completed_sources:
        effective_archiver(source_id)

    result = SyncListingsResult(
        sources=sources,
        batch=batch,
        parse_failures=parse_failures,
        archived=list(batch.completed_sources),
    )
    log.info(
        f"Reconciled feeds: current={len(current)}, sold={len(sold)}, "
        f"archived={len(result.archived)}, parse_failures={len(parse_failures)}, "
        f"record_failures={batch.failed}"
    )

    if not publish:
        log.info("Publishing disabled; skipping publish step")
        return result

    effective_publish_config = publish_config or get_publish_config()
    effective_publisher = publisher
    if effective_publisher is None and effective_publish_config.git is not None:
        effective_publisher = GitPublisher(effective_publish_config.git)
    if effective_publisher is None:
        log.info("No publish target configured; skipping publish step")
        return result

    effective_publisher(current, sold)
    result.published = True

    effective_rebuild = rebuild or SiteRebuildHook(effective_publish_config.hook)
    result.rebuild_triggered = effective_rebuild()

    log.info(f"Published listings; rebuild_triggered={result.rebuild_triggered}")
    return result


def _parse_sources(
    sources: list[str],
    feed_dir: Path,
    parser: FeedParser,
    error_policy: ErrorPolicy,
) -> tuple[list[FeedDocument], list[SourceFailure]]:
    documents: list[FeedDocument] = []
    failures: list[SourceFailure] = []
    for source_id in sources:
        content = read_feed_file(feed_dir, source_id)
        try:
            documents.append(parser(source_id, content))
        except FeedParseError as exc:
            if error_policy is ErrorPolicy.FAIL_FAST:
                raise
            log.warning(f"Skipping unparseable feed {source_id}: {exc}")
            failures.append(SourceFailure(source_id=source_id, error=str(exc)))
    return documents, failures

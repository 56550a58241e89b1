"""SQLAlchemy-backed unit of work for the current and sold listing collections.

The adapter keeps one engine per process. ``startup`` binds it (creating the
``listing`` table if needed) and every :class:`SqlAlchemyListingUnitOfWork`
opens a fresh session from it. A batch run saves both collections inside a
single unit of work, so either both are committed or neither is.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from listingsync.adapters.sqlalchemy.mappings import create_all_tables
from listingsync.adapters.sqlalchemy.repositories import SqlAlchemyCollectionStore
from listingsync.config.storage import get_database_uri
from listingsync.domain.ports.unit_of_work import ListingRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the listing store is used before ``startup`` or reconfigured twice."""


@dataclass(slots=True)
class _StoreBinding:
    engine: Engine
    session_factory: sessionmaker[Session]


_binding: _StoreBinding | None = None


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the listing store to an engine and make sure its table exists."""

    global _binding  # noqa: PLW0603
    if _binding is not None and not force:
        raise StartupError("Listing store already started. Pass force=True to rebind it.")

    resolved_engine = engine or create_engine(database_uri or get_database_uri(), future=True)
    create_all_tables(resolved_engine)
    _binding = _StoreBinding(
        engine=resolved_engine,
        session_factory=sessionmaker(bind=resolved_engine, expire_on_commit=False),
    )
    log.info(f"Listing store bound to {resolved_engine.url!r}")


def configured_engine() -> Engine | None:
    return _binding.engine if _binding is not None else None


def is_started() -> bool:
    return _binding is not None


def shutdown() -> None:
    """Dispose the bound engine; mostly useful between tests."""

    global _binding  # noqa: PLW0603
    if _binding is not None:
        _binding.engine.dispose()
    _binding = None


def _session_factory() -> sessionmaker[Session]:
    if _binding is None:
        raise StartupError(
            "Listing store not started. Call "
            "listingsync.adapters.sqlalchemy.unit_of_work.startup() first."
        )
    return _binding.session_factory


class SqlAlchemyListingUnitOfWork:
    """One session holding both listing collections for the length of a batch."""

    def __init__(self) -> None:
        self._factory = _session_factory()
        self._session: Session | None = None
        self._repositories: ListingRepositories | None = None

    def __enter__(self) -> SqlAlchemyListingUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work already entered")
        self._session = self._factory()
        self._repositories = ListingRepositories(
            collections=SqlAlchemyCollectionStore(self._session),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        try:
            if exc_type is not None:
                log.warning(f"Rolling back listing changes after {exc_type.__name__}")
                session.rollback()
        finally:
            session.close()
            self._session = None
            self._repositories = None
        return False

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    @property
    def repositories(self) -> ListingRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work is not active; use it as a context manager")
        return self._repositories

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work is not active; use it as a context manager")
        return self._session


if TYPE_CHECKING:
    from listingsync.domain.ports.unit_of_work import ListingUnitOfWork

    _uow_check: ListingUnitOfWork = SqlAlchemyListingUnitOfWork()

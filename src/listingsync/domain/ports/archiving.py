"""Port for marking feed sources as processed."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Archiver(Protocol):
    """Callable port invoked once a feed source has been fully reconciled."""

    def __call__(self, source_id: str) -> None: ...

"""Filesystem adapters for feed discovery and archiving."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from listingsync.domain.ports import Archiver

DEFAULT_FEED_PATTERN = "*.xml"

log = getLogger(__name__)


def list_feed_files(feed_dir: Path, *, pattern: str = DEFAULT_FEED_PATTERN) -> list[str]:
    """Return feed file names in ``feed_dir`` in lexicographic order."""

    if not feed_dir.is_dir():
        log.warning(f"Feed directory {feed_dir} does not exist")
        return []
    return sorted(path.name for path in feed_dir.glob(pattern) if path.is_file())


def read_feed_file(feed_dir: Path, source_id: str) -> bytes:
    """Return the raw feed bytes; decoding follows the XML declaration."""

    return (feed_dir / source_id).read_bytes()


@dataclass(frozen=True, slots=True)
class DirectoryArchiver:
    """Move processed feed files from the feed directory into a history directory."""

    feed_dir: Path
    history_dir: Path

    def __call__(self, source_id: str) -> None:
        self.history_dir.mkdir(parents=True, exist_ok=True)
        source = self.feed_dir / source_id
        target = self.history_dir / source_id
        source.replace(target)
        log.info(f"Archived {source_id} to {self.history_dir}")


if TYPE_CHECKING:
    _archiver_check: Archiver = DirectoryArchiver(Path(), Path())

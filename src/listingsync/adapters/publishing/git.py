"""Publish reconciled collections by committing JSON files to a git working tree."""

from __future__ import annotations

import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from .schema import serialize_listings

if TYPE_CHECKING:
    from pathlib import Path

    from listingsync.config.publishing import GitPublishConfig
    from listingsync.domain.model import ListingCollection
    from listingsync.domain.ports import Publisher

type GitRunner = Callable[[Sequence[str], Path], str]

log = getLogger(__name__)


def run_git(args: Sequence[str], cwd: Path) -> str:
    """Run ``git`` in ``cwd`` and return stdout; failures raise ``CalledProcessError``."""

    command = ["git", *args]
    log.info(f"Running {' '.join(command)} in {cwd}")
    completed = subprocess.run(  # noqa: S603
        command,
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
    )
    return completed.stdout


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(slots=True)
class GitPublisher:
    config: GitPublishConfig
    runner: GitRunner = field(default=run_git)
    clock: Callable[[], datetime] = field(default=_utc_now)

    def __call__(self, current: ListingCollection, sold: ListingCollection) -> None:
        repo = self.config.repo_path
        files = (self.config.current_filename, self.config.sold_filename)
        self.runner(["pull"], repo)
        self._write(repo / self.config.current_filename, serialize_listings(current))
        self._write(repo / self.config.sold_filename, serialize_listings(sold))
        self.runner(["add", *files], repo)

        if not self.runner(["status", "--porcelain", "--", *files], repo).strip():
            log.info("Published data unchanged; skipping commit")
            return

        message = f"JSON data - {self._commit_timestamp()}"
        self.runner(["commit", "-m", message], repo)
        self.runner(["push"], repo)
        log.info(f"Published {len(current)} current and {len(sold)} sold listings")

    def _commit_timestamp(self) -> str:
        return self.clock().strftime("%a, %d %b %Y %H:%M:%S GMT")

    @staticmethod
    def _write(path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


if TYPE_CHECKING:
    _publisher_check: Publisher = GitPublisher(GitPublishConfig(repo_path=Path()))

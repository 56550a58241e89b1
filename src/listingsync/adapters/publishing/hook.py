"""HTTP trigger asking the hosted site to rebuild from the published data."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from listingsync.config.publishing import PublishHookConfig
    from listingsync.domain.ports import RebuildTrigger

log = getLogger(__name__)


def _default_client_factory(config: PublishHookConfig) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=config.timeout_seconds)


@dataclass(slots=True)
class SiteRebuildHook:
    """POST to the configured endpoint with basic auth; no retries."""

    config: PublishHookConfig | None
    client_factory: Callable[[PublishHookConfig], httpx.AsyncClient] = field(
        default=_default_client_factory
    )

    def __call__(self) -> bool:
        if self.config is None:
            log.info("No publish hook configured; skipping site rebuild")
            return False
        asyncio.run(self._trigger_async(self.config))
        return True

    async def _trigger_async(self, config: PublishHookConfig) -> None:
        auth = httpx.BasicAuth(config.username, config.password)
        async with self.client_factory(config) as client:
            response = await client.post(config.url, auth=auth)
            response.raise_for_status()
        log.info(f"Triggered site rebuild via {config.url}: HTTP {response.status_code}")


if TYPE_CHECKING:
    _trigger_check: RebuildTrigger = SiteRebuildHook(config=None)

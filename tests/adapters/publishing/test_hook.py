from __future__ import annotations

import base64

import httpx
import pytest

from listingsync.adapters.publishing import SiteRebuildHook
from listingsync.config.publishing import PublishHookConfig

HOOK = PublishHookConfig(url="https://api.example.test/sites/42/build", username="u", password="p")


def _factory(handler: object) -> object:
    def build(config: PublishHookConfig) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=httpx.MockTransport(handler),  # type: ignore[arg-type]
            timeout=config.timeout_seconds,
        )

    return build


def test_hook_posts_with_basic_auth() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(202)

    hook = SiteRebuildHook(config=HOOK, client_factory=_factory(handler))  # type: ignore[arg-type]

    assert hook() is True
    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == HOOK.url
    expected = "Basic " + base64.b64encode(b"u:p").decode()
    assert request.headers["Authorization"] == expected


def test_hook_is_skipped_without_configuration() -> None:
    assert SiteRebuildHook(config=None)() is False


def test_hook_errors_are_not_retried() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(503, request=request)

    hook = SiteRebuildHook(config=HOOK, client_factory=_factory(handler))  # type: ignore[arg-type]

    with pytest.raises(httpx.HTTPStatusError):
        hook()
    assert calls == 1

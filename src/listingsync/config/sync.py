"""Reconciliation defaults for batch runs."""

from __future__ import annotations

from dataclasses import dataclass

from listingsync.domain.data_integration import ErrorPolicy
from listingsync.domain.reconciliation import DEFAULT_SOLD_LIMIT

from .env import env_flag, env_int, optional_env_var, require_env_var
from .errors import ConfigurationError

DEFAULT_FEED_CATEGORIES: tuple[str, ...] = ("residential",)


@dataclass(frozen=True, slots=True)
class SyncConfig:
    agent_name: str
    sold_limit: int = DEFAULT_SOLD_LIMIT
    error_policy: ErrorPolicy = ErrorPolicy.CONTINUE
    feed_categories: tuple[str, ...] = DEFAULT_FEED_CATEGORIES


def _parse_categories(value: str | None) -> tuple[str, ...]:
    if value is None:
        return DEFAULT_FEED_CATEGORIES
    categories = tuple(part.strip() for part in value.split(",") if part.strip())
    return categories or DEFAULT_FEED_CATEGORIES


def get_sync_config(
    *,
    agent_name: str | None = None,
    sold_limit: int | None = None,
    fail_fast: bool | None = None,
) -> SyncConfig:
    """Build the sync configuration, letting explicit arguments override the environment."""

    resolved_agent = agent_name or require_env_var("LISTINGSYNC_AGENT_NAME")
    resolved_limit = sold_limit
    if resolved_limit is None:
        resolved_limit = env_int("LISTINGSYNC_SOLD_LIMIT", DEFAULT_SOLD_LIMIT)
    if resolved_limit < 0:
        raise ConfigurationError(f"Sold limit must be non-negative, got {resolved_limit}")
    resolved_fail_fast = fail_fast if fail_fast is not None else env_flag("LISTINGSYNC_FAIL_FAST")
    return SyncConfig(
        agent_name=resolved_agent.strip(),
        sold_limit=resolved_limit,
        error_policy=ErrorPolicy.FAIL_FAST if resolved_fail_fast else ErrorPolicy.CONTINUE,
        feed_categories=_parse_categories(optional_env_var("LISTINGSYNC_FEED_CATEGORIES")),
    )

"""Reconciliation core: normalize, scope, apply, retain."""

from __future__ import annotations

from .agent_filter import in_agent_scope, select_agent_listings
from .engine import ReconciliationEngine, ReconciliationOutcome
from .normalize import normalize_record, parse_mod_time
from .retention import DEFAULT_SOLD_LIMIT, SoldRetentionPolicy, eviction_key

__all__ = [
    "DEFAULT_SOLD_LIMIT",
    "ReconciliationEngine",
    "ReconciliationOutcome",
    "SoldRetentionPolicy",
    "eviction_key",
    "in_agent_scope",
    "normalize_record",
    "parse_mod_time",
    "select_agent_listings",
]

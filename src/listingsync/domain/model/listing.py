"""Listing value object and status classification."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime


class ListingStatus(StrEnum):
    CURRENT = "current"
    SOLD = "sold"
    REMOVED = "removed"

    @classmethod
    def classify(cls, status: str | None) -> ListingStatus:
        """Map a raw feed status onto the three reconciliation branches.

        Only the exact values ``current`` and ``sold`` are recognised; anything
        else (``withdrawn``, ``offmarket``, blanks, typos) counts as a removal.
        """

        if status == cls.SOLD.value:
            return cls.SOLD
        if status == cls.CURRENT.value:
            return cls.CURRENT
        return cls.REMOVED


@dataclass(frozen=True, slots=True)
class Listing:
    """One property record as seen by the reconciliation core."""

    unique_id: str
    status: str
    agent_name: str | None = None
    mod_time: datetime | None = None
    attributes: Mapping[str, Any] = field(default_factory=dict[str, Any])

    @property
    def kind(self) -> ListingStatus:
        return ListingStatus.classify(self.status)

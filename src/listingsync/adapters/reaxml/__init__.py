"""Public interface for the XML feed adapter."""

from __future__ import annotations

from .parser import ReaxmlFeedParser, element_to_payload

__all__ = ["ReaxmlFeedParser", "element_to_payload"]

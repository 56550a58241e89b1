"""Logging setup for the listingsync CLI."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Configure the root logger for a sync run.

    INFO reports one line per batch, archive move and publish step; DEBUG adds
    every reconciliation decision and sold eviction. ``force=True`` replaces
    handlers installed earlier, e.g. by pytest.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S", force=force)

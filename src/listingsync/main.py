#!/usr/bin/env python3

# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from listingsync.app import sync_listing_feeds
from listingsync.common.logging import configure_logging
from listingsync.config import ConfigurationError, get_storage_config, get_sync_config

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Reconcile listing feeds into current/sold collections and publish them"
    )
    parser.add_argument("--feed-dir", type=Path, help="Directory holding pending XML feeds")
    parser.add_argument(
        "--history-dir",
        type=Path,
        help="Directory processed feeds are moved into",
    )
    parser.add_argument(
        "--agent",
        type=str,
        help="Agent name whose listings are tracked (default: $LISTINGSYNC_AGENT_NAME)",
    )
    parser.add_argument(
        "--sold-limit",
        type=int,
        help="Maximum number of sold listings to retain (default: $LISTINGSYNC_SOLD_LIMIT or 3)",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        default=None,
        help="Abort the whole batch on the first bad record instead of skipping it",
    )
    parser.add_argument(
        "--no-publish",
        action="store_true",
        help="Reconcile and archive without pushing or triggering a rebuild",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    try:
        parsed_args = _parse_args(argv if argv is not None else sys.argv[1:])
        sync_config = get_sync_config(
            agent_name=parsed_args.agent,
            sold_limit=parsed_args.sold_limit,
            fail_fast=parsed_args.fail_fast,
        )
        storage = get_storage_config()
        if parsed_args.feed_dir is not None:
            storage = replace(storage, feed_dir=parsed_args.feed_dir)
        if parsed_args.history_dir is not None:
            storage = replace(storage, history_dir=parsed_args.history_dir)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        result = sync_listing_feeds(
            sync_config=sync_config,
            storage=storage,
            publish=not parsed_args.no_publish,
        )
    except Exception as e:  # noqa: BLE001
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if not result.ok:
        print(
            f"Completed with {len(result.parse_failures)} unparseable feeds and "
            f"{result.batch.failed} failed records",
            file=sys.stderr,
        )


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point: load .env, install the SIGINT handler, run."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()

"""Command-line interface for checking groups for possible three-way ties."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from groupties.config import API_KEY_ENV, load_feed_settings, resolve_api_key
from groupties.ingest import FeedError, StartGGFeed
from groupties.models import MalformedRecordError
from groupties.snapshot import FeedSnapshot, SnapshotError
from groupties.standings import MatchResultStore, classify_groups, render_report


logger = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Report which round-robin groups can still end in a 3-way tie")
    parser.add_argument("event_slug", nargs="?", default=None, help="start.gg event slug, e.g. tournament/x/event/y")
    parser.add_argument("--api-key", default=None, help=f"start.gg API token (defaults to ${API_KEY_ENV})")
    parser.add_argument("--snapshot", type=Path, default=None, help="Read match records from a saved snapshot instead of start.gg")
    parser.add_argument("--save-snapshot", type=Path, default=None, help="Write the fetched match records to a snapshot JSON file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log progress to stderr")
    return parser.parse_args(argv)


def _load_snapshot(args: argparse.Namespace, store: MatchResultStore) -> FeedSnapshot:
    if args.snapshot:
        try:
            snapshot = FeedSnapshot.load(args.snapshot)
        except SnapshotError as exc:
            raise SystemExit(str(exc)) from exc
        count = snapshot.ingest_into(store)
        logger.info("Loaded %s match records from %s", count, args.snapshot)
        return snapshot

    if not args.event_slug:
        raise SystemExit("event_slug is required unless --snapshot is given")
    api_key = resolve_api_key(args.api_key)
    if not api_key:
        raise SystemExit(f"Provide --api-key or set {API_KEY_ENV}")

    with StartGGFeed(api_key, args.event_slug, settings=load_feed_settings()) as feed:
        records = feed.ingest_into(store)
    return FeedSnapshot(args.event_slug, records, dict(store.player_names))


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    store = MatchResultStore()
    try:
        snapshot = _load_snapshot(args, store)
    except FeedError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except MalformedRecordError as exc:
        print(f"error: malformed results: {exc}", file=sys.stderr)
        return 2

    if args.save_snapshot:
        snapshot.save(args.save_snapshot)
        logger.info("Saved snapshot to %s", args.save_snapshot)

    print(render_report(classify_groups(store), store.player_names))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

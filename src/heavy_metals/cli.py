"""Command-line interface for the heavy-metal aggregations.

Provides subcommands: `years`, `averages`, and `gold`. Each command is
implemented as a `cmd_*` function that accepts an argparse namespace.
"""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Sequence

from heavy_metals.config import get_settings
from heavy_metals.logging_config import configure_logging
from heavy_metals.db import get_client, get_db
from heavy_metals.ingest.snapshot import fetch_snapshot, load_snapshot_file
from heavy_metals.aggregate.yearly import aggregate_with_diagnostics, distinct_years
from heavy_metals.aggregate.summary import exceedances, yearly_summary
from heavy_metals.aggregate.load_gold import GOLD_COLLECTION, GOLD_KEY_FIELDS, load_gold
from heavy_metals.thresholds import UNIT, explain

log = logging.getLogger(__name__)

DEFAULT_YEAR = "2020"


# --------------------------------------------------
# Helpers
# --------------------------------------------------
def _load_document(args: argparse.Namespace) -> dict[str, Any]:
    """Return the measurement document from `--file` or a fetched snapshot."""
    if args.file is not None:
        return load_snapshot_file(args.file)
    return fetch_snapshot(get_settings(), use_cache=not args.no_cache)


def resolve_year(requested: str | None, years: Sequence[str]) -> str:
    """Pick the year to report.

    An explicit request wins; otherwise the earliest year present, falling
    back to `DEFAULT_YEAR` when the document holds none.
    """
    if requested:
        return requested
    if years:
        return years[0]
    return DEFAULT_YEAR


def _format_value(value: float | None) -> str:
    return "n/a" if value is None else f"{value:.2f}"


# --------------------------------------------------
# YEARS
# --------------------------------------------------
def cmd_years(args: argparse.Namespace) -> None:
    """Print every distinct year in the document, one per line."""
    for year in distinct_years(_load_document(args)):
        print(year)


# --------------------------------------------------
# AVERAGES
# --------------------------------------------------
def cmd_averages(args: argparse.Namespace) -> None:
    """Print the per-metal means for one year.

    Args:
        args: argparse namespace with `year` and `json`.
    """
    document = _load_document(args)
    year = resolve_year(args.year, distinct_years(document))
    result = aggregate_with_diagnostics(document, year)

    if result.skipped.total:
        log.warning("Skipped %d malformed entries for year %s", result.skipped.total, year)

    if args.json:
        print(json.dumps([s.model_dump() for s in result.stats], ensure_ascii=False, indent=2))
        return

    print(f"Heavy Metals vs Safety Thresholds ({year}) ({UNIT})")
    for stat in result.stats:
        status = "EXCEEDS" if stat.exceeds else "ok"
        print(
            f"{stat.label:<3} measured={_format_value(stat.value):>8} "
            f"threshold={stat.threshold:g} "
            f"samples={result.sample_counts[stat.metal]} {status}"
        )

    print()
    for stat in result.stats:
        print(f"- {explain(stat.metal)}")


# --------------------------------------------------
# GOLD
# --------------------------------------------------
def cmd_gold(args: argparse.Namespace) -> None:
    """Compute the yearly summary for all years and upsert it into MongoDB."""
    document = _load_document(args)
    summary = yearly_summary(document)

    flagged = exceedances(summary)
    if not flagged.empty:
        log.info("%d (year, metal) means exceed their threshold", len(flagged))

    s = get_settings()
    client = get_client(s.mongo_uri)
    try:
        db = get_db(client, s.mongo_db)
        load_gold(summary, db[args.collection], GOLD_KEY_FIELDS)
    finally:
        client.close()

    log.info("Gold layer successfully generated.")


# --------------------------------------------------
# CLI
# --------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser for the CLI.

    Every subcommand accepts `--file` (read a JSON export) and `--no-cache`
    (ignore a cached snapshot when fetching).

    Returns:
        Configured argparse.ArgumentParser instance.
    """
    source = argparse.ArgumentParser(add_help=False)
    source.add_argument("--file", type=Path, default=None)
    source.add_argument("--no-cache", action="store_true")

    p = argparse.ArgumentParser(prog="heavy-metals")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("years", parents=[source])

    p_avg = sub.add_parser("averages", parents=[source])
    p_avg.add_argument("--year", default=None)
    p_avg.add_argument("--json", action="store_true")

    p_gold = sub.add_parser("gold", parents=[source])
    p_gold.add_argument("--collection", default=GOLD_COLLECTION)

    return p


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point: parse args, configure logging and dispatch commands."""
    args = build_parser().parse_args(argv)
    configure_logging(Path("logs/heavy_metals.log"))

    if args.cmd == "years":
        cmd_years(args)
    elif args.cmd == "averages":
        cmd_averages(args)
    elif args.cmd == "gold":
        cmd_gold(args)
    else:
        raise SystemExit(2)


if __name__ == "__main__":
    main()

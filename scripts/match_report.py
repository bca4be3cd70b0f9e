#!/usr/bin/env python3
"""Print per-period statistics for a match event file (CSV or JSON)."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

import pandas as pd

from analytics.report import MatchContext, build_match_report
from analytics.schema import MatchEvent, events_from_frame
from charts.formatters import format_stats_table

logger = logging.getLogger("match_report")

_ID_COLUMNS = {"event_id": str, "team_id": str, "player_id": str}


def load_events(path: Path) -> list[MatchEvent]:
    """Read events from ``.csv`` (snake_case columns) or ``.json`` (list of records)."""
    if not path.exists():
        raise SystemExit(f"events file not found: {path}")

    suffix = path.suffix.lower()
    try:
        if suffix == ".csv":
            return events_from_frame(pd.read_csv(path, dtype=_ID_COLUMNS))
        if suffix == ".json":
            with path.open(encoding="utf-8") as fh:
                payload = json.load(fh)
            records = payload.get("events", []) if isinstance(payload, dict) else payload
            events = []
            for position, record in enumerate(records):
                try:
                    events.append(MatchEvent.from_record(record))
                except ValueError as exc:
                    raise ValueError(f"invalid event at record {position}: {exc}") from exc
            return events
    except (ValueError, json.JSONDecodeError) as exc:
        raise SystemExit(f"could not read events from {path}: {exc}") from exc
    raise SystemExit(f"unsupported events file type {suffix!r}; expected .csv or .json")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Per-period match event statistics")
    parser.add_argument("events", type=Path, help="CSV or JSON file of match events")
    parser.add_argument("--match-id", default="match")
    parser.add_argument("--home-team", required=True, help="home team id")
    parser.add_argument("--away-team", required=True, help="away team id")
    parser.add_argument("--player", default=None, help="restrict the report to one player id")
    parser.add_argument("--minutes", type=int, default=None, help="minutes played, enables per-minute rates")
    parser.add_argument("--json", action="store_true", help="emit the report summary as JSON")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    events = load_events(args.events)
    logger.info("loaded %d events from %s", len(events), args.events)

    try:
        context = MatchContext(
            match_id=args.match_id,
            home_team_id=args.home_team,
            away_team_id=args.away_team,
            player_id=args.player,
            minutes_played=args.minutes,
        )
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    report = build_match_report(events, context)
    if args.json:
        print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        table = format_stats_table(report.stats_table).drop(columns=["metric"])
        print(table.to_string(index=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""CLI to print one aligned day of the personal timeline.

Loads the transit, school, sleep and emotion logs, keeps the days that have
both timeline and mood data and prints the selected day. With `--at` the
info box for that time of day is printed as well.
"""
# Example:
#
# qs-timeline --transit data/ovlog.csv --school data/school_schedule.csv \
#   --sleep data/sleep.csv --mood data/emotions.csv --date 2017-03-14 --at 10:30 \
#   --output out/2017-03-14.json
from __future__ import annotations

import argparse
import datetime as dt
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from qs_timeline.config import CLOCK_FORMAT, DEFAULT_START_DAY, ISO_DATE_FORMAT, SourcePaths
from qs_timeline.data_models.day_index import AlignedDay
from qs_timeline.services.day_navigation_service import DayNavigator
from qs_timeline.services.interval_pairing_service import TransitPairingError
from qs_timeline.services.source_ingestion_service import SourceLoadError
from qs_timeline.services.timeline_pipeline_service import load_aligned_day_index
from qs_timeline.services.timeline_query_service import format_hm, snapshot_at

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    defaults = SourcePaths()
    parser = argparse.ArgumentParser(
        prog="qs-timeline",
        description="Show the activities and mood of one day from personal log exports.",
    )
    parser.add_argument("--transit", type=Path, default=defaults.transit,
                        help=f"OV-chipkaart travel history CSV (default: {defaults.transit})")
    parser.add_argument("--school", type=Path, default=defaults.school,
                        help=f"School schedule CSV (default: {defaults.school})")
    parser.add_argument("--sleep", type=Path, default=defaults.sleep,
                        help=f"Sleep log CSV (default: {defaults.sleep})")
    parser.add_argument("--mood", type=Path, default=defaults.mood,
                        help=f"Emotion log CSV (default: {defaults.mood})")
    parser.add_argument("--sep", type=str, default=",", help="CSV field separator (default: ,)")
    parser.add_argument("--day", type=int, default=DEFAULT_START_DAY,
                        help=f"Index of the aligned day to show, wraps around (default: {DEFAULT_START_DAY})")
    parser.add_argument("--date", type=str, default=None,
                        help="Show this date (YYYY-MM-DD) instead of --day.")
    parser.add_argument("--at", type=str, default=None,
                        help="Time of day (HH:MM) to print the info box for.")
    parser.add_argument("--lenient-pairing", action="store_true",
                        help="Pair check-ins and check-outs by position even when their counts differ.")
    parser.add_argument("--output", type=str, default=None,
                        help="If provided, write the selected day (and snapshot) as JSON to this path.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def _print_day(navigator: DayNavigator, day: AlignedDay) -> None:
    print(f"\n{navigator.date_label()}  (day {navigator.cursor + 1} of {len(navigator)})")
    print("=" * 60)
    print("Timeline:")
    for event in day.timeline.records:
        print(f"  {format_hm(event.beginning)} - {format_hm(event.end)}  [{event.label}] {event.description}")
    print("Mood:")
    for sample in day.mood.records:
        print(f"  {sample.time:%H:%M}  arousal {sample.arousal:g}, valence {sample.valence:g}  {sample.description}")


def main(argv: Optional[List[str]] = None) -> int:
    args = create_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    paths = SourcePaths(transit=args.transit, school=args.school, sleep=args.sleep, mood=args.mood)
    try:
        aligned = load_aligned_day_index(paths, strict_pairing=not args.lenient_pairing, sep=args.sep)
    except SourceLoadError as e:
        logger.error("%s", e)
        return 1
    except TransitPairingError as e:
        logger.error("%s. Re-run with --lenient-pairing to pair by position anyway.", e)
        return 1
    except ValueError as e:
        logger.error("Invalid data: %s", e)
        return 1

    navigator = DayNavigator(aligned, start=args.day)
    if not navigator.has_data:
        logger.warning("Nothing to show: %s", navigator.date_label())
        return 1

    if args.date:
        try:
            navigator.go_to(dt.datetime.strptime(args.date, ISO_DATE_FORMAT).date())
        except ValueError:
            logger.error("Could not parse --date=%s. Use YYYY-MM-DD.", args.date)
            return 1
        except KeyError as e:
            logger.error("%s", e.args[0])
            return 1

    day = navigator.current()
    _print_day(navigator, day)

    snapshot = None
    if args.at:
        try:
            clock = dt.datetime.strptime(args.at, CLOCK_FORMAT).time()
        except ValueError:
            logger.error("Could not parse --at=%s. Use HH:MM.", args.at)
            return 1
        snapshot = snapshot_at(day, dt.datetime.combine(day.date, clock))
        print(f"\nAt {args.at}:")
        for line in snapshot.info_lines or ["(no activity)"]:
            print(f"  {line}")
        if snapshot.mood is not None:
            print(f"  mood: arousal {snapshot.mood.arousal:.1f}, valence {snapshot.mood.valence:.1f}")

    if args.output:
        payload = {"day": day.model_dump(mode="json")}
        if snapshot is not None:
            payload["snapshot"] = snapshot.model_dump(mode="json")
        out_path = Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        logger.info("Wrote day %s to %s", day.key, out_path)

    return 0


if __name__ == "__main__":
    sys.exit(main())

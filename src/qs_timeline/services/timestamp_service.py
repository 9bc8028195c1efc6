"""Date/time parsing shared by the source loaders and the interval pairer.

Every value is parsed with a fixed pattern. Failures raise
`TimestampParseError` so the record being built fails instead of carrying an
invalid timestamp.
"""
from __future__ import annotations

import datetime as dt
from typing import Optional

from qs_timeline.config import CLOCK_FORMAT, ISO_DATE_FORMAT, TIMESTAMP_FORMAT


class TimestampParseError(ValueError):
    """A date or time field could not be parsed with its expected pattern."""


def _require(value: Optional[str], what: str) -> str:
    if value is None or str(value).strip() == "":
        raise TimestampParseError(f"Missing {what}")
    return str(value).strip()


def parse_date(value: Optional[str], fmt: str = ISO_DATE_FORMAT) -> dt.date:
    text = _require(value, "date")
    try:
        return dt.datetime.strptime(text, fmt).date()
    except ValueError as e:
        raise TimestampParseError(f"Invalid date {text!r} (expected {fmt}): {e}") from e


def parse_clock(value: Optional[str], fmt: str = CLOCK_FORMAT) -> dt.time:
    text = _require(value, "time of day")
    try:
        return dt.datetime.strptime(text, fmt).time()
    except ValueError as e:
        raise TimestampParseError(f"Invalid time {text!r} (expected {fmt}): {e}") from e


def parse_timestamp(date_str: Optional[str], time_str: Optional[str], fmt: str = TIMESTAMP_FORMAT) -> dt.datetime:
    """Parse `"<date> <time>"` with the fixed `YYYY-MM-DD HH:MM` pattern."""
    date_text = _require(date_str, "date")
    time_text = _require(time_str, "time of day")
    combined = f"{date_text} {time_text}"
    try:
        return dt.datetime.strptime(combined, fmt)
    except ValueError as e:
        raise TimestampParseError(f"Invalid timestamp {combined!r} (expected {fmt}): {e}") from e

"""Source ingestion service.

Reads the four personal-log CSV exports and maps their rows onto typed
records:

- transit (OV-chipkaart history) -> `TransitRow`
- school schedule -> `DayEvent` ("School")
- sleep log -> `DayEvent` ("Slaap"), split at midnight when needed
- emotion log -> `MoodSample`

`load_sources` reads all four in parallel and fails as a whole when any one
of them fails.
"""
from __future__ import annotations

import datetime as dt
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Dict, List, Sequence, TypeVar

import pandas as pd

from qs_timeline.config import MOOD_CLOCK_FORMAT, US_SHORT_DATE_FORMAT, SourcePaths
from qs_timeline.data_models.day_event import DayEvent, EventLabel
from qs_timeline.data_models.mood_sample import MoodSample
from qs_timeline.data_models.source_records import SourceRecords
from qs_timeline.data_models.transit_row import TransitRow
from qs_timeline.services.timestamp_service import parse_clock, parse_date, parse_timestamp


logger = logging.getLogger(__name__)

RawRow = Dict[str, str]
T = TypeVar("T")

TRANSIT_REQUIRED_COLS = {"Transactie", "Datum", "Vertrek"}
SCHOOL_REQUIRED_COLS = {"Start date", "Start time", "End time", "Activity", "Location"}
SLEEP_REQUIRED_COLS = {"Slaap", "Start Slaap Tijd", "Laatste Wekker Tijd"}
MOOD_REQUIRED_COLS = {"Emotie", "Tijd", "Arousal", "Valance", "Wat"}


class SourceLoadError(RuntimeError):
    """One of the personal-log sources could not be loaded."""

    def __init__(self, source: str, cause: BaseException):
        self.source = source
        super().__init__(f"Failed to load {source} data: {cause}")


def read_raw_rows(csv_path: Path | str, required_cols: set[str] | None = None, sep: str = ",") -> List[RawRow]:
    """Read a CSV into a list of column -> string mappings.

    Every cell is kept as a string and empty cells stay empty strings, so
    the per-source normalisers decide what a missing value means.
    """
    path = Path(csv_path)
    if not path.exists():
        raise FileNotFoundError(f"CSV file not found: {path}")

    df = pd.read_csv(path, dtype=str, keep_default_na=False, sep=sep)
    df.columns = [str(c).strip() for c in df.columns]

    if required_cols:
        missing = required_cols - set(df.columns)
        if missing:
            raise ValueError(f"Missing required columns in {path.name}: {sorted(missing)}")

    rows: List[RawRow] = df.to_dict(orient="records")
    logger.debug("Read %d rows from %s", len(rows), path)
    return rows


def _cell(row: RawRow, column: str) -> str | None:
    value = row.get(column)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def normalize_transit_row(row: RawRow) -> TransitRow:
    """Map an OV-chipkaart row; `Datum` is DD-MM-YYYY and is reversed to ISO order."""
    checkin_time = _cell(row, "Check-in")
    checkout_time = _cell(row, "Check-uit")
    raw_date = _cell(row, "Datum") or ""
    return TransitRow(
        type=_cell(row, "Transactie") or "",
        time=checkin_time or checkout_time,
        date="-".join(reversed(raw_date.split("-"))),
        origin=_cell(row, "Vertrek"),
        destination=_cell(row, "Bestemming"),
    )


def school_row_to_event(row: RawRow) -> DayEvent:
    date_str = _cell(row, "Start date")
    return DayEvent(
        label=EventLabel.SCHOOL,
        description=f"{_cell(row, 'Activity')} @ {_cell(row, 'Location')}",
        date=parse_date(date_str),
        beginning=parse_timestamp(date_str, _cell(row, "Start time")),
        end=parse_timestamp(date_str, _cell(row, "End time")),
    )


def sleep_row_to_events(row: RawRow) -> List[DayEvent]:
    """Map a sleep log row onto one or two timeline events.

    `Slaap` is the date the sleep started. When the alarm time is earlier on
    the clock than the start time the night crossed midnight: the evening part
    stays on that date (up to midnight) and the rest moves to the next date.
    """
    night = parse_date(_cell(row, "Slaap"), US_SHORT_DATE_FORMAT)
    start = parse_clock(_cell(row, "Start Slaap Tijd"))
    wake = parse_clock(_cell(row, "Laatste Wekker Tijd"))
    description = f"{start:%H:%M} - {wake:%H:%M}"

    if start <= wake:
        return [
            DayEvent(
                label=EventLabel.SLEEP,
                description=description,
                date=night,
                beginning=dt.datetime.combine(night, start),
                end=dt.datetime.combine(night, wake),
            )
        ]

    morning = night + dt.timedelta(days=1)
    midnight = dt.datetime.combine(morning, dt.time.min)
    return [
        DayEvent(
            label=EventLabel.SLEEP,
            description=description,
            date=night,
            beginning=dt.datetime.combine(night, start),
            end=midnight,
        ),
        DayEvent(
            label=EventLabel.SLEEP,
            description=description,
            date=morning,
            beginning=midnight,
            end=dt.datetime.combine(morning, wake),
        ),
    ]


def mood_row_to_sample(row: RawRow) -> MoodSample:
    try:
        arousal = float(_cell(row, "Arousal") or "")
        valence = float(_cell(row, "Valance") or "")
    except ValueError as e:
        raise ValueError(f"Invalid arousal/valence values: {e}") from e

    return MoodSample(
        date=parse_date(_cell(row, "Emotie"), US_SHORT_DATE_FORMAT),
        time=parse_clock(_cell(row, "Tijd"), MOOD_CLOCK_FORMAT),
        arousal=arousal,
        valence=valence,
        description=_cell(row, "Wat") or "",
    )


def _normalise_rows(rows: Sequence[RawRow], normalise: Callable[[RawRow], T], source: str) -> List[T]:
    records: List[T] = []
    for idx, row in enumerate(rows):
        try:
            records.append(normalise(row))
        except ValueError:
            logger.error("Could not normalise %s row %d: %r", source, idx, row)
            raise
    return records


def load_transit_rows(csv_path: Path | str, sep: str = ",") -> List[TransitRow]:
    rows = read_raw_rows(csv_path, TRANSIT_REQUIRED_COLS, sep=sep)
    records = _normalise_rows(rows, normalize_transit_row, "transit")
    logger.info("Loaded %d transit rows from %s", len(records), csv_path)
    return records


def load_school_events(csv_path: Path | str, sep: str = ",") -> List[DayEvent]:
    rows = read_raw_rows(csv_path, SCHOOL_REQUIRED_COLS, sep=sep)
    records = _normalise_rows(rows, school_row_to_event, "school")
    logger.info("Loaded %d school events from %s", len(records), csv_path)
    return records


def load_sleep_events(csv_path: Path | str, sep: str = ",") -> List[DayEvent]:
    rows = read_raw_rows(csv_path, SLEEP_REQUIRED_COLS, sep=sep)
    nights = _normalise_rows(rows, sleep_row_to_events, "sleep")
    records = [event for night in nights for event in night]
    logger.info("Loaded %d sleep events (%d nights) from %s", len(records), len(nights), csv_path)
    return records


def load_mood_samples(csv_path: Path | str, sep: str = ",") -> List[MoodSample]:
    rows = read_raw_rows(csv_path, MOOD_REQUIRED_COLS, sep=sep)
    records = _normalise_rows(rows, mood_row_to_sample, "mood")
    logger.info("Loaded %d mood samples from %s", len(records), csv_path)
    return records


def load_sources(paths: SourcePaths, sep: str = ",") -> SourceRecords:
    """Load all four sources concurrently and return them together.

    The loads run in a thread pool and are joined before returning. If any
    load fails the remaining ones are cancelled (when not yet started) and
    `SourceLoadError` is raised for the first failure; no partial result is
    returned.
    """
    loaders = {
        "transit": (load_transit_rows, paths.transit),
        "school": (load_school_events, paths.school),
        "sleep": (load_sleep_events, paths.sleep),
        "mood": (load_mood_samples, paths.mood),
    }

    results = {}
    with ThreadPoolExecutor(max_workers=len(loaders)) as pool:
        futures = {pool.submit(fn, path, sep): name for name, (fn, path) in loaders.items()}
        for future in as_completed(futures):
            name = futures[future]
            try:
                results[name] = future.result()
            except Exception as e:
                for other in futures:
                    other.cancel()
                logger.error("Loading %s data failed: %s", name, e)
                raise SourceLoadError(name, e) from e

    return SourceRecords(
        transit_rows=results["transit"],
        school_events=results["school"],
        sleep_events=results["sleep"],
        mood_samples=results["mood"],
    )

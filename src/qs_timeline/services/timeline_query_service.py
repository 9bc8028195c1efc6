"""Queries the day chart runs when the time slider moves.

The chart maps one day onto a horizontal axis of `CHART_WIDTH` pixels. A
slider position is turned back into a moment of the selected day, and the
events and mood around that moment fill the info box and the mood line.
"""
from __future__ import annotations

import datetime as dt
import logging
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd

from qs_timeline.config import CATEGORY10, CHART_WIDTH, CLOCK_FORMAT
from qs_timeline.data_models.day_event import DayEvent
from qs_timeline.data_models.day_index import ActivitySnapshot, AlignedDay, DayBucket
from qs_timeline.data_models.mood_sample import MoodReading, MoodSample


logger = logging.getLogger(__name__)

MOOD_COLUMNS = ["timestamp", "arousal", "valence", "description"]


def day_bounds(day: dt.date) -> Tuple[dt.datetime, dt.datetime]:
    start = dt.datetime.combine(day, dt.time.min)
    return start, start + dt.timedelta(days=1)


def time_at_position(day: dt.date, position: float, width: float = CHART_WIDTH) -> dt.datetime:
    """Invert the day scale: slider position in [0, width] -> moment of `day`.

    Positions outside the axis are clamped to its ends.
    """
    if width <= 0:
        raise ValueError(f"Chart width must be positive, got {width}")
    start, end = day_bounds(day)
    fraction = min(max(float(position) / float(width), 0.0), 1.0)
    return start + (end - start) * fraction


def position_of(day: dt.date, moment: dt.datetime, width: float = CHART_WIDTH) -> float:
    """Forward day scale: moment -> x position; moments outside the day extrapolate."""
    start, end = day_bounds(day)
    return (moment - start) / (end - start) * float(width)


def format_hm(moment: dt.datetime) -> str:
    return moment.strftime(CLOCK_FORMAT)


def active_events_at(bucket: DayBucket, moment: dt.datetime) -> List[DayEvent]:
    """Events of the bucket strictly containing `moment` (exclusive at both ends)."""
    return [
        r for r in bucket.records
        if isinstance(r, DayEvent) and r.beginning < moment < r.end
    ]


def info_box_lines(event: DayEvent) -> List[str]:
    return [
        event.label,
        event.description,
        f"{format_hm(event.beginning)} - {format_hm(event.end)}",
    ]


def mood_frame(bucket: DayBucket) -> pd.DataFrame:
    """Mood samples of a bucket as a time-sorted DataFrame for the line chart."""
    samples = [r for r in bucket.records if isinstance(r, MoodSample)]
    if not samples:
        return pd.DataFrame(columns=MOOD_COLUMNS)

    df = pd.DataFrame.from_records(
        [
            {
                "timestamp": s.timestamp,
                "arousal": float(s.arousal),
                "valence": float(s.valence),
                "description": s.description,
            }
            for s in samples
        ],
        columns=MOOD_COLUMNS,
    )
    df["timestamp"] = pd.to_datetime(df["timestamp"])
    # stable sort keeps log order for samples logged at the same minute
    return df.sort_values("timestamp", kind="stable").reset_index(drop=True)


def mood_at(bucket: DayBucket, moment: dt.datetime) -> Optional[MoodReading]:
    """Arousal and valence at `moment`, linearly interpolated between samples.

    Before the first or after the last sample the nearest sample's values are
    used. Returns None when the bucket has no mood samples.
    """
    df = mood_frame(bucket)
    if df.empty:
        return None

    start, _ = day_bounds(bucket.date)
    xs = (df["timestamp"] - pd.Timestamp(start)).dt.total_seconds().to_numpy()
    x = (moment - start).total_seconds()

    arousal = float(np.interp(x, xs, df["arousal"].to_numpy()))
    valence = float(np.interp(x, xs, df["valence"].to_numpy()))
    return MoodReading(arousal=arousal, valence=valence)


def unique_labels(events: Iterable[DayEvent]) -> List[str]:
    return sorted({e.label for e in events})


def label_colors(labels: Iterable[str]) -> Dict[str, str]:
    """Assign the categorical palette to labels in order, cycling after ten."""
    return {label: CATEGORY10[i % len(CATEGORY10)] for i, label in enumerate(labels)}


def snapshot_at(day: AlignedDay, moment: dt.datetime) -> ActivitySnapshot:
    active = active_events_at(day.timeline, moment)
    snapshot = ActivitySnapshot(
        moment=moment,
        active_events=active,
        mood=mood_at(day.mood, moment),
        info_lines=info_box_lines(active[0]) if active else [],
    )
    logger.debug("Snapshot at %s: %d active event(s)", format_hm(moment), len(active))
    return snapshot

"""Group dated records into day buckets and align two day indexes."""
from __future__ import annotations

import datetime as dt
import logging
from typing import Dict, Iterable, List

from qs_timeline.data_models.day_index import AlignedDay, AlignedDayIndex, DayBucket, DayIndex, DayRecord


logger = logging.getLogger(__name__)


def group_by_day(records: Iterable[DayRecord]) -> DayIndex:
    """Group records by their `date` into buckets sorted by calendar date.

    Within a bucket records keep their input order. Empty input gives an
    empty index.
    """
    groups: Dict[dt.date, List[DayRecord]] = {}
    for record in records:
        groups.setdefault(record.date, []).append(record)

    index = [DayBucket(date=day, records=groups[day]) for day in sorted(groups)]
    logger.debug("Grouped records into %d day bucket(s)", len(index))
    return index


def intersect_day_indexes(timeline_index: DayIndex, mood_index: DayIndex) -> AlignedDayIndex:
    """Keep the dates present in both indexes, in the timeline index's order.

    Each `AlignedDay` references the matching bucket from both sides.
    """
    if not timeline_index or not mood_index:
        return []

    mood_by_date = {bucket.date: bucket for bucket in mood_index}

    aligned = [
        AlignedDay(date=bucket.date, timeline=bucket, mood=mood_by_date[bucket.date])
        for bucket in timeline_index
        if bucket.date in mood_by_date
    ]

    dropped = len(timeline_index) + len(mood_index) - 2 * len(aligned)
    logger.info(
        "Aligned %d day(s) with both timeline and mood data (%d day(s) dropped)",
        len(aligned),
        dropped,
    )
    return aligned

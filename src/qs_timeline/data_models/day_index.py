"""Per-day grouping models.

`DayBucket` holds every record of one calendar date in source order. A list
of buckets sorted by date is a day index; `AlignedDay` pairs the timeline
bucket and the mood bucket of a date present in both indexes.
"""
from __future__ import annotations

import datetime as dt
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from qs_timeline.data_models.day_event import DayEvent, TransitInterval
from qs_timeline.data_models.mood_sample import MoodReading, MoodSample


DayRecord = Union[TransitInterval, DayEvent, MoodSample]


class DayBucket(BaseModel):
    """All records sharing one calendar date, in first-seen order."""

    date: dt.date
    records: List[DayRecord] = Field(default_factory=list)

    @property
    def key(self) -> str:
        return self.date.isoformat()

    def __len__(self) -> int:
        return len(self.records)


class AlignedDay(BaseModel):
    """A date with data on both the timeline side and the mood side."""

    date: dt.date
    timeline: DayBucket
    mood: DayBucket

    @property
    def key(self) -> str:
        return self.date.isoformat()


class ActivitySnapshot(BaseModel):
    """What was going on at one moment of an aligned day.

    `info_lines` are the lines of the chart's info box for the first active
    event (label, description, time range); empty when nothing was active.
    """

    moment: dt.datetime
    active_events: List[Union[TransitInterval, DayEvent]] = Field(default_factory=list)
    mood: Optional[MoodReading] = None
    info_lines: List[str] = Field(default_factory=list)


DayIndex = List[DayBucket]
AlignedDayIndex = List[AlignedDay]

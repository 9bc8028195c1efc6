"""Timeline event models.

A `DayEvent` is one block on the day timeline: a school lesson, a stretch of
sleep or a transit trip. Events are partitioned by their `date`; both
timestamps must fall inside that day.
"""
from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator


class EventLabel:
    """Plain-string container for the timeline category tags."""

    TRANSIT = "openbaar vervoer"
    SCHOOL = "School"
    SLEEP = "Slaap"


class DayEvent(BaseModel):
    """A dated activity with a beginning and an end.

    `end` may be the midnight that closes `date` so that an activity running
    until the end of the day still belongs to that day.
    """

    model_config = ConfigDict(frozen=True)

    label: str
    description: str
    date: dt.date
    beginning: dt.datetime
    end: dt.datetime

    @model_validator(mode="after")
    def _check_within_day(self) -> "DayEvent":
        if self.beginning > self.end:
            raise ValueError(
                f"Event '{self.description}' ends before it begins "
                f"({self.beginning:%Y-%m-%d %H:%M} > {self.end:%Y-%m-%d %H:%M})"
            )
        day_start = dt.datetime.combine(self.date, dt.time.min)
        day_end = day_start + dt.timedelta(days=1)
        if not (day_start <= self.beginning and self.end <= day_end):
            raise ValueError(
                f"Event '{self.description}' does not fall within {self.date.isoformat()}"
            )
        return self

    @property
    def duration(self) -> dt.timedelta:
        return self.end - self.beginning


class TransitInterval(DayEvent):
    """A transit trip built from a paired check-in and check-out."""

    origin: str
    destination: Optional[str] = None

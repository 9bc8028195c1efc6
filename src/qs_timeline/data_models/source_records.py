from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from qs_timeline.data_models.day_event import DayEvent
from qs_timeline.data_models.mood_sample import MoodSample
from qs_timeline.data_models.transit_row import TransitRow


class SourceRecords(BaseModel):
    """Normalised records of all four personal logs, loaded together."""

    transit_rows: List[TransitRow] = Field(default_factory=list)
    school_events: List[DayEvent] = Field(default_factory=list)
    sleep_events: List[DayEvent] = Field(default_factory=list)
    mood_samples: List[MoodSample] = Field(default_factory=list)

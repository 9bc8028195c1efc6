from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict


class MoodSample(BaseModel):
    """A point-in-time arousal/valence observation from the emotion log.

    Both scores are on the 0-10 scale used when logging.
    """

    model_config = ConfigDict(frozen=True)

    date: dt.date
    time: dt.time
    arousal: float
    valence: float
    description: str = ""

    @property
    def timestamp(self) -> dt.datetime:
        return dt.datetime.combine(self.date, self.time)


class MoodReading(BaseModel):
    """Arousal/valence at an arbitrary moment, interpolated between samples."""

    arousal: float
    valence: float

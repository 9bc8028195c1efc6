"""Day-by-day navigation over an aligned day index.

`DayNavigator` owns the selected-day cursor. The rendering layer calls
`next()` / `previous()` on the prev/next-day buttons and re-reads
`current()` afterwards; nothing else holds navigation state.
"""
from __future__ import annotations

import datetime as dt
import logging
from typing import Optional

from qs_timeline.config import DATE_LABEL_FORMAT, NO_DATA_LABEL
from qs_timeline.data_models.day_index import AlignedDay, AlignedDayIndex, DayBucket


logger = logging.getLogger(__name__)


class DayNavigator:
    """Cursor over an `AlignedDayIndex` that wraps around at both ends.

    The starting position is taken modulo the number of days, so any integer
    is accepted. With an empty index the navigator is in the "no data" state:
    `has_data` is False and the query/transition methods return None.
    """

    def __init__(self, days: AlignedDayIndex, start: int = 0):
        self._days = list(days)
        self._cursor = start % len(self._days) if self._days else 0
        if not self._days:
            logger.warning("DayNavigator created without any aligned days")

    @property
    def has_data(self) -> bool:
        return bool(self._days)

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._days)

    def current(self) -> Optional[AlignedDay]:
        if not self._days:
            return None
        return self._days[self._cursor]

    def _step(self, delta: int) -> Optional[AlignedDay]:
        if not self._days:
            return None
        self._cursor = (self._cursor + delta) % len(self._days)
        logger.debug("Selected day %d: %s", self._cursor, self._days[self._cursor].key)
        return self._days[self._cursor]

    def next(self) -> Optional[AlignedDay]:
        return self._step(1)

    def previous(self) -> Optional[AlignedDay]:
        return self._step(-1)

    def go_to(self, day: dt.date) -> AlignedDay:
        """Move the cursor to `day`; raise KeyError if that date is not aligned."""
        for i, aligned in enumerate(self._days):
            if aligned.date == day:
                self._cursor = i
                return aligned
        raise KeyError(f"No aligned data for {day.isoformat()}")

    def timeline_bucket(self) -> Optional[DayBucket]:
        day = self.current()
        return day.timeline if day is not None else None

    def mood_bucket(self) -> Optional[DayBucket]:
        day = self.current()
        return day.mood if day is not None else None

    def date_label(self, fmt: str = DATE_LABEL_FORMAT) -> str:
        day = self.current()
        if day is None:
            return NO_DATA_LABEL
        return day.date.strftime(fmt)

"""Run the whole load -> pair -> group -> intersect pipeline."""
from __future__ import annotations

import logging
from typing import List

from qs_timeline.config import SourcePaths
from qs_timeline.data_models.day_event import DayEvent
from qs_timeline.data_models.day_index import AlignedDayIndex
from qs_timeline.data_models.source_records import SourceRecords
from qs_timeline.services.day_grouping_service import group_by_day, intersect_day_indexes
from qs_timeline.services.interval_pairing_service import pair_transit_rows
from qs_timeline.services.source_ingestion_service import load_sources


logger = logging.getLogger(__name__)


def build_timeline_events(sources: SourceRecords, strict_pairing: bool = True) -> List[DayEvent]:
    """Transit trips followed by school and sleep events, in source order."""
    trips = pair_transit_rows(sources.transit_rows, strict=strict_pairing)
    return [*trips, *sources.school_events, *sources.sleep_events]


def build_aligned_day_index(sources: SourceRecords, strict_pairing: bool = True) -> AlignedDayIndex:
    timeline_events = build_timeline_events(sources, strict_pairing=strict_pairing)

    timeline_index = group_by_day(timeline_events)
    mood_index = group_by_day(sources.mood_samples)
    aligned = intersect_day_indexes(timeline_index, mood_index)

    logger.info(
        "Timeline: %d events over %d days; mood: %d samples over %d days; %d aligned days",
        len(timeline_events),
        len(timeline_index),
        len(sources.mood_samples),
        len(mood_index),
        len(aligned),
    )
    if not aligned:
        logger.warning("No day has both timeline and mood data")
    return aligned


def load_aligned_day_index(paths: SourcePaths, strict_pairing: bool = True, sep: str = ",") -> AlignedDayIndex:
    """Load every source from disk and build the aligned day index."""
    sources = load_sources(paths, sep=sep)
    return build_aligned_day_index(sources, strict_pairing=strict_pairing)

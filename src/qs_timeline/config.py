"""Defaults for loading the personal logs and scrubbing through a day.

Paths point at the `data/` folder of the project root and can be overridden
from the CLI. The chart constants mirror the dashboard layout the timeline
queries are computed against.
"""
from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel


# Fixed parse patterns for the source files
ISO_DATE_FORMAT = "%Y-%m-%d"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"
TRANSIT_DATE_FORMAT = "%d-%m-%Y"
US_SHORT_DATE_FORMAT = "%m/%d/%y"
CLOCK_FORMAT = "%H:%M"
MOOD_CLOCK_FORMAT = "%H%M"

# Dashboard layout
CHART_WIDTH = 1400
DEFAULT_START_DAY = 11
DATE_LABEL_FORMAT = "%A %d %B %Y"
NO_DATA_LABEL = "no data"

# d3.schemeCategory10, used for the activity blocks
CATEGORY10 = [
    "#1f77b4",
    "#ff7f0e",
    "#2ca02c",
    "#d62728",
    "#9467bd",
    "#8c564b",
    "#e377c2",
    "#7f7f7f",
    "#bcbd22",
    "#17becf",
]


class SourcePaths(BaseModel):
    """Location of the four personal-log CSV exports."""

    transit: Path = Path("data/ovlog.csv")
    school: Path = Path("data/school_schedule.csv")
    sleep: Path = Path("data/sleep.csv")
    mood: Path = Path("data/emotions.csv")

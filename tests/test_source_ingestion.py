from datetime import date, datetime, time
from pathlib import Path

import pytest

from qs_timeline.config import SourcePaths
from qs_timeline.data_models.day_event import EventLabel
from qs_timeline.services.source_ingestion_service import (
    SourceLoadError,
    load_mood_samples,
    load_school_events,
    load_sleep_events,
    load_sources,
    load_transit_rows,
    mood_row_to_sample,
    normalize_transit_row,
    sleep_row_to_events,
)
from qs_timeline.services.timestamp_service import TimestampParseError


TRANSIT_HEADER = "Datum,Check-in,Vertrek,Check-uit,Bestemming,Bedrag,Transactie"
SCHOOL_HEADER = "Start date,Start time,End time,Activity,Location"
SLEEP_HEADER = "Slaap,Start Slaap Tijd,Laatste Wekker Tijd"
MOOD_HEADER = "Emotie,Tijd,Arousal,Valance,Wat"


def _write_csv(path: Path, header: str, rows: list[str]) -> Path:
    path.write_text("\n".join([header] + rows), encoding="utf-8")
    return path


def _write_all(tmp_path: Path) -> SourcePaths:
    return SourcePaths(
        transit=_write_csv(tmp_path / "ovlog.csv", TRANSIT_HEADER, [
            "14-03-2017,08:02,Amsterdam Centraal,,,,Check-in",
            "14-03-2017,,Amsterdam Centraal,08:31,Amsterdam Sloterdijk,1.20,Check-uit",
        ]),
        school=_write_csv(tmp_path / "school_schedule.csv", SCHOOL_HEADER, [
            "2017-03-14,09:00,12:00,Frontend Development,Wibauthuis",
        ]),
        sleep=_write_csv(tmp_path / "sleep.csv", SLEEP_HEADER, [
            "3/13/17,23:30,07:15",
        ]),
        mood=_write_csv(tmp_path / "emotions.csv", MOOD_HEADER, [
            "3/14/17,0930,6,7,college",
        ]),
    )


def test_normalize_transit_row_reverses_date_and_picks_time():
    checkin = normalize_transit_row({"Transactie": "Check-in", "Check-in": "08:02", "Check-uit": "",
                                     "Datum": "14-03-2017", "Vertrek": "Amsterdam Centraal", "Bestemming": ""})
    checkout = normalize_transit_row({"Transactie": "Check-uit", "Check-in": "", "Check-uit": "08:31",
                                      "Datum": "14-03-2017", "Vertrek": "Amsterdam Centraal",
                                      "Bestemming": "Amsterdam Sloterdijk"})

    assert checkin.date == "2017-03-14"
    assert checkin.time == "08:02"
    assert checkin.destination is None
    assert checkout.time == "08:31"
    assert checkout.destination == "Amsterdam Sloterdijk"


def test_load_transit_rows(tmp_path):
    paths = _write_all(tmp_path)

    rows = load_transit_rows(paths.transit)

    assert [r.type for r in rows] == ["Check-in", "Check-uit"]
    assert rows[0].origin == "Amsterdam Centraal"


def test_load_school_events(tmp_path):
    paths = _write_all(tmp_path)

    events = load_school_events(paths.school)

    assert len(events) == 1
    ev = events[0]
    assert ev.label == EventLabel.SCHOOL
    assert ev.description == "Frontend Development @ Wibauthuis"
    assert ev.beginning == datetime(2017, 3, 14, 9, 0)
    assert ev.end == datetime(2017, 3, 14, 12, 0)


def test_sleep_crossing_midnight_is_split(tmp_path):
    paths = _write_all(tmp_path)

    events = load_sleep_events(paths.sleep)

    assert len(events) == 2
    evening, morning = events
    assert evening.date == date(2017, 3, 13)
    assert evening.beginning == datetime(2017, 3, 13, 23, 30)
    assert evening.end == datetime(2017, 3, 14, 0, 0)
    assert morning.date == date(2017, 3, 14)
    assert morning.end == datetime(2017, 3, 14, 7, 15)


def test_sleep_within_one_day_is_one_event():
    events = sleep_row_to_events({"Slaap": "3/14/17", "Start Slaap Tijd": "13:00", "Laatste Wekker Tijd": "14:30"})

    assert len(events) == 1
    assert events[0].duration.total_seconds() == 90 * 60


def test_mood_row_to_sample():
    sample = mood_row_to_sample({"Emotie": "3/14/17", "Tijd": "0930", "Arousal": "6", "Valance": "7.5", "Wat": "college"})

    assert sample.date == date(2017, 3, 14)
    assert sample.time == time(9, 30)
    assert sample.valence == 7.5
    assert sample.timestamp == datetime(2017, 3, 14, 9, 30)


def test_mood_row_with_bad_score_raises():
    with pytest.raises(ValueError):
        mood_row_to_sample({"Emotie": "3/14/17", "Tijd": "0930", "Arousal": "high", "Valance": "7", "Wat": ""})


def test_mood_row_with_bad_date_raises():
    with pytest.raises(TimestampParseError):
        mood_row_to_sample({"Emotie": "2017-03-14", "Tijd": "0930", "Arousal": "6", "Valance": "7", "Wat": ""})


def test_missing_required_column(tmp_path):
    path = _write_csv(tmp_path / "emotions.csv", "Emotie,Tijd,Arousal", ["3/14/17,0930,6"])

    with pytest.raises(ValueError, match="Missing required columns"):
        load_mood_samples(path)


def test_load_sources_all_present(tmp_path):
    paths = _write_all(tmp_path)

    sources = load_sources(paths)

    assert len(sources.transit_rows) == 2
    assert len(sources.school_events) == 1
    assert len(sources.sleep_events) == 2
    assert len(sources.mood_samples) == 1


def test_load_sources_fails_as_a_whole_on_missing_file(tmp_path):
    paths = _write_all(tmp_path)
    paths.mood = tmp_path / "does_not_exist.csv"

    with pytest.raises(SourceLoadError) as exc_info:
        load_sources(paths)

    assert exc_info.value.source == "mood"
    assert isinstance(exc_info.value.__cause__, FileNotFoundError)


def test_load_sources_fails_on_unparseable_row(tmp_path):
    paths = _write_all(tmp_path)
    _write_csv(paths.school, SCHOOL_HEADER, ["2017-03-14,nine,12:00,Lecture,Room"])

    with pytest.raises(SourceLoadError) as exc_info:
        load_sources(paths)

    assert exc_info.value.source == "school"
    assert isinstance(exc_info.value.__cause__, TimestampParseError)

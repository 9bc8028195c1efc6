from datetime import date, datetime, time

from qs_timeline.data_models.day_event import DayEvent
from qs_timeline.data_models.mood_sample import MoodSample
from qs_timeline.services.day_grouping_service import group_by_day, intersect_day_indexes


def _make_event(day: str, description: str, start: str = "09:00", end: str = "10:00") -> DayEvent:
    d = date.fromisoformat(day)
    return DayEvent(
        label="School",
        description=description,
        date=d,
        beginning=datetime.combine(d, time.fromisoformat(start)),
        end=datetime.combine(d, time.fromisoformat(end)),
    )


def _make_mood(day: str, clock: str = "12:00") -> MoodSample:
    return MoodSample(date=date.fromisoformat(day), time=time.fromisoformat(clock), arousal=5, valence=6)


def test_group_sorts_by_calendar_date():
    events = [_make_event("2018-03-01", "a"), _make_event("2017-12-31", "b"), _make_event("2018-01-15", "c")]

    index = group_by_day(events)

    assert [b.key for b in index] == ["2017-12-31", "2018-01-15", "2018-03-01"]


def test_group_is_stable_within_a_day():
    events = [
        _make_event("2018-01-02", "first", "15:00", "16:00"),
        _make_event("2018-01-01", "other"),
        _make_event("2018-01-02", "second", "08:00", "09:00"),
        _make_event("2018-01-02", "third", "11:00", "12:00"),
    ]

    index = group_by_day(events)

    assert len(index) == 2
    assert [e.description for e in index[1].records] == ["first", "second", "third"]


def test_group_empty_input():
    assert group_by_day([]) == []


def test_group_handles_mood_samples():
    index = group_by_day([_make_mood("2018-01-02"), _make_mood("2018-01-01"), _make_mood("2018-01-02", "18:00")])

    assert [b.key for b in index] == ["2018-01-01", "2018-01-02"]
    assert len(index[1]) == 2


def test_intersect_keeps_common_dates_in_timeline_order():
    timeline = group_by_day([_make_event("2018-01-01", "1"), _make_event("2018-01-02", "2"), _make_event("2018-01-03", "3")])
    mood = group_by_day([_make_mood("2018-01-04"), _make_mood("2018-01-03"), _make_mood("2018-01-02")])

    aligned = intersect_day_indexes(timeline, mood)

    assert [a.key for a in aligned] == ["2018-01-02", "2018-01-03"]
    assert aligned[0].timeline.records[0].description == "2"
    assert aligned[0].mood.date == date(2018, 1, 2)


def test_intersect_is_symmetric_on_dates():
    a = group_by_day([_make_event(d, d) for d in ("2018-01-01", "2018-01-02", "2018-01-03")])
    b = group_by_day([_make_event(d, d) for d in ("2018-01-02", "2018-01-03", "2018-01-04")])

    assert {x.key for x in intersect_day_indexes(a, b)} == {x.key for x in intersect_day_indexes(b, a)}


def test_intersect_without_overlap_is_empty():
    timeline = group_by_day([_make_event("2018-01-01", "x")])
    mood = group_by_day([_make_mood("2018-02-01")])

    assert intersect_day_indexes(timeline, mood) == []


def test_intersect_with_empty_side_is_empty():
    timeline = group_by_day([_make_event("2018-01-01", "x")])

    assert intersect_day_indexes(timeline, []) == []
    assert intersect_day_indexes([], timeline) == []


def test_intersect_full_overlap_keeps_every_date():
    days = ["2018-01-01", "2018-01-05", "2018-02-01"]
    timeline = group_by_day([_make_event(d, d) for d in days])
    mood = group_by_day([_make_mood(d) for d in days])

    assert [a.key for a in intersect_day_indexes(timeline, mood)] == days

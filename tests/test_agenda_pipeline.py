"""
Tests for booking normalization, filtering and ordering.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from barber_admin.application.use_cases.agenda_pipeline import (
    apply_filters,
    build_display_list,
    normalize_booking,
    normalize_bookings,
    sort_bookings,
)
from barber_admin.application.utils.booking_time import day_of_week, parse_booking_time
from barber_admin.domain.entities.agenda_filter import ALL, AgendaFilter
from barber_admin.domain.entities.booking import Booking, StaffRef, StatusCategory

NOW = datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc)  # a Wednesday

SHOW_ALL = AgendaFilter(staff_id=ALL, day_of_week=ALL, include_past=True)


def _booking(booking_id: str, time: str | None, staff_id: str = "A", status: str = "booked") -> Booking:
    return Booking(id=booking_id, time=time, status=status, barber=StaffRef(id=staff_id, name=staff_id))


def _iso(moment: datetime) -> str:
    return moment.isoformat().replace("+00:00", "Z")


def test_parse_booking_time_handles_zulu_and_garbage():
    """ISO strings with Z parse to aware datetimes; junk yields None instead of raising."""
    assert parse_booking_time("2024-01-10T10:00:00Z") == datetime(2024, 1, 10, 10, 0, tzinfo=timezone.utc)
    assert parse_booking_time("2024-01-10T10:00:00") == datetime(2024, 1, 10, 10, 0, tzinfo=timezone.utc)
    assert parse_booking_time("not-a-date") is None
    assert parse_booking_time("") is None
    assert parse_booking_time(None) is None
    assert parse_booking_time(12345) is None


def test_normalize_marks_past_and_invalid():
    """isPast is true only for valid times strictly before now."""
    past = normalize_booking(_booking("1", "2024-01-09T10:00:00Z"), NOW)
    future = normalize_booking(_booking("2", "2024-01-11T10:00:00Z"), NOW)
    invalid = normalize_booking(_booking("3", "not-a-date"), NOW)
    exactly_now = normalize_booking(_booking("4", _iso(NOW)), NOW)

    assert past.time_valid and past.is_past
    assert future.time_valid and not future.is_past
    assert not invalid.time_valid and not invalid.is_past
    assert not exactly_now.is_past
    assert past.status_category is StatusCategory.booked


def test_ordering_future_ascending_then_past_descending():
    """Tomorrow 09:00, tomorrow 15:00, yesterday 10:00, last week."""
    yesterday = _booking("yesterday", _iso(datetime(2024, 1, 9, 10, 0, tzinfo=timezone.utc)))
    tomorrow_late = _booking("tomorrow_15", _iso(datetime(2024, 1, 11, 15, 0, tzinfo=timezone.utc)))
    tomorrow_early = _booking("tomorrow_09", _iso(datetime(2024, 1, 11, 9, 0, tzinfo=timezone.utc)))
    last_week = _booking("last_week", _iso(NOW - timedelta(days=7)))

    result = build_display_list([yesterday, tomorrow_late, tomorrow_early, last_week], SHOW_ALL, now=NOW)

    assert [item.id for item in result] == ["tomorrow_09", "tomorrow_15", "yesterday", "last_week"]


def test_invalid_time_sorts_last_and_never_raises():
    """A booking with an unparseable time is placed after every valid one."""
    bookings = [
        _booking("bad", "not-a-date"),
        _booking("past", "2024-01-01T10:00:00Z"),
        _booking("future", "2024-02-01T10:00:00Z"),
    ]

    result = sort_bookings(normalize_bookings(bookings, NOW))

    assert [item.id for item in result] == ["future", "past", "bad"]


def test_invalid_time_only_survives_unfiltered_view():
    """Any active filter drops bookings without a usable time."""
    bookings = normalize_bookings([_booking("bad", "not-a-date"), _booking("ok", "2024-02-01T10:00:00Z")], NOW)

    assert [item.id for item in apply_filters(bookings, SHOW_ALL)] == ["bad", "ok"]
    assert [item.id for item in apply_filters(bookings, AgendaFilter(include_past=False))] == ["ok"]
    assert [item.id for item in apply_filters(bookings, AgendaFilter(staff_id="A", include_past=True))] == ["ok"]


def test_filters_are_conjunctive():
    """Staff, day-of-week and past predicates all have to hold."""
    bookings = normalize_bookings(
        [
            _booking("a_thu", "2024-01-11T10:00:00Z", staff_id="A"),  # Thursday
            _booking("b_thu", "2024-01-11T11:00:00Z", staff_id="B"),
            _booking("a_fri", "2024-01-12T10:00:00Z", staff_id="A"),
            _booking("a_past_thu", "2024-01-04T10:00:00Z", staff_id="A"),
        ],
        NOW,
    )

    result = apply_filters(bookings, AgendaFilter(staff_id="A", day_of_week=4, include_past=False))
    assert [item.id for item in result] == ["a_thu"]

    with_past = apply_filters(bookings, AgendaFilter(staff_id="A", day_of_week=4, include_past=True))
    assert [item.id for item in with_past] == ["a_thu", "a_past_thu"]


def test_day_of_week_is_evaluated_in_utc():
    """Sunday 23:30 at UTC-3 is already Monday in UTC."""
    start = parse_booking_time("2024-01-07T23:30:00-03:00")

    assert day_of_week(start) == 1
    assert day_of_week(start, timezone(timedelta(hours=-3))) == 0

    bookings = normalize_bookings([_booking("late", "2024-01-07T23:30:00-03:00")], NOW)
    assert [item.id for item in apply_filters(bookings, AgendaFilter(day_of_week=1, include_past=True))] == ["late"]
    assert apply_filters(bookings, AgendaFilter(day_of_week=0, include_past=True)) == []


def test_pipeline_is_idempotent():
    """Filtering and sorting an already-displayed list changes nothing."""
    bookings = [
        _booking("1", "2024-01-11T10:00:00Z"),
        _booking("2", "2024-01-09T10:00:00Z"),
        _booking("3", "2024-01-12T10:00:00Z", staff_id="B"),
    ]
    agenda_filter = AgendaFilter(include_past=True, staff_id="A")

    once = build_display_list(bookings, agenda_filter, now=NOW)
    twice = sort_bookings(apply_filters(once, agenda_filter))

    assert [item.id for item in twice] == [item.id for item in once] == ["1", "2"]


def test_filter_from_query_validates_day():
    """Query strings map to filters; out-of-range days are rejected."""
    assert AgendaFilter.from_query("A", "3", True) == AgendaFilter(staff_id="A", day_of_week=3, include_past=True)
    assert AgendaFilter.from_query(None, "all").day_of_week == ALL
    assert AgendaFilter.from_query("", None).staff_id == ALL

    for bad in ("7", "-1", "monday"):
        with pytest.raises(ValueError):
            AgendaFilter.from_query(None, bad)


def test_times_at_the_edge_of_the_calendar_are_invalid():
    """Offsets that push an instant past year 1 or 9999 in UTC are treated as invalid times."""
    assert parse_booking_time("9999-12-31T23:00:00-05:00") is None
    assert parse_booking_time("0001-01-01T01:00:00+05:00") is None

    bookings = [
        _booking("late", "9999-12-31T23:00:00-05:00"),
        _booking("early", "0001-01-01T01:00:00+05:00"),
        _booking("ok", "2024-01-08T10:00:00Z"),
    ]
    result = build_display_list(bookings, AgendaFilter(day_of_week=1, include_past=True), now=NOW)

    assert [item.id for item in result] == ["ok"]


def test_day_filter_skips_instants_the_display_zone_cannot_hold():
    """A valid UTC instant that overflows in the display zone never matches a day."""
    bookings = normalize_bookings([_booking("edge", "9999-12-31T23:30:00Z")], NOW)
    assert bookings[0].time_valid

    plus_five = timezone(timedelta(hours=5))
    for day in range(7):
        assert apply_filters(bookings, AgendaFilter(day_of_week=day, include_past=True), tz=plus_five) == []

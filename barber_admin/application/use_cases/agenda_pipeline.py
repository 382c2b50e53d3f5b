from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Iterable, Sequence

from barber_admin.application.utils.booking_time import day_of_week, parse_booking_time, utc_now
from barber_admin.application.utils.status_presenter import categorize_status
from barber_admin.domain.entities.agenda_filter import ALL, AgendaFilter
from barber_admin.domain.entities.booking import Booking, NormalizedBooking


def normalize_booking(booking: Booking, now: datetime | None = None) -> NormalizedBooking:
    now = now or utc_now()
    start = parse_booking_time(booking.time)
    return NormalizedBooking(
        booking=booking,
        start=start,
        time_valid=start is not None,
        is_past=start is not None and start < now,
        status_category=categorize_status(booking.status),
    )


def normalize_bookings(bookings: Iterable[Booking], now: datetime | None = None) -> list[NormalizedBooking]:
    # One "now" per pass so past/future is consistent across the list.
    now = now or utc_now()
    return [normalize_booking(booking, now) for booking in bookings]


def apply_filters(
    bookings: Iterable[NormalizedBooking],
    agenda_filter: AgendaFilter,
    tz: tzinfo = timezone.utc,
) -> list[NormalizedBooking]:
    """Apply the staff, day-of-week and past/future predicates.

    Bookings without a valid time only survive the fully unfiltered view.
    """
    filtered = list(bookings)

    if not agenda_filter.is_unfiltered:
        filtered = [item for item in filtered if item.time_valid]

    if agenda_filter.staff_id != ALL:
        filtered = [item for item in filtered if item.staff_id == agenda_filter.staff_id]

    if agenda_filter.day_of_week != ALL:
        filtered = [item for item in filtered if _falls_on(item, agenda_filter.day_of_week, tz)]

    if not agenda_filter.include_past:
        filtered = [item for item in filtered if not item.is_past]

    return filtered


def _falls_on(item: NormalizedBooking, day: int | str, tz: tzinfo) -> bool:
    if item.start is None:
        return False
    try:
        return day_of_week(item.start, tz) == day
    except OverflowError:
        # Valid in UTC but not representable in the configured zone.
        return False


def _order_key(item: NormalizedBooking) -> tuple[int, float]:
    if item.start is None:
        return (2, 0.0)
    timestamp = item.start.timestamp()
    if item.is_past:
        return (1, -timestamp)  # most recent past first
    return (0, timestamp)  # soonest future first


def sort_bookings(bookings: Iterable[NormalizedBooking]) -> list[NormalizedBooking]:
    """Upcoming nearest-first, then past most-recent-first, invalid times last (stable)."""
    return sorted(bookings, key=_order_key)


def build_display_list(
    bookings: Sequence[Booking],
    agenda_filter: AgendaFilter,
    now: datetime | None = None,
    tz: tzinfo = timezone.utc,
) -> list[NormalizedBooking]:
    normalized = normalize_bookings(bookings, now)
    return sort_bookings(apply_filters(normalized, agenda_filter, tz))

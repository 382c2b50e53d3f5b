from __future__ import annotations

from datetime import timedelta
from typing import Iterable, Mapping

from barber_admin.domain.entities.agenda_filter import ALL
from barber_admin.domain.entities.booking import NormalizedBooking
from barber_admin.domain.entities.calendar_event import CalendarEvent

DEFAULT_DURATION_MINUTES = 60
FALLBACK_COLOR = "#4B5563"


def project_event(
    item: NormalizedBooking,
    color: str,
    default_duration_minutes: int = DEFAULT_DURATION_MINUTES,
) -> CalendarEvent | None:
    """Build the calendar event for one booking, or None when it cannot be drawn."""
    booking = item.booking
    if booking.customer is None or booking.service is None or item.start is None:
        return None

    duration = booking.service.duration_minutes or default_duration_minutes
    try:
        end = item.start + timedelta(minutes=duration)
    except OverflowError:
        return None
    return CalendarEvent(
        id=booking.id,
        title=f"{booking.customer.name} - {booking.service.name}",
        start=item.start,
        end=end,
        color=color,
        staff_id=item.staff_id,
    )


def project_calendar_events(
    bookings: Iterable[NormalizedBooking],
    colors: Mapping[str, str],
    staff_id: str = ALL,
    default_duration_minutes: int = DEFAULT_DURATION_MINUTES,
    fallback_color: str = FALLBACK_COLOR,
) -> list[CalendarEvent]:
    events: list[CalendarEvent] = []
    for item in bookings:
        if staff_id != ALL and item.staff_id != staff_id:
            continue
        color = colors.get(item.staff_id, fallback_color) if item.staff_id else fallback_color
        event = project_event(item, color, default_duration_minutes)
        if event is not None:
            events.append(event)
    return events

"""
Tests for staff color assignment and its per-collection memo.
"""

from __future__ import annotations

from barber_admin.application.utils.staff_colors import STAFF_COLOR_PALETTE, StaffColorCache, assign_staff_colors
from barber_admin.domain.entities.booking import Booking, StaffRef


def _booking(booking_id: str, staff_id: str | None) -> Booking:
    barber = StaffRef(id=staff_id, name=f"Barber {staff_id}") if staff_id else None
    return Booking(id=booking_id, time="2024-01-10T10:00:00Z", status="booked", barber=barber)


def test_colors_follow_first_seen_order():
    """Staff B, A, B, A, C get palette[0], palette[1], palette[2] in first-seen order."""
    bookings = [_booking(str(i), staff) for i, staff in enumerate(["B", "A", "B", "A", "C"])]

    colors = assign_staff_colors(bookings)

    assert list(colors) == ["B", "A", "C"]
    assert colors == {
        "B": STAFF_COLOR_PALETTE[0],
        "A": STAFF_COLOR_PALETTE[1],
        "C": STAFF_COLOR_PALETTE[2],
    }


def test_palette_is_reused_cyclically():
    """The 11th distinct staff member wraps around to the first palette color."""
    bookings = [_booking(str(i), f"staff_{i}") for i in range(11)]

    colors = assign_staff_colors(bookings)

    assert len(STAFF_COLOR_PALETTE) == 10
    assert colors["staff_10"] == STAFF_COLOR_PALETTE[0]
    assert colors["staff_9"] == STAFF_COLOR_PALETTE[9]


def test_bookings_without_staff_are_skipped():
    """A booking whose barber was deleted does not consume a palette slot."""
    bookings = [_booking("1", None), _booking("2", "A")]

    assert assign_staff_colors(bookings) == {"A": STAFF_COLOR_PALETTE[0]}


def test_cache_returns_same_map_for_unchanged_collection():
    """Recomputing from the same collection object yields the identical color map."""
    cache = StaffColorCache()
    bookings = (_booking("1", "A"), _booking("2", "B"))

    first = cache.colors_for(bookings)
    second = cache.colors_for(bookings)

    assert first is second


def test_cache_recomputes_for_new_collection():
    """A fresh fetch (new collection object) triggers recomputation."""
    cache = StaffColorCache()
    first = cache.colors_for((_booking("1", "A"), _booking("2", "B")))

    refetched = cache.colors_for((_booking("3", "B"), _booking("4", "A")))

    assert refetched is not first
    assert refetched["B"] == STAFF_COLOR_PALETTE[0]
    assert refetched["A"] == STAFF_COLOR_PALETTE[1]

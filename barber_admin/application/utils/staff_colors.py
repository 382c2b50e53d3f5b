from __future__ import annotations

import threading
from typing import Iterable, Sequence

from barber_admin.domain.entities.booking import Booking

STAFF_COLOR_PALETTE: tuple[str, ...] = (
    "#3174AD",
    "#E67E22",
    "#27AE60",
    "#8E44AD",
    "#C0392B",
    "#16A085",
    "#D4AC0D",
    "#2C3E50",
    "#E84393",
    "#7F8C8D",
)


def assign_staff_colors(
    bookings: Iterable[Booking],
    palette: Sequence[str] = STAFF_COLOR_PALETTE,
) -> dict[str, str]:
    """Give each distinct staff id a palette color in first-seen order, cycling past the end.

    `bookings` must be in the order received from the API, not display order.
    Bookings without a staff member are skipped.
    """
    colors: dict[str, str] = {}
    for booking in bookings:
        if booking.barber is None:
            continue
        staff_id = booking.barber.id
        if staff_id in colors:
            continue
        colors[staff_id] = palette[len(colors) % len(palette)]
    return colors


class StaffColorCache:
    """Memoizes the color map on the identity of the booking collection.

    Filter changes reuse the same collection object, so staff keep their colors;
    a fresh fetch produces a new collection and triggers recomputation.
    """

    def __init__(self, palette: Sequence[str] = STAFF_COLOR_PALETTE) -> None:
        self._palette = tuple(palette)
        self._source: Sequence[Booking] | None = None
        self._colors: dict[str, str] = {}
        self._lock = threading.Lock()

    def colors_for(self, bookings: Sequence[Booking]) -> dict[str, str]:
        with self._lock:
            if self._source is not bookings:
                self._colors = assign_staff_colors(bookings, self._palette)
                # Holding the reference keeps its id from being reused.
                self._source = bookings
            return self._colors

from __future__ import annotations

from barber_admin.domain.entities.booking import StatusCategory
from barber_admin.domain.entities.status_badge import StatusBadge

OCCURRED_CATEGORY = "occurred"

_STATUS_ALIASES = {
    "booked": StatusCategory.booked,
    "confirmed": StatusCategory.confirmed,
    "completed": StatusCategory.completed,
    "canceled": StatusCategory.canceled,
    "cancelled": StatusCategory.canceled,  # legacy spelling
}

_STATUS_BADGES = {
    StatusCategory.booked: StatusBadge(label="Scheduled", color_class="info", category="booked"),
    StatusCategory.confirmed: StatusBadge(label="Confirmed", color_class="primary", category="confirmed"),
    StatusCategory.completed: StatusBadge(label="Completed", color_class="success", category="completed"),
    StatusCategory.canceled: StatusBadge(label="Canceled", color_class="danger", category="canceled"),
}

OCCURRED_BADGE = StatusBadge(
    label="Occurred/Pending confirmation",
    color_class="warning",
    category=OCCURRED_CATEGORY,
)


def categorize_status(status: str | None) -> StatusCategory:
    normalized = (status or "").strip().lower()
    return _STATUS_ALIASES.get(normalized, StatusCategory.unknown)


def present_status(status: str | None, is_past: bool) -> StatusBadge:
    """Map a booking status (and whether its time has elapsed) to the badge every view shows."""
    category = categorize_status(status)
    if is_past and category is StatusCategory.booked:
        return OCCURRED_BADGE

    badge = _STATUS_BADGES.get(category)
    if badge:
        return badge

    raw = (status or "").strip()
    label = raw[:1].upper() + raw[1:] if raw else "Unknown"
    return StatusBadge(label=label, color_class="default", category=StatusCategory.unknown.value)


_PAYMENT_BADGES = {
    "approved": StatusBadge(label="Paid online", color_class="success", category="paid"),
    "pending": StatusBadge(label="Payment pending", color_class="warning", category="pending"),
    "in_process": StatusBadge(label="Payment pending", color_class="warning", category="pending"),
    "authorized": StatusBadge(label="Payment pending", color_class="warning", category="pending"),
    "rejected": StatusBadge(label="Failed/Canceled", color_class="danger", category="failed"),
    "cancelled": StatusBadge(label="Failed/Canceled", color_class="danger", category="failed"),
    "refunded": StatusBadge(label="Failed/Canceled", color_class="danger", category="failed"),
    "charged_back": StatusBadge(label="Failed/Canceled", color_class="danger", category="failed"),
}

IN_PERSON_BADGE = StatusBadge(label="In person", color_class="default", category="in_person")


def present_payment_status(status: str | None) -> StatusBadge:
    """Payment processor status -> badge. Bookings without an online payment are paid in person."""
    if not status:
        return IN_PERSON_BADGE
    return _PAYMENT_BADGES.get(status.strip().lower(), IN_PERSON_BADGE)

"""
Tests for status and payment badges.
"""

from __future__ import annotations

from barber_admin.application.utils.status_presenter import (
    IN_PERSON_BADGE,
    OCCURRED_CATEGORY,
    present_payment_status,
    present_status,
)


def test_booked_depends_on_time():
    """A past booked slot is 'occurred'; an upcoming one is 'Scheduled'."""
    assert present_status("booked", is_past=True).category == OCCURRED_CATEGORY
    upcoming = present_status("booked", is_past=False)
    assert upcoming.label == "Scheduled"
    assert upcoming.color_class == "info"


def test_canceled_ignores_time():
    """Canceled stays canceled whether or not the slot has passed."""
    for is_past in (True, False):
        badge = present_status("canceled", is_past)
        assert badge.label == "Canceled"
        assert badge.color_class == "danger"

    assert present_status("cancelled", is_past=False).label == "Canceled"


def test_confirmed_and_completed():
    """Confirmed and completed map to their own badges regardless of time."""
    assert present_status("confirmed", is_past=True).color_class == "primary"
    assert present_status("completed", is_past=True).color_class == "success"
    assert present_status("COMPLETED", is_past=False).label == "Completed"


def test_unknown_status_passes_through():
    """Unrecognized statuses show their raw value with a neutral color."""
    badge = present_status("no-show", is_past=True)
    assert badge.label == "No-show"
    assert badge.color_class == "default"
    assert badge.category == "unknown"

    assert present_status(None, is_past=False).label == "Unknown"


def test_payment_status_badges():
    """Online payment states collapse into paid, pending and failed; everything else is in person."""
    assert present_payment_status("approved").label == "Paid online"
    assert present_payment_status("in_process").color_class == "warning"
    assert present_payment_status("charged_back").color_class == "danger"
    assert present_payment_status(None) is IN_PERSON_BADGE
    assert present_payment_status("something-else") is IN_PERSON_BADGE

"""
Tests for the log formatter that renders `extra={...}` context.
"""

from __future__ import annotations

import logging

from barber_admin.core.log_context import LOG_CONTEXT_KEYS, ContextFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("barber_admin.test", logging.INFO, __file__, 1, "Booking updated", None, None)
    record.__dict__.update(extra)
    return record


def test_context_keys_follow_the_message_in_order():
    """Known keys are appended in declaration order; empty values are dropped."""
    formatter = ContextFormatter("%(levelname)s:%(name)s:%(message)s")

    line = formatter.format(_record(booking_id="b1", barbershop_id="shop_1", error=""))

    assert line == "INFO:barber_admin.test:Booking updated | barbershop_id=shop_1 booking_id=b1"


def test_unknown_keys_are_ignored():
    """Only the configured keys are rendered."""
    formatter = ContextFormatter("%(message)s")

    assert formatter.format(_record(customer_phone="11999990000")) == "Booking updated"


def test_formatter_defaults_to_shared_keys():
    """Every shared context key is rendered by the default formatter."""
    formatter = ContextFormatter("%(message)s")

    line = formatter.format(_record(**{key: key.upper() for key in LOG_CONTEXT_KEYS}))

    assert line == "Booking updated | " + " ".join(f"{key}={key.upper()}" for key in LOG_CONTEXT_KEYS)

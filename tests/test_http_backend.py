"""
Tests for the HTTP backend adapter using an in-process httpx transport.
"""

from __future__ import annotations

import json
from datetime import date

import httpx
import pytest

from barber_admin.application.exceptions import BackendContractError, BackendUpstreamError
from barber_admin.infrastructure.backend.http_backend import HttpBarbershopBackend

BASE_URL = "https://api.example.test"


def _backend(handler) -> HttpBarbershopBackend:
    return HttpBarbershopBackend(
        base_url=BASE_URL,
        api_token="secret",
        timeout=5.0,
        transport=httpx.MockTransport(handler),
    )


def test_list_bookings_sends_token_and_parses():
    """Bookings are fetched with the bearer token and converted to entities."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=[{"_id": "b1", "time": "2024-01-11T10:00:00Z", "status": "booked"}])

    bookings = _backend(handler).list_bookings("shop_1")

    assert seen == {"path": "/barbershops/shop_1/bookings", "auth": "Bearer secret"}
    assert [b.id for b in bookings] == ["b1"]


def test_update_status_sends_json_body():
    """Status changes are PUT with the new status."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"_id": "b1", "time": None, "status": "canceled"})

    updated = _backend(handler).update_booking_status("shop_1", "b1", "canceled")

    assert seen == {"method": "PUT", "body": {"status": "canceled"}}
    assert updated.status == "canceled"


def test_metrics_use_date_params():
    """Dashboard metrics are queried with ISO start and end dates."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        return httpx.Response(200, json={"totalRevenue": 10})

    metrics = _backend(handler).get_dashboard_metrics("shop_1", date(2024, 1, 1), date(2024, 1, 31))

    assert seen == {"startDate": "2024-01-01", "endDate": "2024-01-31"}
    assert metrics == {"totalRevenue": 10}


def test_error_status_raises_upstream_error_with_message():
    """Non-2xx responses surface the backend's error message and status code."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, json={"error": "Forbidden for this barbershop"})

    with pytest.raises(BackendUpstreamError) as excinfo:
        _backend(handler).list_barbers("shop_1")

    assert str(excinfo.value) == "Forbidden for this barbershop"
    assert excinfo.value.status_code == 403


def test_network_error_raises_upstream_error():
    """Transport failures are wrapped as upstream errors."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(BackendUpstreamError):
        _backend(handler).list_bookings("shop_1")


def test_wrong_shape_raises_contract_error():
    """An object where a list is expected is a contract violation."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"unexpected": True})

    with pytest.raises(BackendContractError):
        _backend(handler).list_bookings("shop_1")


def test_requires_base_url(monkeypatch):
    """The HTTP backend cannot be built without a base URL."""
    from barber_admin.core import config

    monkeypatch.setattr(config.settings, "BACKEND_BASE_URL", None)

    with pytest.raises(ValueError):
        HttpBarbershopBackend()

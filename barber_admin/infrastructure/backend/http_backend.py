from __future__ import annotations

import logging
from datetime import date
from typing import Any

import httpx

from barber_admin.application.dto.booking_payload import parse_barbers, parse_booking, parse_bookings
from barber_admin.application.dto.catalog_payload import (
    parse_blocked_days,
    parse_customers,
    parse_plans,
    parse_products,
)
from barber_admin.application.exceptions import BackendContractError, BackendUpstreamError
from barber_admin.application.ports.barbershop_backend import BarbershopBackendPort
from barber_admin.core.config import settings
from barber_admin.domain.entities.booking import Booking, StaffRef
from barber_admin.domain.entities.customer import Customer, Plan
from barber_admin.domain.entities.period import BlockedDay
from barber_admin.domain.entities.product import Product


class HttpBarbershopBackend(BarbershopBackendPort):
    def __init__(
        self,
        base_url: str | None = None,
        api_token: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = (base_url or settings.BACKEND_BASE_URL or "").rstrip("/")
        self._api_token = api_token or settings.BACKEND_API_TOKEN
        self._logger = logging.getLogger(__name__)

        if not self._base_url:
            raise ValueError("BACKEND_BASE_URL is required for the HTTP backend")

        headers = {"Accept": "application/json"}
        if self._api_token:
            headers["Authorization"] = f"Bearer {self._api_token}"
        self._client = httpx.Client(
            base_url=self._base_url,
            headers=headers,
            timeout=timeout or settings.BACKEND_TIMEOUT_SECONDS,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            self._logger.error("Backend request failed", extra={"reason": f"{method} {path}", "error": str(e)})
            raise BackendUpstreamError(f"Backend unavailable: {e}") from e

        if response.status_code >= 400:
            message = _error_message(response)
            self._logger.error(
                "Backend returned an error",
                extra={"reason": f"{method} {path}", "status": response.status_code, "error": message},
            )
            raise BackendUpstreamError(message, status_code=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise BackendContractError(f"Backend returned invalid JSON for {method} {path}") from e

    def list_bookings(self, barbershop_id: str) -> tuple[Booking, ...]:
        return parse_bookings(self._request("GET", f"/barbershops/{barbershop_id}/bookings"))

    def list_barber_bookings(self, barbershop_id: str) -> tuple[Booking, ...]:
        return parse_bookings(self._request("GET", f"/barbershops/{barbershop_id}/barbers/bookings/barber"))

    def list_barbers(self, barbershop_id: str) -> tuple[StaffRef, ...]:
        return parse_barbers(self._request("GET", f"/barbershops/{barbershop_id}/barbers"))

    def update_booking_status(self, barbershop_id: str, booking_id: str, status: str) -> Booking | None:
        data = self._request(
            "PUT",
            f"/barbershops/{barbershop_id}/bookings/{booking_id}/status",
            json={"status": status},
        )
        return parse_booking(data)

    def delete_booking(self, barbershop_id: str, booking_id: str) -> None:
        self._request("DELETE", f"/barbershops/{barbershop_id}/bookings/{booking_id}")

    def get_dashboard_metrics(self, barbershop_id: str, start: date, end: date) -> dict[str, Any]:
        return self._metrics(f"/barbershops/{barbershop_id}/dashboard-metrics", start, end)

    def get_barber_performance(self, barbershop_id: str, start: date, end: date) -> dict[str, Any]:
        return self._metrics(f"/barbershops/{barbershop_id}/barber-performance", start, end)

    def _metrics(self, path: str, start: date, end: date) -> dict[str, Any]:
        data = self._request("GET", path, params={"startDate": start.isoformat(), "endDate": end.isoformat()})
        if not isinstance(data, dict):
            raise BackendContractError(f"Expected a metrics object from {path}")
        return data

    def list_customers(self, barbershop_id: str) -> list[Customer]:
        return parse_customers(self._request("GET", f"/barbershops/{barbershop_id}/admin/customers"))

    def list_plans(self, barbershop_id: str) -> list[Plan]:
        return parse_plans(self._request("GET", f"/barbershops/{barbershop_id}/plans"))

    def subscribe_customer(self, barbershop_id: str, customer_id: str, plan_id: str) -> None:
        self._request(
            "POST",
            f"/barbershops/{barbershop_id}/admin/customers/{customer_id}/subscribe",
            json={"planId": plan_id},
        )

    def list_products(self, barbershop_id: str, params: dict[str, str]) -> list[Product]:
        return parse_products(self._request("GET", f"/barbershops/{barbershop_id}/products", params=params))

    def create_product(self, barbershop_id: str, payload: dict[str, Any]) -> None:
        self._request("POST", f"/barbershops/{barbershop_id}/products", json=payload)

    def update_product(self, barbershop_id: str, product_id: str, payload: dict[str, Any]) -> None:
        self._request("PUT", f"/barbershops/{barbershop_id}/products/{product_id}", json=payload)

    def delete_product(self, barbershop_id: str, product_id: str) -> None:
        self._request("DELETE", f"/barbershops/{barbershop_id}/products/{product_id}")

    def move_stock(self, barbershop_id: str, product_id: str, payload: dict[str, Any]) -> None:
        self._request("POST", f"/barbershops/{barbershop_id}/products/{product_id}/stock", json=payload)

    def list_blocked_days(self, barbershop_id: str) -> list[BlockedDay]:
        return parse_blocked_days(self._request("GET", f"/barbershops/{barbershop_id}/blocked-days"))

    def block_day(self, barbershop_id: str, day: date) -> None:
        self._request("POST", f"/barbershops/{barbershop_id}/blocked-days", json={"date": day.isoformat()})

    def unblock_day(self, barbershop_id: str, day_id: str) -> None:
        self._request("DELETE", f"/barbershops/{barbershop_id}/blocked-days/{day_id}")


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        error = body.get("error") or body.get("message") or body.get("detail")
        if isinstance(error, str) and error:
            return error
    return f"Backend returned HTTP {response.status_code}"

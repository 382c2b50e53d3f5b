from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Any, Iterable

from barber_admin.application.exceptions import BackendUpstreamError
from barber_admin.application.ports.barbershop_backend import BarbershopBackendPort
from barber_admin.domain.entities.booking import Booking, StaffRef
from barber_admin.domain.entities.customer import Customer, Plan
from barber_admin.domain.entities.period import BlockedDay
from barber_admin.domain.entities.product import Product


class MockBarbershopBackend(BarbershopBackendPort):
    """In-memory backend for local development and tests.

    Operation names listed in `fail_operations` raise BackendUpstreamError, and every call
    is recorded in `calls` as (operation, barbershop_id, *args).
    """

    def __init__(
        self,
        bookings: dict[str, Iterable[Booking]] | None = None,
        barbers: dict[str, Iterable[StaffRef]] | None = None,
        customers: dict[str, Iterable[Customer]] | None = None,
        plans: dict[str, Iterable[Plan]] | None = None,
        products: dict[str, Iterable[Product]] | None = None,
        metrics: dict[str, Any] | None = None,
        barber_id: str | None = None,
    ) -> None:
        self._bookings = {k: list(v) for k, v in (bookings or {}).items()}
        self._barbers = {k: tuple(v) for k, v in (barbers or {}).items()}
        self._customers = {k: list(v) for k, v in (customers or {}).items()}
        self._plans = {k: list(v) for k, v in (plans or {}).items()}
        self._products = {k: list(v) for k, v in (products or {}).items()}
        self._blocked_days: dict[str, list[BlockedDay]] = {}
        self._metrics = dict(metrics or {})
        self._barber_id = barber_id  # the "authenticated" barber for list_barber_bookings
        self.fail_operations: set[str] = set()
        self.calls: list[tuple[Any, ...]] = []
        self._logger = logging.getLogger(__name__)

    def _record(self, operation: str, barbershop_id: str, *args: Any) -> None:
        self.calls.append((operation, barbershop_id, *args))
        if operation in self.fail_operations:
            self._logger.info("Mock backend failing on purpose", extra={"reason": operation})
            raise BackendUpstreamError(f"Simulated backend failure: {operation}", status_code=503)

    def list_bookings(self, barbershop_id: str) -> tuple[Booking, ...]:
        self._record("list_bookings", barbershop_id)
        return tuple(self._bookings.get(barbershop_id, []))

    def list_barber_bookings(self, barbershop_id: str) -> tuple[Booking, ...]:
        self._record("list_barber_bookings", barbershop_id)
        return tuple(
            b for b in self._bookings.get(barbershop_id, []) if b.barber is not None and b.barber.id == self._barber_id
        )

    def list_barbers(self, barbershop_id: str) -> tuple[StaffRef, ...]:
        self._record("list_barbers", barbershop_id)
        return self._barbers.get(barbershop_id, ())

    def update_booking_status(self, barbershop_id: str, booking_id: str, status: str) -> Booking | None:
        self._record("update_booking_status", barbershop_id, booking_id, status)
        bookings = self._bookings.get(barbershop_id, [])
        for index, booking in enumerate(bookings):
            if booking.id == booking_id:
                bookings[index] = replace(booking, status=status)
                return bookings[index]
        raise BackendUpstreamError("Booking not found", status_code=404)

    def delete_booking(self, barbershop_id: str, booking_id: str) -> None:
        self._record("delete_booking", barbershop_id, booking_id)
        self._bookings[barbershop_id] = [b for b in self._bookings.get(barbershop_id, []) if b.id != booking_id]

    def get_dashboard_metrics(self, barbershop_id: str, start: date, end: date) -> dict[str, Any]:
        self._record("get_dashboard_metrics", barbershop_id, start, end)
        return {"period": {"startDate": start.isoformat(), "endDate": end.isoformat()}, **self._metrics}

    def get_barber_performance(self, barbershop_id: str, start: date, end: date) -> dict[str, Any]:
        self._record("get_barber_performance", barbershop_id, start, end)
        return {"period": {"startDate": start.isoformat(), "endDate": end.isoformat()}, **self._metrics}

    def list_customers(self, barbershop_id: str) -> list[Customer]:
        self._record("list_customers", barbershop_id)
        return list(self._customers.get(barbershop_id, []))

    def list_plans(self, barbershop_id: str) -> list[Plan]:
        self._record("list_plans", barbershop_id)
        return list(self._plans.get(barbershop_id, []))

    def subscribe_customer(self, barbershop_id: str, customer_id: str, plan_id: str) -> None:
        self._record("subscribe_customer", barbershop_id, customer_id, plan_id)

    def list_products(self, barbershop_id: str, params: dict[str, str]) -> list[Product]:
        self._record("list_products", barbershop_id, dict(params))
        products = self._products.get(barbershop_id, [])
        if params.get("lowStock") == "true":
            products = [p for p in products if p.is_low_stock]
        if "status" in params:
            products = [p for p in products if p.status == params["status"]]
        return list(products)

    def create_product(self, barbershop_id: str, payload: dict[str, Any]) -> None:
        self._record("create_product", barbershop_id, payload)

    def update_product(self, barbershop_id: str, product_id: str, payload: dict[str, Any]) -> None:
        self._record("update_product", barbershop_id, product_id, payload)

    def delete_product(self, barbershop_id: str, product_id: str) -> None:
        self._record("delete_product", barbershop_id, product_id)
        self._products[barbershop_id] = [p for p in self._products.get(barbershop_id, []) if p.id != product_id]

    def move_stock(self, barbershop_id: str, product_id: str, payload: dict[str, Any]) -> None:
        self._record("move_stock", barbershop_id, product_id, payload)

    def list_blocked_days(self, barbershop_id: str) -> list[BlockedDay]:
        self._record("list_blocked_days", barbershop_id)
        return list(self._blocked_days.get(barbershop_id, []))

    def block_day(self, barbershop_id: str, day: date) -> None:
        self._record("block_day", barbershop_id, day)
        days = self._blocked_days.setdefault(barbershop_id, [])
        days.append(BlockedDay(id=f"mock_day_{len(days) + 1}", day=day))

    def unblock_day(self, barbershop_id: str, day_id: str) -> None:
        self._record("unblock_day", barbershop_id, day_id)
        self._blocked_days[barbershop_id] = [d for d in self._blocked_days.get(barbershop_id, []) if d.id != day_id]

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Any

from barber_admin.domain.entities.booking import Booking, StaffRef
from barber_admin.domain.entities.customer import Customer, Plan
from barber_admin.domain.entities.period import BlockedDay
from barber_admin.domain.entities.product import Product


class BarbershopBackendPort(ABC):
    @abstractmethod
    def list_bookings(self, barbershop_id: str) -> tuple[Booking, ...]:
        """All bookings of the barbershop, in API order."""
        raise NotImplementedError

    @abstractmethod
    def list_barber_bookings(self, barbershop_id: str) -> tuple[Booking, ...]:
        """Bookings of the authenticated barber only."""
        raise NotImplementedError

    @abstractmethod
    def list_barbers(self, barbershop_id: str) -> tuple[StaffRef, ...]:
        raise NotImplementedError

    @abstractmethod
    def update_booking_status(self, barbershop_id: str, booking_id: str, status: str) -> Booking | None:
        """Set a booking status. Returns the updated booking when the backend echoes it."""
        raise NotImplementedError

    @abstractmethod
    def delete_booking(self, barbershop_id: str, booking_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_dashboard_metrics(self, barbershop_id: str, start: date, end: date) -> dict[str, Any]:
        """Aggregated metrics for the period. Opaque display data."""
        raise NotImplementedError

    @abstractmethod
    def get_barber_performance(self, barbershop_id: str, start: date, end: date) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def list_customers(self, barbershop_id: str) -> list[Customer]:
        raise NotImplementedError

    @abstractmethod
    def list_plans(self, barbershop_id: str) -> list[Plan]:
        raise NotImplementedError

    @abstractmethod
    def subscribe_customer(self, barbershop_id: str, customer_id: str, plan_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def list_products(self, barbershop_id: str, params: dict[str, str]) -> list[Product]:
        raise NotImplementedError

    @abstractmethod
    def create_product(self, barbershop_id: str, payload: dict[str, Any]) -> None:
        raise NotImplementedError

    @abstractmethod
    def update_product(self, barbershop_id: str, product_id: str, payload: dict[str, Any]) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete_product(self, barbershop_id: str, product_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def move_stock(self, barbershop_id: str, product_id: str, payload: dict[str, Any]) -> None:
        raise NotImplementedError

    @abstractmethod
    def list_blocked_days(self, barbershop_id: str) -> list[BlockedDay]:
        raise NotImplementedError

    @abstractmethod
    def block_day(self, barbershop_id: str, day: date) -> None:
        raise NotImplementedError

    @abstractmethod
    def unblock_day(self, barbershop_id: str, day_id: str) -> None:
        raise NotImplementedError

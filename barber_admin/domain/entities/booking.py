from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class StatusCategory(str, Enum):
    booked = "booked"
    confirmed = "confirmed"
    completed = "completed"
    canceled = "canceled"
    unknown = "unknown"


@dataclass(frozen=True)
class CustomerRef:
    id: str
    name: str
    phone: str | None = None


@dataclass(frozen=True)
class StaffRef:
    id: str
    name: str


@dataclass(frozen=True)
class ServiceRef:
    id: str
    name: str
    price: float | None = None
    duration_minutes: int | None = None


@dataclass(frozen=True)
class Booking:
    id: str
    time: str | None
    status: str
    customer: CustomerRef | None = None
    barber: StaffRef | None = None  # staff member
    service: ServiceRef | None = None
    notes: str | None = None
    payment_status: str | None = None  # payment processor status, display only


@dataclass(frozen=True)
class NormalizedBooking:
    booking: Booking
    start: datetime | None  # timezone-aware, None when time_valid is False
    time_valid: bool
    is_past: bool
    status_category: StatusCategory

    @property
    def id(self) -> str:
        return self.booking.id

    @property
    def staff_id(self) -> str | None:
        return self.booking.barber.id if self.booking.barber else None

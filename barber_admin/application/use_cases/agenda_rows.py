from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from barber_admin.application.utils.status_presenter import present_payment_status, present_status
from barber_admin.domain.entities.booking import NormalizedBooking, StatusCategory
from barber_admin.domain.entities.status_badge import StatusBadge

INVALID_DATE = "Invalid date"
INVALID_TIME = "Invalid time"
DELETED_CUSTOMER = "Deleted customer"
DELETED_SERVICE = "Deleted service"
DELETED_BARBER = "Deleted barber"
NOT_PROVIDED = "Not provided"
NO_PRICE = "N/A"


@dataclass(frozen=True)
class AgendaRow:
    id: str
    date: str
    time: str
    is_past: bool
    customer_name: str
    customer_phone: str
    service_name: str
    barber_name: str
    price: str
    status: StatusBadge
    payment: StatusBadge
    color: str
    can_complete: bool
    can_remove: bool
    remove_action: str  # "delete" for past bookings, "cancel" for upcoming ones
    notes: str | None = None


def build_agenda_row(item: NormalizedBooking, colors: Mapping[str, str], fallback_color: str) -> AgendaRow:
    booking = item.booking

    if item.start is not None:
        date_text = item.start.strftime("%d/%m/%Y")
        time_text = item.start.strftime("%H:%M")
    else:
        date_text, time_text = INVALID_DATE, INVALID_TIME

    customer = booking.customer
    service = booking.service
    price = service.price if service else None

    return AgendaRow(
        id=booking.id,
        date=date_text,
        time=time_text,
        is_past=item.is_past,
        customer_name=(customer.name if customer and customer.name else DELETED_CUSTOMER),
        customer_phone=(customer.phone if customer and customer.phone else NOT_PROVIDED),
        service_name=(service.name if service and service.name else DELETED_SERVICE),
        barber_name=(booking.barber.name if booking.barber and booking.barber.name else DELETED_BARBER),
        price=f"{price:.2f}" if price is not None else NO_PRICE,
        status=present_status(booking.status, item.is_past),
        payment=present_payment_status(booking.payment_status),
        color=colors.get(item.staff_id, fallback_color) if item.staff_id else fallback_color,
        can_complete=item.status_category in (StatusCategory.booked, StatusCategory.confirmed),
        can_remove=item.status_category is not StatusCategory.canceled,
        remove_action="delete" if item.is_past else "cancel",
        notes=booking.notes,
    )

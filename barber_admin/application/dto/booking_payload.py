from __future__ import annotations

import logging
import math
from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field, ValidationError

from barber_admin.application.exceptions import BackendContractError
from barber_admin.domain.entities.booking import Booking, CustomerRef, ServiceRef, StaffRef

logger = logging.getLogger(__name__)

ID_ALIASES = AliasChoices("_id", "id")


def optional_str(value: Any) -> str | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (str, int, float)):
        text = str(value).strip()
        return text or None
    return None


def optional_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def positive_int(value: Any) -> int | None:
    number = optional_number(value)
    return int(number) if number and number > 0 else None


def relation(value: Any) -> Any:
    # Deleted or unpopulated relations arrive as null or as a bare id.
    return value if isinstance(value, dict) else None


OptionalText = Annotated[str | None, BeforeValidator(optional_str)]
OptionalNumber = Annotated[float | None, BeforeValidator(optional_number)]
OptionalDuration = Annotated[int | None, BeforeValidator(positive_int)]


class PayloadModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class CustomerPayload(PayloadModel):
    id: OptionalText = Field(default=None, validation_alias=ID_ALIASES)
    name: OptionalText = None
    phone: OptionalText = None
    whatsapp: OptionalText = None

    def to_entity(self) -> CustomerRef:
        return CustomerRef(id=self.id or "", name=self.name or "", phone=self.phone or self.whatsapp)


class StaffPayload(PayloadModel):
    id: OptionalText = Field(default=None, validation_alias=ID_ALIASES)
    name: OptionalText = None

    def to_entity(self) -> StaffRef | None:
        if not self.id:
            return None
        return StaffRef(id=self.id, name=self.name or "")


class ServicePayload(PayloadModel):
    id: OptionalText = Field(default=None, validation_alias=ID_ALIASES)
    name: OptionalText = None
    price: OptionalNumber = None
    duration: OptionalDuration = Field(default=None, validation_alias=AliasChoices("duration", "durationMinutes"))

    def to_entity(self) -> ServiceRef:
        return ServiceRef(id=self.id or "", name=self.name or "", price=self.price, duration_minutes=self.duration)


class BookingPayloadDTO(PayloadModel):
    id: Annotated[str, BeforeValidator(optional_str)] = Field(validation_alias=ID_ALIASES)
    time: Any = None
    status: Annotated[str, BeforeValidator(lambda v: optional_str(v) or "")] = ""
    customer: Annotated[CustomerPayload | None, BeforeValidator(relation)] = None
    barber: Annotated[StaffPayload | None, BeforeValidator(relation)] = None
    service: Annotated[ServicePayload | None, BeforeValidator(relation)] = None
    notes: OptionalText = None
    payment_status: OptionalText = Field(
        default=None, validation_alias=AliasChoices("paymentStatus", "payment_status")
    )

    def to_entity(self) -> Booking:
        return Booking(
            id=self.id,
            time=self.time if isinstance(self.time, str) else None,
            status=self.status,
            customer=self.customer.to_entity() if self.customer else None,
            barber=self.barber.to_entity() if self.barber else None,
            service=self.service.to_entity() if self.service else None,
            notes=self.notes,
            payment_status=self.payment_status,
        )


def expect_list(payload: Any, what: str) -> list[Any]:
    if not isinstance(payload, list):
        raise BackendContractError(f"Expected a list of {what}, got {type(payload).__name__}")
    return payload


def parse_bookings(payload: Any) -> tuple[Booking, ...]:
    """Convert the bookings endpoint payload into entities, keeping API order.

    Entries that are not objects or have no id are dropped; partial entries are kept.
    """
    bookings: list[Booking] = []
    for index, raw in enumerate(expect_list(payload, "bookings")):
        if not isinstance(raw, dict):
            logger.warning("Skipping malformed booking entry", extra={"reason": f"index {index} is not an object"})
            continue
        try:
            bookings.append(BookingPayloadDTO.model_validate(raw).to_entity())
        except ValidationError as e:
            logger.warning("Skipping malformed booking entry", extra={"reason": f"index {index}", "error": str(e)})
    return tuple(bookings)


def parse_booking(payload: Any) -> Booking | None:
    if not isinstance(payload, dict):
        return None
    try:
        return BookingPayloadDTO.model_validate(payload).to_entity()
    except ValidationError:
        return None


def parse_barbers(payload: Any) -> tuple[StaffRef, ...]:
    barbers: list[StaffRef] = []
    for raw in expect_list(payload, "barbers"):
        if not isinstance(raw, dict):
            continue
        staff = StaffPayload.model_validate(raw).to_entity()
        if staff is not None:
            barbers.append(staff)
    return tuple(barbers)

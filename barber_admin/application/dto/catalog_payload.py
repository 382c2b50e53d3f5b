from __future__ import annotations

import logging
from typing import Annotated, Any

from pydantic import AliasChoices, BeforeValidator, Field, ValidationError

from barber_admin.application.dto.booking_payload import (
    ID_ALIASES,
    OptionalNumber,
    OptionalText,
    PayloadModel,
    expect_list,
    optional_str,
    relation,
)
from barber_admin.application.exceptions import BackendContractError
from barber_admin.application.utils.booking_time import parse_booking_time, parse_iso_date
from barber_admin.domain.entities.customer import Customer, Plan, Subscription
from barber_admin.domain.entities.period import BlockedDay
from barber_admin.domain.entities.product import Product

logger = logging.getLogger(__name__)

RequiredId = Annotated[str, BeforeValidator(optional_str)]


class PlanPayload(PayloadModel):
    id: RequiredId = Field(validation_alias=ID_ALIASES)
    name: OptionalText = None
    description: OptionalText = None
    price: OptionalNumber = None
    duration_in_days: OptionalNumber = Field(default=None, validation_alias=AliasChoices("durationInDays", "duration_in_days"))

    def to_entity(self) -> Plan:
        return Plan(
            id=self.id,
            name=self.name or "",
            price=self.price or 0.0,
            duration_in_days=int(self.duration_in_days or 0),
            description=self.description,
        )


class SubscriptionPayload(PayloadModel):
    id: RequiredId = Field(validation_alias=ID_ALIASES)
    status: OptionalText = None
    start_date: Any = Field(default=None, validation_alias=AliasChoices("startDate", "start_date"))
    end_date: Any = Field(default=None, validation_alias=AliasChoices("endDate", "end_date"))
    plan: Annotated[PlanPayload | None, BeforeValidator(relation)] = None

    def to_entity(self) -> Subscription:
        return Subscription(
            id=self.id,
            status=(self.status or "").lower(),
            start_date=parse_booking_time(self.start_date),
            end_date=parse_booking_time(self.end_date),
            plan=self.plan.to_entity() if self.plan else None,
        )


class CustomerRecordPayload(PayloadModel):
    id: RequiredId = Field(validation_alias=ID_ALIASES)
    name: OptionalText = None
    phone: OptionalText = None
    image_url: OptionalText = Field(default=None, validation_alias=AliasChoices("imageUrl", "image_url"))
    created_at: Any = Field(default=None, validation_alias=AliasChoices("createdAt", "created_at"))
    subscriptions: list[Any] = Field(default_factory=list)

    def to_entity(self) -> Customer:
        subscriptions: list[Subscription] = []
        for raw in self.subscriptions or []:
            if not isinstance(raw, dict):
                continue
            try:
                subscriptions.append(SubscriptionPayload.model_validate(raw).to_entity())
            except ValidationError:
                continue
        return Customer(
            id=self.id,
            name=self.name or "",
            phone=self.phone or "",
            created_at=parse_booking_time(self.created_at),
            image_url=self.image_url,
            subscriptions=tuple(subscriptions),
        )


class ProductPayload(PayloadModel):
    id: RequiredId = Field(validation_alias=ID_ALIASES)
    name: OptionalText = None
    category: OptionalText = None
    unit: OptionalText = None
    brand: OptionalText = None
    status: OptionalText = None
    price: dict[str, Any] = Field(default_factory=dict)
    stock: dict[str, Any] = Field(default_factory=dict)
    is_low_stock: bool = Field(default=False, validation_alias=AliasChoices("isLowStock", "is_low_stock"))
    profit_margin: OptionalNumber = Field(default=None, validation_alias=AliasChoices("profitMargin", "profit_margin"))

    def to_entity(self) -> Product:
        return Product(
            id=self.id,
            name=self.name or "",
            category=self.category or "",
            unit=self.unit or "",
            purchase_price=_number(self.price.get("purchase")),
            sale_price=_number(self.price.get("sale")),
            current_stock=_number(self.stock.get("current")),
            minimum_stock=_number(self.stock.get("minimum")),
            status=self.status or "active",
            is_low_stock=self.is_low_stock,
            profit_margin=self.profit_margin,
            brand=self.brand,
        )


def _number(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _parse_many(payload: Any, what: str, model: type[PayloadModel]) -> list[Any]:
    entities = []
    for raw in expect_list(payload, what):
        if not isinstance(raw, dict):
            continue
        try:
            entities.append(model.model_validate(raw).to_entity())
        except ValidationError as e:
            logger.warning("Skipping malformed entry", extra={"reason": what, "error": str(e)})
    return entities


def parse_customers(payload: Any) -> list[Customer]:
    return _parse_many(payload, "customers", CustomerRecordPayload)


def parse_plans(payload: Any) -> list[Plan]:
    return _parse_many(payload, "plans", PlanPayload)


def parse_products(payload: Any) -> list[Product]:
    if isinstance(payload, dict):
        payload = payload.get("products")
    if payload is None:
        raise BackendContractError("Expected a products list")
    return _parse_many(payload, "products", ProductPayload)


def parse_blocked_days(payload: Any) -> list[BlockedDay]:
    days: list[BlockedDay] = []
    for raw in expect_list(payload, "blocked days"):
        if not isinstance(raw, dict):
            continue
        day_id = optional_str(raw.get("_id", raw.get("id")))
        day = parse_iso_date(raw.get("date"))
        if day_id and day:
            days.append(BlockedDay(id=day_id, day=day))
    return sorted(days, key=lambda d: d.day)

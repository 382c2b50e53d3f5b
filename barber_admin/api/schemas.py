from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    admin = "admin"
    barber = "barber"


class PlanFilter(str, Enum):
    all = "all"
    with_plan = "with-plan"
    without_plan = "without-plan"


class PeriodMode(str, Enum):
    month = "month"
    range = "range"


class _Schema(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class StatusBadgeSchema(_Schema):
    label: str
    color_class: str
    category: str


class StaffSchema(_Schema):
    id: str
    name: str


class AgendaRowSchema(_Schema):
    id: str
    date: str
    time: str
    is_past: bool
    customer_name: str
    customer_phone: str
    service_name: str
    barber_name: str
    price: str
    status: StatusBadgeSchema
    payment: StatusBadgeSchema
    color: str
    can_complete: bool
    can_remove: bool
    remove_action: str
    notes: str | None = None


class AgendaResponseSchema(_Schema):
    state: str
    message: str | None = None
    caption: str
    is_admin: bool
    rows: list[AgendaRowSchema]
    barbers: list[StaffSchema] = Field(default_factory=list)


class CalendarEventSchema(_Schema):
    id: str
    title: str
    start: datetime
    end: datetime
    color: str
    staff_id: str | None = None


class CalendarResponseSchema(_Schema):
    state: str
    message: str | None = None
    events: list[CalendarEventSchema]
    colors: dict[str, str] = Field(default_factory=dict)


class RefreshResponseSchema(_Schema):
    state: str
    message: str | None = None


class CommandResponseSchema(_Schema):
    booking_id: str
    outcome: str


class PeriodSchema(_Schema):
    start_date: date
    end_date: date
    label: str


class DashboardResponseSchema(_Schema):
    period: PeriodSchema
    metrics: dict[str, Any] = Field(default_factory=dict)
    available_years: list[int] = Field(default_factory=list)


class CustomerSchema(_Schema):
    id: str
    name: str
    phone: str
    has_active_plan: bool
    active_plan_name: str | None = None
    days_remaining: int | None = None


class CustomersResponseSchema(_Schema):
    total: int
    customers: list[CustomerSchema]


class PlanSchema(_Schema):
    id: str
    name: str
    price: float
    duration_in_days: int
    description: str | None = None


class SubscribeRequestSchema(BaseModel):
    plan_id: str | None = None


class ProductFormSchema(BaseModel):
    name: str = ""
    category: str = ""
    unit: str = ""
    purchase_price: float = 0.0
    sale_price: float = 0.0
    current_stock: float = 0.0
    minimum_stock: float = 0.0
    maximum_stock: float | None = None
    brand: str | None = None
    description: str | None = None
    barcode: str | None = None
    status: str = "active"
    supplier: dict[str, Any] = Field(default_factory=dict)


class StockMovementSchema(BaseModel):
    type: str = "in"
    quantity: float = 0.0
    reason: str = ""
    unit_cost: float = 0.0
    notes: str | None = None


class ProductSchema(_Schema):
    id: str
    name: str
    category: str
    unit: str
    purchase_price: float
    sale_price: float
    current_stock: float
    minimum_stock: float
    status: str
    is_low_stock: bool
    profit_margin: float | None = None
    brand: str | None = None


class ProductsResponseSchema(_Schema):
    low_stock_count: int
    products: list[ProductSchema]


class BlockedDaySchema(BaseModel):
    id: str
    day: date


class ToggleDayRequestSchema(BaseModel):
    day: date


class ToggleDayResponseSchema(BaseModel):
    day: date
    blocked: bool

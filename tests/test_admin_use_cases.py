"""
Tests for dashboard periods, customers, inventory forms and blocked days.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from barber_admin.application.exceptions import FormValidationError
from barber_admin.application.use_cases.absences import AbsencesUseCase
from barber_admin.application.use_cases.customers import (
    CustomersUseCase,
    days_remaining,
    filter_customers,
)
from barber_admin.application.use_cases.dashboard import DashboardUseCase
from barber_admin.application.use_cases.inventory import (
    InventoryUseCase,
    product_query_params,
    validate_stock_movement,
)
from barber_admin.application.utils.period import describe_period, month_period, resolve_period
from barber_admin.domain.entities.customer import Customer, Plan, Subscription
from barber_admin.domain.entities.period import Period
from barber_admin.domain.entities.product import ProductForm, StockMovementForm
from barber_admin.infrastructure.backend.mock_backend import MockBarbershopBackend

SHOP = "shop_1"
NOW = datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc)
TODAY = date(2024, 1, 10)

MONTHLY = Plan(id="p1", name="Monthly", price=100.0, duration_in_days=30)


def _customer(customer_id: str, name: str, phone: str, plan_end: datetime | None = None) -> Customer:
    subscriptions = ()
    if plan_end is not None:
        subscriptions = (
            Subscription(id=f"sub_{customer_id}", status="active", start_date=None, end_date=plan_end, plan=MONTHLY),
        )
    return Customer(id=customer_id, name=name, phone=phone, subscriptions=subscriptions)


def test_month_period_covers_whole_month():
    """February of a leap year ends on the 29th."""
    assert month_period(2024, 2) == Period(start=date(2024, 2, 1), end=date(2024, 2, 29))


def test_resolve_period_modes():
    """Month and range modes resolve to concrete windows; junk falls back to the current month."""
    assert resolve_period("month", 2023, 12, today=TODAY) == Period(date(2023, 12, 1), date(2023, 12, 31))
    assert resolve_period("range", range_from=date(2024, 1, 5), today=TODAY) == Period(
        date(2024, 1, 5), date(2024, 1, 5)
    )
    assert resolve_period("range", range_from=date(2024, 1, 9), range_to=date(2024, 1, 2), today=TODAY) == Period(
        date(2024, 1, 2), date(2024, 1, 9)
    )
    assert resolve_period("month", 2024, 13, today=TODAY) == month_period(2024, 1)
    assert resolve_period("range", today=TODAY) == month_period(2024, 1)


def test_describe_period():
    """Whole months read as 'Month Year', other windows as ISO dates."""
    assert describe_period(month_period(2024, 1)) == "January 2024"
    assert describe_period(Period(date(2024, 1, 5), date(2024, 1, 5))) == "2024-01-05"
    assert describe_period(Period(date(2024, 1, 5), date(2024, 1, 9))) == "2024-01-05 - 2024-01-09"


def test_dashboard_passes_period_to_backend():
    """The resolved period is sent as start and end dates."""
    backend = MockBarbershopBackend(metrics={"totalRevenue": 500})
    report = DashboardUseCase(backend).metrics(SHOP, month_period(2024, 1))

    assert report.label == "January 2024"
    assert report.metrics["totalRevenue"] == 500
    assert backend.calls == [("get_dashboard_metrics", SHOP, date(2024, 1, 1), date(2024, 1, 31))]


def test_days_remaining_rounds_up():
    """Partial days count as a full day left."""
    assert days_remaining(datetime(2024, 1, 11, 13, 0, tzinfo=timezone.utc), NOW) == 2
    assert days_remaining(None, NOW) is None


def test_filter_customers_by_search_and_plan():
    """Search matches name case-insensitively or phone; plan filter splits by active subscription."""
    customers = [
        _customer("c1", "Joao Silva", "11999990000", plan_end=datetime(2024, 2, 1, tzinfo=timezone.utc)),
        _customer("c2", "Maria", "11888880000"),
    ]

    assert [c.id for c in filter_customers(customers, search="joao")] == ["c1"]
    assert [c.id for c in filter_customers(customers, search="8888")] == ["c2"]
    assert [c.id for c in filter_customers(customers, plan_filter="with-plan")] == ["c1"]
    assert [c.id for c in filter_customers(customers, plan_filter="without-plan")] == ["c2"]
    with pytest.raises(ValueError):
        filter_customers(customers, plan_filter="gold")


def test_customer_summaries():
    """Summaries expose the active plan name and days left."""
    backend = MockBarbershopBackend(
        customers={SHOP: [_customer("c1", "Joao", "1", plan_end=datetime(2024, 1, 20, 12, 0, tzinfo=timezone.utc))]}
    )

    summaries = CustomersUseCase(backend).list_customers(SHOP, now=NOW)

    assert summaries[0].has_active_plan
    assert summaries[0].active_plan_name == "Monthly"
    assert summaries[0].days_remaining == 10


def test_subscribe_requires_plan():
    """Subscribing without a plan is rejected before reaching the backend."""
    backend = MockBarbershopBackend()

    with pytest.raises(FormValidationError) as excinfo:
        CustomersUseCase(backend).subscribe(SHOP, "c1", "  ")

    assert excinfo.value.errors == {"plan_id": "Please select a plan."}
    assert backend.calls == []


def test_invalid_product_is_not_sent():
    """Missing required fields raise FormValidationError and nothing reaches the backend."""
    backend = MockBarbershopBackend()

    with pytest.raises(FormValidationError) as excinfo:
        InventoryUseCase(backend).save_product(SHOP, ProductForm(name=" ", sale_price=-1))

    assert set(excinfo.value.errors) == {"name", "category", "unit", "sale_price"}
    assert backend.calls == []


def test_valid_product_create_and_update():
    """A valid form is sent as nested price and stock objects."""
    backend = MockBarbershopBackend()
    uc = InventoryUseCase(backend)
    form = ProductForm(
        name=" Pomade ",
        category="styling",
        unit="unit",
        purchase_price=10,
        sale_price=25,
        current_stock=3,
        minimum_stock=5,
    )

    uc.save_product(SHOP, form)
    uc.save_product(SHOP, form, product_id="p1")

    created = backend.calls[0]
    assert created[0] == "create_product"
    assert created[2]["name"] == "Pomade"
    assert created[2]["price"] == {"purchase": 10, "sale": 25}
    assert created[2]["stock"] == {"current": 3, "minimum": 5}
    assert backend.calls[1][:3] == ("update_product", SHOP, "p1")


def test_stock_movement_validation():
    """Movements need a known type, positive quantity and a reason."""
    errors = validate_stock_movement(StockMovementForm(type="gift", quantity=0, reason=""))

    assert set(errors) == {"type", "quantity", "reason"}
    assert validate_stock_movement(StockMovementForm(type="in", quantity=2, reason="Restock")) == {}


def test_product_query_params():
    """Default filters are omitted from the query string."""
    assert product_query_params() == {"status": "active"}
    assert product_query_params(search="wax", category="all", status="all", low_stock=True) == {
        "search": "wax",
        "lowStock": "true",
    }


def test_toggle_day_blocks_then_unblocks():
    """Toggling an open day blocks it; toggling again frees it."""
    backend = MockBarbershopBackend()
    uc = AbsencesUseCase(backend)
    day = date(2024, 3, 1)

    assert uc.toggle_day(SHOP, day) is True
    assert [d.day for d in uc.list_blocked_days(SHOP)] == [day]
    assert uc.toggle_day(SHOP, day) is False
    assert uc.list_blocked_days(SHOP) == []

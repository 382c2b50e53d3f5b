from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from barber_admin.application.exceptions import FormValidationError
from barber_admin.application.ports.barbershop_backend import BarbershopBackendPort
from barber_admin.application.utils.booking_time import utc_now
from barber_admin.domain.entities.customer import Customer, Plan

PLAN_FILTERS = ("all", "with-plan", "without-plan")


@dataclass(frozen=True)
class CustomerSummary:
    customer: Customer
    has_active_plan: bool
    active_plan_name: str | None
    days_remaining: int | None


def days_remaining(end_date: datetime | None, now: datetime | None = None) -> int | None:
    """Whole days left until `end_date`, rounded up. Negative once expired."""
    if end_date is None:
        return None
    now = now or utc_now()
    return math.ceil((end_date - now).total_seconds() / 86400)


def filter_customers(customers: Iterable[Customer], search: str = "", plan_filter: str = "all") -> list[Customer]:
    if plan_filter not in PLAN_FILTERS:
        raise ValueError(f"plan filter must be one of {', '.join(PLAN_FILTERS)}")

    filtered = list(customers)
    term = (search or "").strip()
    if term:
        lowered = term.lower()
        filtered = [c for c in filtered if lowered in c.name.lower() or term in c.phone]

    if plan_filter != "all":
        wanted = plan_filter == "with-plan"
        filtered = [c for c in filtered if (c.active_subscription is not None) == wanted]

    return filtered


def summarize_customer(customer: Customer, now: datetime | None = None) -> CustomerSummary:
    active = customer.active_subscription
    return CustomerSummary(
        customer=customer,
        has_active_plan=active is not None,
        active_plan_name=active.plan.name if active and active.plan else None,
        days_remaining=days_remaining(active.end_date, now) if active else None,
    )


class CustomersUseCase:
    def __init__(self, backend: BarbershopBackendPort) -> None:
        self._backend = backend
        self._logger = logging.getLogger(__name__)

    def list_customers(
        self,
        barbershop_id: str,
        search: str = "",
        plan_filter: str = "all",
        now: datetime | None = None,
    ) -> list[CustomerSummary]:
        customers = self._backend.list_customers(barbershop_id)
        return [summarize_customer(c, now) for c in filter_customers(customers, search, plan_filter)]

    def list_plans(self, barbershop_id: str) -> list[Plan]:
        return self._backend.list_plans(barbershop_id)

    def subscribe(self, barbershop_id: str, customer_id: str, plan_id: str | None) -> None:
        if not (plan_id or "").strip():
            raise FormValidationError({"plan_id": "Please select a plan."})
        self._backend.subscribe_customer(barbershop_id, customer_id, plan_id.strip())
        self._logger.info(
            "Customer subscribed to plan",
            extra={"barbershop_id": barbershop_id, "reason": f"customer={customer_id} plan={plan_id}"},
        )

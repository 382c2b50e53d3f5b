from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Plan:
    id: str
    name: str
    price: float
    duration_in_days: int
    description: str | None = None


@dataclass(frozen=True)
class Subscription:
    id: str
    status: str  # "active" | "expired" | "cancelled"
    start_date: datetime | None
    end_date: datetime | None
    plan: Plan | None = None


@dataclass(frozen=True)
class Customer:
    id: str
    name: str
    phone: str
    created_at: datetime | None = None
    image_url: str | None = None
    subscriptions: tuple[Subscription, ...] = ()

    @property
    def active_subscription(self) -> Subscription | None:
        for subscription in self.subscriptions:
            if subscription.status == "active":
                return subscription
        return None

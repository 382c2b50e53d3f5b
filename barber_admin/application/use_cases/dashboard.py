from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from barber_admin.application.ports.barbershop_backend import BarbershopBackendPort
from barber_admin.application.utils.period import describe_period
from barber_admin.domain.entities.period import Period


@dataclass(frozen=True)
class DashboardReport:
    period: Period
    label: str
    metrics: dict[str, Any]


class DashboardUseCase:
    def __init__(self, backend: BarbershopBackendPort) -> None:
        self._backend = backend
        self._logger = logging.getLogger(__name__)

    def metrics(self, barbershop_id: str, period: Period) -> DashboardReport:
        """Revenue/booking metrics for the whole barbershop. Backend errors propagate."""
        metrics = self._backend.get_dashboard_metrics(barbershop_id, period.start, period.end)
        self._logger.info(
            "Dashboard metrics loaded",
            extra={"barbershop_id": barbershop_id, "reason": f"{period.start_iso}..{period.end_iso}"},
        )
        return DashboardReport(period=period, label=describe_period(period), metrics=metrics)

    def barber_performance(self, barbershop_id: str, period: Period) -> DashboardReport:
        """Performance of the authenticated barber."""
        metrics = self._backend.get_barber_performance(barbershop_id, period.start, period.end)
        return DashboardReport(period=period, label=describe_period(period), metrics=metrics)

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

from barber_admin.application.ports.barbershop_backend import BarbershopBackendPort
from barber_admin.domain.entities.period import BlockedDay


def find_blocked_day(blocked_days: Iterable[BlockedDay], day: date) -> BlockedDay | None:
    for blocked in blocked_days:
        if blocked.day == day:
            return blocked
    return None


class AbsencesUseCase:
    def __init__(self, backend: BarbershopBackendPort) -> None:
        self._backend = backend
        self._logger = logging.getLogger(__name__)

    def list_blocked_days(self, barbershop_id: str) -> list[BlockedDay]:
        return sorted(self._backend.list_blocked_days(barbershop_id), key=lambda d: d.day)

    def toggle_day(self, barbershop_id: str, day: date) -> bool:
        """Block the day if it is open, unblock it otherwise. Returns True when the day ends up blocked."""
        existing = find_blocked_day(self._backend.list_blocked_days(barbershop_id), day)
        if existing:
            self._backend.unblock_day(barbershop_id, existing.id)
            self._logger.info("Day unblocked", extra={"barbershop_id": barbershop_id, "reason": day.isoformat()})
            return False
        self._backend.block_day(barbershop_id, day)
        self._logger.info("Day blocked", extra={"barbershop_id": barbershop_id, "reason": day.isoformat()})
        return True

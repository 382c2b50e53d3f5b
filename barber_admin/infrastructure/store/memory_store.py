from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Callable

from barber_admin.application.ports.agenda_store import AgendaStorePort
from barber_admin.application.utils.staff_colors import StaffColorCache
from barber_admin.domain.entities.agenda_session import AgendaSession
from barber_admin.domain.entities.booking import Booking, StaffRef
from barber_admin.domain.entities.load_state import LoadState


class MemoryAgendaStore(AgendaStorePort):
    def __init__(self) -> None:
        self._sessions: dict[str, AgendaSession] = {}
        self._color_caches: dict[str, StaffColorCache] = {}
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def _session(self, barbershop_id: str) -> AgendaSession:
        return self._sessions.get(barbershop_id) or AgendaSession(barbershop_id=barbershop_id)

    def get_session(self, barbershop_id: str) -> AgendaSession:
        with self._lock:
            return self._session(barbershop_id)

    def get_color_cache(self, barbershop_id: str) -> StaffColorCache:
        with self._lock:
            return self._color_caches.setdefault(barbershop_id, StaffColorCache())

    def begin_fetch(self, barbershop_id: str, is_admin: bool) -> int:
        with self._lock:
            session = self._session(barbershop_id)
            sequence = session.fetch_sequence + 1
            self._sessions[barbershop_id] = replace(
                session,
                fetch_sequence=sequence,
                is_admin=is_admin,
                load_state=LoadState.loading(),
            )
            return sequence

    def complete_fetch(
        self,
        barbershop_id: str,
        sequence: int,
        bookings: tuple[Booking, ...],
        barbers: tuple[StaffRef, ...] | None,
    ) -> bool:
        with self._lock:
            session = self._session(barbershop_id)
            if sequence < session.fetch_sequence:
                self._logger.info(
                    "Discarding stale fetch result",
                    extra={"barbershop_id": barbershop_id, "sequence": sequence},
                )
                return False
            self._sessions[barbershop_id] = replace(
                session,
                bookings=bookings,
                barbers=barbers if barbers is not None else session.barbers,
                load_state=LoadState.success(len(bookings)),
                applied_sequence=sequence,
            )
            return True

    def fail_fetch(self, barbershop_id: str, sequence: int, message: str) -> bool:
        with self._lock:
            session = self._session(barbershop_id)
            if sequence < session.fetch_sequence:
                self._logger.info(
                    "Discarding stale fetch error",
                    extra={"barbershop_id": barbershop_id, "sequence": sequence},
                )
                return False
            self._sessions[barbershop_id] = replace(session, load_state=LoadState.error(message))
            return True

    def get_bookings(self, barbershop_id: str) -> tuple[Booking, ...]:
        with self._lock:
            return self._session(barbershop_id).bookings

    def update_bookings(
        self,
        barbershop_id: str,
        fn: Callable[[tuple[Booking, ...]], tuple[Booking, ...]],
    ) -> tuple[Booking, ...]:
        with self._lock:
            session = self._session(barbershop_id)
            bookings = fn(session.bookings)
            if bookings is not session.bookings:
                self._sessions[barbershop_id] = replace(session, bookings=bookings)
            return bookings

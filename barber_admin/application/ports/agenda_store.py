from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from barber_admin.application.utils.staff_colors import StaffColorCache
from barber_admin.domain.entities.agenda_session import AgendaSession
from barber_admin.domain.entities.booking import Booking, StaffRef


class AgendaStorePort(ABC):
    @abstractmethod
    def get_session(self, barbershop_id: str) -> AgendaSession:
        """Current session for the barbershop. A fresh idle session if none exists."""
        raise NotImplementedError

    @abstractmethod
    def get_color_cache(self, barbershop_id: str) -> StaffColorCache:
        raise NotImplementedError

    @abstractmethod
    def begin_fetch(self, barbershop_id: str, is_admin: bool) -> int:
        """Issue the next fetch sequence number and move the session to loading."""
        raise NotImplementedError

    @abstractmethod
    def complete_fetch(
        self,
        barbershop_id: str,
        sequence: int,
        bookings: tuple[Booking, ...],
        barbers: tuple[StaffRef, ...] | None,
    ) -> bool:
        """
        Store a fetch result. Returns False (and changes nothing) when a newer fetch
        was issued after `sequence`, so the most recent request always wins.
        """
        raise NotImplementedError

    @abstractmethod
    def fail_fetch(self, barbershop_id: str, sequence: int, message: str) -> bool:
        """Record a failed fetch, keeping the last-known-good collections. False if stale."""
        raise NotImplementedError

    @abstractmethod
    def get_bookings(self, barbershop_id: str) -> tuple[Booking, ...]:
        raise NotImplementedError

    @abstractmethod
    def update_bookings(
        self,
        barbershop_id: str,
        fn: Callable[[tuple[Booking, ...]], tuple[Booking, ...]],
    ) -> tuple[Booking, ...]:
        """Atomically replace the collection with `fn(current)`. Returning `current` unchanged is a no-op."""
        raise NotImplementedError

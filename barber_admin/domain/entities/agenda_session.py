from __future__ import annotations

from dataclasses import dataclass

from barber_admin.domain.entities.booking import Booking, StaffRef
from barber_admin.domain.entities.load_state import LoadState


@dataclass(frozen=True)
class AgendaSession:
    barbershop_id: str
    bookings: tuple[Booking, ...] = ()  # API order, last-known-good
    barbers: tuple[StaffRef, ...] = ()
    is_admin: bool = True
    load_state: LoadState = LoadState()
    fetch_sequence: int = 0  # last issued fetch
    applied_sequence: int = 0  # last fetch whose result was kept

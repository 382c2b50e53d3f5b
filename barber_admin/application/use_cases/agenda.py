from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone, tzinfo
from typing import Callable

from barber_admin.application.exceptions import BackendContractError, BackendUpstreamError, BookingNotFoundError
from barber_admin.application.ports.agenda_store import AgendaStorePort
from barber_admin.application.ports.barbershop_backend import BarbershopBackendPort
from barber_admin.application.use_cases.agenda_pipeline import build_display_list, normalize_bookings
from barber_admin.application.use_cases.agenda_rows import AgendaRow, build_agenda_row
from barber_admin.application.use_cases.calendar_projection import (
    DEFAULT_DURATION_MINUTES,
    FALLBACK_COLOR,
    project_calendar_events,
)
from barber_admin.application.use_cases.optimistic_command import CommandResult, OptimisticCommandRunner
from barber_admin.application.utils.booking_time import utc_now
from barber_admin.domain.entities.agenda_filter import ALL, AgendaFilter
from barber_admin.domain.entities.agenda_session import AgendaSession
from barber_admin.domain.entities.booking import Booking, StaffRef
from barber_admin.domain.entities.calendar_event import CalendarEvent
from barber_admin.domain.entities.load_state import LoadState, LoadStatus


@dataclass(frozen=True)
class AgendaView:
    state: LoadState
    rows: list[AgendaRow]
    caption: str
    barbers: tuple[StaffRef, ...]
    is_admin: bool


@dataclass(frozen=True)
class CalendarView:
    state: LoadState
    events: list[CalendarEvent]
    colors: dict[str, str]


class AgendaUseCase:
    def __init__(
        self,
        backend: BarbershopBackendPort,
        store: AgendaStorePort,
        clock: Callable[[], datetime] = utc_now,
        day_of_week_timezone: tzinfo = timezone.utc,
        default_duration_minutes: int = DEFAULT_DURATION_MINUTES,
        fallback_color: str = FALLBACK_COLOR,
    ) -> None:
        self._backend = backend
        self._store = store
        self._clock = clock
        self._tz = day_of_week_timezone
        self._default_duration = default_duration_minutes
        self._fallback_color = fallback_color
        self._commands = OptimisticCommandRunner()
        self._logger = logging.getLogger(__name__)

    def refresh(self, barbershop_id: str, is_admin: bool = True) -> LoadState:
        """Fetch bookings (and barbers for admins). A newer refresh supersedes this one."""
        sequence = self._store.begin_fetch(barbershop_id, is_admin)
        try:
            if is_admin:
                bookings = self._backend.list_bookings(barbershop_id)
                barbers: tuple[StaffRef, ...] | None = self._backend.list_barbers(barbershop_id)
            else:
                bookings = self._backend.list_barber_bookings(barbershop_id)
                barbers = None
        except (BackendUpstreamError, BackendContractError) as e:
            self._logger.error(
                "Failed to load bookings",
                extra={"barbershop_id": barbershop_id, "sequence": sequence, "error": str(e)},
            )
            self._store.fail_fetch(barbershop_id, sequence, str(e) or "Could not load bookings.")
            return self._store.get_session(barbershop_id).load_state

        if self._store.complete_fetch(barbershop_id, sequence, bookings, barbers):
            self._logger.info(
                "Bookings loaded",
                extra={"barbershop_id": barbershop_id, "sequence": sequence, "reason": f"{len(bookings)} bookings"},
            )
        return self._store.get_session(barbershop_id).load_state

    def ensure_loaded(self, barbershop_id: str, is_admin: bool = True) -> AgendaSession:
        session = self._store.get_session(barbershop_id)
        if session.load_state.status is LoadStatus.idle or session.is_admin != is_admin:
            self.refresh(barbershop_id, is_admin)
            session = self._store.get_session(barbershop_id)
        return session

    def staff_colors(self, barbershop_id: str) -> dict[str, str]:
        bookings = self._store.get_bookings(barbershop_id)
        return self._store.get_color_cache(barbershop_id).colors_for(bookings)

    def list_rows(self, barbershop_id: str, agenda_filter: AgendaFilter, is_admin: bool = True) -> AgendaView:
        session = self.ensure_loaded(barbershop_id, is_admin)
        if not session.is_admin and agenda_filter.staff_id != ALL:
            # Barbers only ever see their own bookings.
            agenda_filter = replace(agenda_filter, staff_id=ALL)

        colors = self.staff_colors(barbershop_id)
        items = build_display_list(session.bookings, agenda_filter, now=self._clock(), tz=self._tz)
        rows = [build_agenda_row(item, colors, self._fallback_color) for item in items]

        if rows:
            caption = f"Showing {len(rows)} booking(s)."
        else:
            caption = "No bookings found for the selected filters."

        return AgendaView(
            state=session.load_state,
            rows=rows,
            caption=caption,
            barbers=session.barbers,
            is_admin=session.is_admin,
        )

    def calendar_events(self, barbershop_id: str, staff_id: str = ALL, is_admin: bool = True) -> CalendarView:
        session = self.ensure_loaded(barbershop_id, is_admin)
        colors = self.staff_colors(barbershop_id)
        events = project_calendar_events(
            normalize_bookings(session.bookings, self._clock()),
            colors,
            staff_id=staff_id or ALL,
            default_duration_minutes=self._default_duration,
            fallback_color=self._fallback_color,
        )
        return CalendarView(state=session.load_state, events=events, colors=dict(colors))

    def cancel_booking(self, barbershop_id: str, booking_id: str) -> CommandResult:
        return self._change_status(barbershop_id, booking_id, "canceled")

    def complete_booking(self, barbershop_id: str, booking_id: str) -> CommandResult:
        return self._change_status(barbershop_id, booking_id, "completed")

    def _change_status(self, barbershop_id: str, booking_id: str, status: str) -> CommandResult:
        if not any(b.id == booking_id for b in self._store.get_bookings(barbershop_id)):
            raise BookingNotFoundError(booking_id)

        def apply() -> tuple[Booking, Booking] | None:
            swapped: list[tuple[Booking, Booking]] = []

            def patch(bookings: tuple[Booking, ...]) -> tuple[Booking, ...]:
                updated = []
                for booking in bookings:
                    if booking.id == booking_id:
                        patched = replace(booking, status=status)
                        swapped.append((booking, patched))
                        booking = patched
                    updated.append(booking)
                return tuple(updated) if swapped else bookings

            self._store.update_bookings(barbershop_id, patch)
            return swapped[0] if swapped else None

        def revert(swapped: tuple[Booking, Booking] | None) -> None:
            if swapped is None:
                return
            before, after = swapped
            # Undo only our own patch; a newer fetch or command owns whatever replaced it.
            self._store.update_bookings(barbershop_id, lambda bookings: _swap_identical(bookings, after, before))

        result = self._commands.run(
            key=f"{barbershop_id}:{booking_id}",
            apply=apply,
            revert=revert,
            call=lambda: self._backend.update_booking_status(barbershop_id, booking_id, status),
        )
        if result.ok:
            self._logger.info(
                "Booking status updated",
                extra={"barbershop_id": barbershop_id, "booking_id": booking_id, "status": status},
            )
        return result

    def delete_booking(self, barbershop_id: str, booking_id: str) -> None:
        """Delete on the backend first, then drop the booking locally."""
        if not any(b.id == booking_id for b in self._store.get_bookings(barbershop_id)):
            raise BookingNotFoundError(booking_id)

        self._backend.delete_booking(barbershop_id, booking_id)
        self._store.update_bookings(
            barbershop_id,
            lambda bookings: tuple(b for b in bookings if b.id != booking_id),
        )
        self._logger.info("Booking deleted", extra={"barbershop_id": barbershop_id, "booking_id": booking_id})


def _swap_identical(bookings: tuple[Booking, ...], current: Booking, replacement: Booking) -> tuple[Booking, ...]:
    if not any(b is current for b in bookings):
        return bookings
    return tuple(replacement if b is current else b for b in bookings)

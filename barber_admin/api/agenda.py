from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from barber_admin.api.rendering import render_load_state
from barber_admin.api.schemas import (
    AgendaResponseSchema,
    AgendaRowSchema,
    CalendarEventSchema,
    CalendarResponseSchema,
    CommandResponseSchema,
    RefreshResponseSchema,
    Role,
    StaffSchema,
)
from barber_admin.application.exceptions import BackendContractError, BackendUpstreamError, BookingNotFoundError
from barber_admin.application.use_cases.agenda import AgendaUseCase
from barber_admin.application.use_cases.optimistic_command import REJECTED, CommandResult
from barber_admin.domain.entities.agenda_filter import ALL, AgendaFilter
from barber_admin.wiring.dependencies import get_agenda_use_case

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/barbershops/{barbershop_id}/agenda/refresh", response_model=RefreshResponseSchema)
def refresh_agenda(
    barbershop_id: str,
    role: Role = Query(Role.admin),
    uc: AgendaUseCase = Depends(get_agenda_use_case),
):
    state = uc.refresh(barbershop_id, is_admin=role is Role.admin)
    return RefreshResponseSchema(**render_load_state(state))


@router.get("/barbershops/{barbershop_id}/agenda", response_model=AgendaResponseSchema)
def list_agenda(
    barbershop_id: str,
    staff_id: str = Query(ALL),
    day_of_week: str = Query(ALL),
    include_past: bool = Query(False),
    role: Role = Query(Role.admin),
    uc: AgendaUseCase = Depends(get_agenda_use_case),
):
    try:
        agenda_filter = AgendaFilter.from_query(staff_id, day_of_week, include_past)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    view = uc.list_rows(barbershop_id, agenda_filter, is_admin=role is Role.admin)
    return AgendaResponseSchema(
        **render_load_state(view.state),
        caption=view.caption,
        is_admin=view.is_admin,
        rows=[AgendaRowSchema.model_validate(row) for row in view.rows],
        barbers=[StaffSchema.model_validate(barber) for barber in view.barbers],
    )


@router.get("/barbershops/{barbershop_id}/calendar", response_model=CalendarResponseSchema)
def list_calendar_events(
    barbershop_id: str,
    staff_id: str = Query(ALL),
    role: Role = Query(Role.admin),
    uc: AgendaUseCase = Depends(get_agenda_use_case),
):
    view = uc.calendar_events(barbershop_id, staff_id=staff_id, is_admin=role is Role.admin)
    return CalendarResponseSchema(
        **render_load_state(view.state),
        events=[CalendarEventSchema.model_validate(event) for event in view.events],
        colors=view.colors,
    )


def _command_response(booking_id: str, result: CommandResult) -> CommandResponseSchema:
    if result.outcome == REJECTED:
        raise HTTPException(status_code=409, detail=result.error)
    if not result.ok:
        raise HTTPException(status_code=502, detail=result.error)
    return CommandResponseSchema(booking_id=booking_id, outcome=result.outcome)


@router.post("/barbershops/{barbershop_id}/bookings/{booking_id}/cancel", response_model=CommandResponseSchema)
def cancel_booking(
    barbershop_id: str,
    booking_id: str,
    uc: AgendaUseCase = Depends(get_agenda_use_case),
):
    try:
        result = uc.cancel_booking(barbershop_id, booking_id)
    except BookingNotFoundError:
        raise HTTPException(status_code=404, detail="Booking not found")
    return _command_response(booking_id, result)


@router.post("/barbershops/{barbershop_id}/bookings/{booking_id}/complete", response_model=CommandResponseSchema)
def complete_booking(
    barbershop_id: str,
    booking_id: str,
    uc: AgendaUseCase = Depends(get_agenda_use_case),
):
    try:
        result = uc.complete_booking(barbershop_id, booking_id)
    except BookingNotFoundError:
        raise HTTPException(status_code=404, detail="Booking not found")
    return _command_response(booking_id, result)


@router.delete("/barbershops/{barbershop_id}/bookings/{booking_id}", response_model=CommandResponseSchema)
def delete_booking(
    barbershop_id: str,
    booking_id: str,
    uc: AgendaUseCase = Depends(get_agenda_use_case),
):
    try:
        uc.delete_booking(barbershop_id, booking_id)
    except BookingNotFoundError:
        raise HTTPException(status_code=404, detail="Booking not found")
    except (BackendUpstreamError, BackendContractError) as e:
        logger.warning("Booking delete failed", extra={"booking_id": booking_id, "error": str(e)})
        raise HTTPException(status_code=502, detail=str(e))
    return CommandResponseSchema(booking_id=booking_id, outcome="deleted")

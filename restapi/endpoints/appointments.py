"""Appointment endpoints for the API."""

from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from components.account.models import Account
from components.account.policy import Feature
from components.appointment import schemas
from components.appointment.repository import AppointmentRepository
from components.core.config import get_settings
from components.core.init_db import get_db
from components.core.schemas import Message
from restapi.endpoints.auth import require_feature
from restapi.endpoints.helpers import get_today

settings = get_settings()

router = APIRouter(
    prefix="/appointments",
    tags=["appointments"],
    responses={404: {"description": "Not found"}},
)

NOT_FOUND = "Appointment not found"


@router.get("/", response_model=List[schemas.Appointment])
async def read_appointments(
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.AGENDA))
):
    """Get the account's appointments, most recent date first."""
    return await AppointmentRepository(db, account.id).list("-date", settings.AGENDA_LIST_LIMIT)


@router.get("/agenda", response_model=schemas.AgendaView)
async def read_agenda(
    current_date: Optional[date] = Query(None, description="Any day of the week to show (defaults to today)"),
    selected_date: Optional[date] = Query(None, description="Day whose appointments are listed (defaults to today)"),
    today: date = Depends(get_today),
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.AGENDA))
):
    """
    Get the agenda screen.

    Returns the Sunday-first week containing ``current_date`` with a count per
    day, the appointments of ``selected_date`` ordered by time, the bookable
    time slots, and the monthly quota state.
    """
    repo = AppointmentRepository(db, account.id)
    return await repo.agenda(account, current_date or today, selected_date or today, today)


@router.post("/", response_model=schemas.Appointment)
async def create_appointment(
    appointment: schemas.AppointmentCreate,
    today: date = Depends(get_today),
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.AGENDA))
):
    """
    Book an appointment.

    Client and service names and the service price are copied onto the
    appointment. Free accounts get 402 once the monthly quota is used up.
    """
    return await AppointmentRepository(db, account.id).book(appointment, account, today)


@router.get("/{appointment_id}", response_model=schemas.Appointment)
async def read_appointment(
    appointment_id: int,
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.AGENDA))
):
    """Get a specific appointment by ID."""
    appointment = await AppointmentRepository(db, account.id).get(appointment_id)
    if appointment is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return appointment


@router.put("/{appointment_id}", response_model=schemas.Appointment)
async def update_appointment(
    appointment_id: int,
    appointment: schemas.AppointmentUpdate,
    today: date = Depends(get_today),
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.AGENDA))
):
    """Edit an appointment, refreshing its client and service snapshots."""
    updated = await AppointmentRepository(db, account.id).edit(appointment_id, appointment, account, today)
    if updated is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return updated


@router.post("/{appointment_id}/advance", response_model=schemas.Appointment)
async def advance_appointment(
    appointment_id: int,
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.AGENDA))
):
    """Move an appointment one step forward: scheduled -> confirmed -> completed."""
    updated = await AppointmentRepository(db, account.id).advance(appointment_id)
    if updated is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return updated


@router.post("/{appointment_id}/cancel", response_model=schemas.Appointment)
async def cancel_appointment(
    appointment_id: int,
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.AGENDA))
):
    """Cancel a scheduled or confirmed appointment."""
    updated = await AppointmentRepository(db, account.id).cancel(appointment_id)
    if updated is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return updated


@router.delete("/{appointment_id}", response_model=Message)
async def delete_appointment(
    appointment_id: int,
    today: date = Depends(get_today),
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.AGENDA))
):
    """Delete an appointment permanently."""
    if not await AppointmentRepository(db, account.id).remove(appointment_id, account, today):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return Message(message="Appointment deleted successfully")

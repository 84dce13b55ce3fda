"""Repository for appointment operations."""

import logging
from datetime import date
from typing import Any, Dict, Optional

from components.account.models import Account
from components.account.policy import monthly_quota
from components.account.repository import AccountRepository
from components.appointment import schemas
from components.appointment.agenda import TIME_SLOTS, appointments_on, week_window
from components.appointment.models import Appointment
from components.appointment.status import (
    AppointmentStatus,
    INITIAL_STATUS,
    check_transition,
    is_terminal,
    next_status,
)
from components.client.repository import ClientRepository
from components.core.config import get_settings
from components.core.exceptions import (
    InvalidStatusTransition,
    QuotaExceeded,
    RecordNotFound,
    ValidationFailed,
)
from components.core.repository import OwnedRepository
from components.report import engine
from components.service.repository import ServiceRepository

logger = logging.getLogger(__name__)
settings = get_settings()

QUOTA_MESSAGE = "Appointment limit reached! Upgrade your plan to keep booking."


class AppointmentRepository(OwnedRepository):
    """Repository for appointment operations."""

    model = Appointment
    default_sort = "-date"

    async def month_usage(self, month: str) -> int:
        """Appointments dated in ``month`` within the agenda snapshot."""
        snapshot = await self.list("-date", settings.AGENDA_LIST_LIMIT)
        return engine.count_in_month(snapshot, month)

    async def refresh_month_usage(self, account: Account, today: date) -> int:
        """Recount the current month and store it on the account."""
        month = engine.month_key(today)
        used = await self.month_usage(month)
        await AccountRepository(self.session).record_month_usage(account, month, used)
        return used

    async def _snapshot(self, data: schemas.AppointmentBase, current: Optional[Appointment] = None) -> Dict[str, Any]:
        """Copy the client and service details onto the appointment fields."""
        client = await ClientRepository(self.session, self.owner_id).get(data.client_id)
        if client is None:
            raise RecordNotFound("Client not found")

        service = await ServiceRepository(self.session, self.owner_id).get(data.service_id)
        if service is None:
            raise RecordNotFound("Service not found")
        keeps_service = current is not None and current.service_id == service.id
        if not service.active and not keeps_service:
            raise ValidationFailed("Service is inactive and cannot be booked")

        return {
            "client_id": client.id,
            "service_id": service.id,
            "client_name": client.name,
            "service_name": service.name,
            "value": service.price or 0,
            "date": data.date,
            "time": data.time,
            "notes": data.notes,
        }

    async def book(self, data: schemas.AppointmentCreate, account: Account, today: date) -> Appointment:
        """
        Create an appointment for the account.

        Free accounts that already used their monthly quota are refused before
        anything is written. Canceled appointments still count towards it.
        """
        month = engine.month_key(today)
        used = await self.month_usage(month)
        if engine.quota_reached(account.plan, used):
            logger.info(f"Account {account.id} blocked by monthly quota ({used} in {month})")
            raise QuotaExceeded(QUOTA_MESSAGE)

        fields = await self._snapshot(data)
        fields["status"] = INITIAL_STATUS.value
        appointment = await self.create(fields)

        await self.refresh_month_usage(account, today)
        return appointment

    async def edit(
        self,
        appointment_id: int,
        data: schemas.AppointmentUpdate,
        account: Account,
        today: date,
    ) -> Optional[Appointment]:
        """Replace the booking details, taking fresh snapshots and recounting the month."""
        current = await self.get(appointment_id)
        if current is None:
            return None
        fields = await self._snapshot(data, current)
        updated = await self.update(appointment_id, fields)
        await self.refresh_month_usage(account, today)
        return updated

    async def transition(self, appointment_id: int, target: AppointmentStatus) -> Optional[Appointment]:
        """Move an appointment to ``target`` if its lifecycle allows it."""
        appointment = await self.get(appointment_id)
        if appointment is None:
            return None
        status = check_transition(appointment.status, target)
        logger.info(f"Appointment {appointment_id}: {appointment.status} -> {status.value}")
        return await self.update(appointment_id, {"status": status.value})

    async def advance(self, appointment_id: int) -> Optional[Appointment]:
        """Step scheduled -> confirmed -> completed."""
        appointment = await self.get(appointment_id)
        if appointment is None:
            return None
        if is_terminal(appointment.status):
            raise InvalidStatusTransition(f"Appointment is already {appointment.status}")
        return await self.transition(appointment_id, next_status(appointment.status))

    async def cancel(self, appointment_id: int) -> Optional[Appointment]:
        return await self.transition(appointment_id, AppointmentStatus.CANCELED)

    async def remove(self, appointment_id: int, account: Account, today: date) -> bool:
        """Delete permanently and recount the month."""
        if not await self.delete(appointment_id):
            return False
        await self.refresh_month_usage(account, today)
        return True

    async def agenda(self, account: Account, current_date: date, selected_date: date, today: date) -> schemas.AgendaView:
        """Week strip, selected day and quota state for the agenda screen."""
        snapshot = await self.list("-date", settings.AGENDA_LIST_LIMIT)
        used = engine.count_in_month(snapshot, engine.month_key(today))

        week = [
            schemas.AgendaDay(
                date=day,
                appointment_count=len(appointments_on(snapshot, day)),
                is_selected=day == selected_date,
                is_today=day == today,
            )
            for day in week_window(current_date)
        ]
        return schemas.AgendaView(
            week=week,
            selected_date=selected_date,
            appointments=[schemas.Appointment.model_validate(a) for a in appointments_on(snapshot, selected_date)],
            time_slots=list(TIME_SLOTS),
            month_usage=used,
            monthly_quota=monthly_quota(account.plan),
            quota_reached=engine.quota_reached(account.plan, used),
        )

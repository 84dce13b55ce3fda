"""Pydantic schemas for appointment data validation."""

from datetime import date as date_type, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from components.appointment.agenda import DEFAULT_TIME
from components.appointment.status import AppointmentStatus

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class AppointmentBase(BaseModel):
    """Base appointment schema."""
    client_id: int
    service_id: int
    date: date_type
    time: str = Field(DEFAULT_TIME, pattern=TIME_PATTERN, description="HH:MM, 24h")
    notes: Optional[str] = None


class AppointmentCreate(AppointmentBase):
    """Schema for appointment creation."""
    pass


class AppointmentUpdate(AppointmentBase):
    """Schema for a full appointment edit."""
    pass


class Appointment(BaseModel):
    """Schema for appointment response."""
    id: int
    client_id: Optional[int] = None
    service_id: Optional[int] = None
    client_name: Optional[str] = None
    service_name: Optional[str] = None
    value: Decimal
    date: date_type
    time: str
    notes: Optional[str] = None
    status: AppointmentStatus
    created_date: Optional[datetime] = None

    class Config:
        from_attributes = True


class AgendaDay(BaseModel):
    """Schema for one day of the agenda week strip."""
    date: date_type
    appointment_count: int
    is_selected: bool
    is_today: bool


class AgendaView(BaseModel):
    """Schema for the agenda screen."""
    week: List[AgendaDay]
    selected_date: date_type
    appointments: List[Appointment]
    time_slots: List[str]
    month_usage: int
    monthly_quota: Optional[int] = None
    quota_reached: bool

"""Pydantic schemas for dashboard and report responses."""

from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional
from pydantic import BaseModel

from components.account.policy import Plan
from components.appointment.schemas import Appointment
from components.transaction.schemas import Transaction


class QuotaStatus(BaseModel):
    """Schema for monthly quota usage."""
    used: int
    quota: Optional[int] = None
    percentage: Decimal
    warning: bool
    reached: bool


class Dashboard(BaseModel):
    """Schema for the dashboard screen."""
    greeting_name: str
    plan: Plan
    today: date
    month: str
    todays_appointments: List[Appointment]
    month_appointment_count: int
    quota: QuotaStatus
    month_revenue: Decimal
    client_count: int
    upgrade_hint: Optional[str] = None


class TrendPoint(BaseModel):
    """Schema for one month of the trend chart."""
    month: str
    appointment_count: int
    income: Decimal
    expense: Decimal


class CategoryTotal(BaseModel):
    """Schema for one slice of the category breakdown."""
    category: str
    amount: Decimal


class FinancialSummary(BaseModel):
    """Schema for the financial (ledger) screen."""
    month: str
    income: Decimal
    expense: Decimal
    balance: Decimal
    expense_by_category: List[CategoryTotal]
    trend: List[TrendPoint]
    transactions: List[Transaction]


class WeekdayCount(BaseModel):
    """Schema for one bar of the weekday histogram."""
    weekday: str
    count: int


class ServiceRanking(BaseModel):
    """Schema for one row of the most booked services."""
    service_name: str
    count: int


class PeriodReport(BaseModel):
    """Schema for the reports screen."""
    start: date
    end: date
    total_appointments: int
    completed_appointments: int
    completion_rate: Decimal
    income: Decimal
    expense: Decimal
    average_ticket: Decimal
    by_weekday: List[WeekdayCount]
    top_services: List[ServiceRanking]
    by_status: Dict[str, int]
    trend: List[TrendPoint]


class AdminOverview(BaseModel):
    """Schema for the cross-tenant admin screen."""
    total_accounts: int
    accounts_by_plan: Dict[str, int]
    total_appointments: int
    appointments_today: int
    total_income: Decimal
    month_income: Decimal
    total_clients: int
    recent_appointments: List[Appointment]

"""Repository assembling dashboard, financial and report views."""

from datetime import date
from typing import List, Optional

import pandas as pd
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from components.account.models import Account
from components.account.policy import Plan, monthly_quota, normalize_plan
from components.account.repository import AccountRepository
from components.appointment.models import Appointment
from components.appointment.repository import AppointmentRepository
from components.appointment.schemas import Appointment as AppointmentSchema
from components.client.models import Client
from components.client.repository import ClientRepository
from components.core.config import get_settings
from components.report import engine, schemas
from components.transaction.models import Transaction
from components.transaction.repository import TransactionRepository
from components.transaction.schemas import Transaction as TransactionSchema

settings = get_settings()

TREND_MONTHS_BACK = 5
TOP_SERVICES = 5
RECENT_APPOINTMENTS = 10
EXPORT_COLUMNS = ["date", "time", "client_name", "service_name", "status", "value"]

UPGRADE_HINTS = {
    Plan.FREE: "Unlock more features! Upgrade for unlimited appointments and much more.",
    Plan.BASIC: "Go Premium! Get full financial control and detailed reports.",
}


def _trend(points: List[dict]) -> List[schemas.TrendPoint]:
    return [schemas.TrendPoint(**point) for point in points]


class ReportRepository:
    """Builds the read-only summary screens of one account."""

    def __init__(self, session: AsyncSession, account: Account):
        """Initialize repository with database session and the viewing account."""
        self.session = session
        self.account = account
        self.appointments = AppointmentRepository(session, account.id)
        self.transactions = TransactionRepository(session, account.id)
        self.clients = ClientRepository(session, account.id)

    async def dashboard(self, today: date) -> schemas.Dashboard:
        """
        Summary shown on login.

        Monthly usage comes from the account's cached counter when it is for
        the current month; everything else is computed from the snapshot.
        """
        plan = normalize_plan(self.account.plan)
        month = engine.month_key(today)

        appointments = await self.appointments.list("-date", settings.DASHBOARD_LIST_LIMIT)
        transactions = []
        if plan == Plan.PREMIUM:
            transactions = await self.transactions.list("-date", settings.DASHBOARD_LIST_LIMIT)
        clients = await self.clients.list()

        used = engine.monthly_usage(self.account, appointments, month)
        full_name = (self.account.full_name or "").strip()

        return schemas.Dashboard(
            greeting_name=full_name.split(" ")[0] if full_name else "Professional",
            plan=plan,
            today=today,
            month=month,
            todays_appointments=[
                AppointmentSchema.model_validate(a) for a in engine.todays_appointments(appointments, today)
            ],
            month_appointment_count=engine.count_in_month(appointments, month),
            quota=schemas.QuotaStatus(
                used=used,
                quota=monthly_quota(plan),
                percentage=engine.usage_percentage(plan, used),
                warning=engine.near_quota(plan, used),
                reached=engine.quota_reached(plan, used),
            ),
            month_revenue=engine.revenue_for_month(plan, appointments, transactions, month),
            client_count=len(clients),
            upgrade_hint=UPGRADE_HINTS.get(plan),
        )

    async def financial(self, month: str, today: date, kind: Optional[str] = None) -> schemas.FinancialSummary:
        """Ledger totals of ``month`` with the six-month trend."""
        engine.parse_month(month)
        snapshot = await self.transactions.list("-date", settings.FINANCIAL_LIST_LIMIT)
        entries = engine.in_month(snapshot, month)
        listed = [entry for entry in entries if entry.type == kind] if kind else entries

        income = engine.sum_transactions(entries, "income")
        expense = engine.sum_transactions(entries, "expense")
        return schemas.FinancialSummary(
            month=month,
            income=income,
            expense=expense,
            balance=engine.balance(entries),
            expense_by_category=[
                schemas.CategoryTotal(category=category, amount=amount)
                for category, amount in engine.group_by_category(entries, "expense").items()
            ],
            trend=_trend(engine.monthly_trend([], snapshot, TREND_MONTHS_BACK, today)),
            transactions=[TransactionSchema.model_validate(entry) for entry in listed],
        )

    async def _report_snapshots(self):
        appointments = await self.appointments.list("-date", settings.REPORT_LIST_LIMIT)
        transactions = await self.transactions.list("-date", settings.REPORT_LIST_LIMIT)
        return appointments, transactions

    async def period_report(self, start: date, end: date, today: date) -> schemas.PeriodReport:
        """Performance indicators between ``start`` and ``end`` inclusive."""
        appointments, transactions = await self._report_snapshots()
        period_appointments = engine.filter_period(appointments, start, end)
        period_transactions = engine.filter_period(transactions, start, end)

        return schemas.PeriodReport(
            start=start,
            end=end,
            total_appointments=len(period_appointments),
            completed_appointments=len(engine.completed(period_appointments)),
            completion_rate=engine.completion_rate(period_appointments),
            income=engine.sum_transactions(period_transactions, "income"),
            expense=engine.sum_transactions(period_transactions, "expense"),
            average_ticket=engine.average_ticket(period_appointments),
            by_weekday=[
                schemas.WeekdayCount(weekday=label, count=count)
                for label, count in zip(engine.WEEKDAY_LABELS, engine.group_by_weekday(period_appointments))
            ],
            top_services=[
                schemas.ServiceRanking(service_name=name, count=count)
                for name, count in engine.top_n(period_appointments, TOP_SERVICES)
            ],
            by_status=engine.group_by_status(period_appointments),
            trend=_trend(engine.monthly_trend(appointments, transactions, TREND_MONTHS_BACK, today)),
        )

    async def export_period(self, start: date, end: date) -> str:
        """The period's appointments as CSV text."""
        appointments, _ = await self._report_snapshots()
        rows = [
            {
                "date": appointment.date.isoformat(),
                "time": appointment.time,
                "client_name": appointment.client_name,
                "service_name": appointment.service_name,
                "status": appointment.status,
                "value": f"{engine.to_money(appointment.value):.2f}",
            }
            for appointment in sorted(
                engine.filter_period(appointments, start, end),
                key=lambda a: (a.date, a.time or ""),
            )
        ]
        frame = pd.DataFrame(rows, columns=EXPORT_COLUMNS)
        return frame.to_csv(index=False)


class AdminReportRepository:
    """Cross-tenant figures for administrators."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def _latest(self, model, limit: int) -> list:
        result = await self.session.execute(
            select(model).order_by(model.created_date.desc(), model.id.desc()).limit(limit)
        )
        return list(result.scalars().all())

    async def overview(self, today: date) -> schemas.AdminOverview:
        limit = settings.ADMIN_LIST_LIMIT
        accounts = await AccountRepository(self.session).list("full_name", limit)
        appointments = await self._latest(Appointment, limit)
        transactions = await self._latest(Transaction, limit)
        result = await self.session.execute(select(Client).order_by(Client.name.asc()).limit(limit))
        clients = list(result.scalars().all())

        by_plan = {plan.value: 0 for plan in Plan}
        for account in accounts:
            by_plan[normalize_plan(account.plan).value] += 1

        month = engine.month_key(today)
        return schemas.AdminOverview(
            total_accounts=len(accounts),
            accounts_by_plan=by_plan,
            total_appointments=len(appointments),
            appointments_today=sum(1 for a in appointments if engine.parse_date(a.date) == today),
            total_income=engine.sum_transactions(transactions, "income"),
            month_income=engine.sum_transactions(engine.in_month(transactions, month), "income"),
            total_clients=len(clients),
            recent_appointments=[
                AppointmentSchema.model_validate(a) for a in appointments[:RECENT_APPOINTMENTS]
            ],
        )

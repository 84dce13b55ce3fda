"""Dashboard, financial and report endpoints for the API."""

from datetime import date
from typing import Optional, Tuple
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from components.account.models import Account
from components.account.policy import Feature
from components.core.init_db import get_db
from components.report import engine, schemas
from components.report.repository import ReportRepository
from components.transaction.schemas import TransactionType
from restapi.endpoints.auth import require_feature
from restapi.endpoints.helpers import get_today

router = APIRouter(
    prefix="/reports",
    tags=["reports"],
)


def _resolve_period(
    period: str,
    start: Optional[date],
    end: Optional[date],
    today: date,
) -> Tuple[date, date]:
    if start or end:
        if not (start and end):
            raise HTTPException(status_code=400, detail="Both start and end are required for a custom period")
        if start > end:
            raise HTTPException(status_code=400, detail="start must not be after end")
        return start, end
    return engine.period_bounds(period, today)


@router.get("/dashboard", response_model=schemas.Dashboard)
async def get_dashboard(
    today: date = Depends(get_today),
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.DASHBOARD))
):
    """
    Get the dashboard summary.

    Returns today's appointments (canceled ones left out), the month's
    appointment count and quota usage, the month's revenue and the number of
    clients. Revenue is the income ledger for Premium accounts and completed
    appointments for everyone else.
    """
    return await ReportRepository(db, account).dashboard(today)


@router.get("/financial", response_model=schemas.FinancialSummary)
async def get_financial(
    month: Optional[str] = Query(None, description="Month to summarise, YYYY-MM (defaults to the current month)"),
    kind: Optional[TransactionType] = Query(None, alias="type", description="Only list income or expense entries"),
    today: date = Depends(get_today),
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.FINANCIAL))
):
    """
    Get the financial summary of a month.

    Returns income, expenses, balance, expenses by category, the six-month
    income/expense trend and the month's entries.
    """
    return await ReportRepository(db, account).financial(
        month or engine.month_key(today),
        today,
        kind.value if kind else None,
    )


@router.get("/summary", response_model=schemas.PeriodReport)
async def get_summary(
    period: str = Query("month", description="week, month, quarter or year"),
    start: Optional[date] = Query(None, description="Custom period start"),
    end: Optional[date] = Query(None, description="Custom period end"),
    today: date = Depends(get_today),
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.REPORTS))
):
    """
    Get the performance report of a period.

    Returns:
    - Number of appointments and completed appointments
    - Completion rate (one decimal place)
    - Income and expenses from the ledger
    - Average ticket of completed appointments
    - Appointments per weekday, Sunday first
    - Five most booked services
    - Appointments per status
    - Six-month trend of appointments and income
    """
    first, last = _resolve_period(period, start, end, today)
    return await ReportRepository(db, account).period_report(first, last, today)


@router.get("/summary/export")
async def export_summary(
    period: str = Query("month", description="week, month, quarter or year"),
    start: Optional[date] = Query(None, description="Custom period start"),
    end: Optional[date] = Query(None, description="Custom period end"),
    today: date = Depends(get_today),
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.REPORTS))
):
    """Download the period's appointments as CSV."""
    first, last = _resolve_period(period, start, end, today)
    content = await ReportRepository(db, account).export_period(first, last)
    filename = f"appointments_{first.isoformat()}_{last.isoformat()}.csv"
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

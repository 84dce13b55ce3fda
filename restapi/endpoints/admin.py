"""Administrator endpoints for the API."""

from datetime import date
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from components.account.models import Account
from components.core.init_db import get_db
from components.report import schemas
from components.report.repository import AdminReportRepository
from restapi.endpoints.auth import require_admin
from restapi.endpoints.helpers import get_today

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
)


@router.get("/overview", response_model=schemas.AdminOverview)
async def get_overview(
    today: date = Depends(get_today),
    db: AsyncSession = Depends(get_db),
    admin: Account = Depends(require_admin)
):
    """Get platform-wide figures across every account."""
    return await AdminReportRepository(db).overview(today)

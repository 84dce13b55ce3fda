"""Health check endpoint for monitoring application status."""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from components.core import schemas
from components.core.config import get_settings
from components.core.init_db import get_db

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    prefix="/health_check",
    tags=["health"],
    responses={200: {"description": "Service status"}},
)


@router.get("/", response_model=schemas.HealthCheck)
async def health_check(db: AsyncSession = Depends(get_db)) -> schemas.HealthCheck:
    """Report whether the API is up and its database answers."""
    try:
        await db.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        database = "unavailable"

    return schemas.HealthCheck(
        service_name="ProServ",
        version=settings.API_VERSION,
        status="healthy" if database == "ok" else "degraded",
        database=database,
    )

"""Database initialization and dependency injection."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import fastapi
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.database import DatabaseManager
# Import all models to ensure they're registered
import components.account.models
import components.client.models
import components.service.models
import components.appointment.models
import components.transaction.models

logger = logging.getLogger(__name__)

# Create a single instance of DatabaseManager
db_manager = DatabaseManager()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for getting database sessions."""
    async with db_manager.get_db() as session:
        yield session


@asynccontextmanager
async def lifespan(app: fastapi.FastAPI):
    """Create tables on startup and dispose the engine on shutdown."""
    logger.info("Application starting up...")
    await db_manager.create_tables()
    logger.info("Database tables ready")
    yield
    await db_manager.engine.dispose()
    logger.info("Application shut down")

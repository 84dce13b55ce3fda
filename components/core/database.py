"""Engine and session handling for the application database."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from components.core import config

settings = config.get_settings()
Base = declarative_base()

# Pool options for server databases; sqlite manages its own connections
SERVER_POOL_OPTIONS = {
    "pool_pre_ping": True,
    "pool_size": 5,
    "max_overflow": 10,
}


class DatabaseManager:
    """Owns the async engine and hands out sessions bound to it."""

    def __init__(self, engine: Optional[AsyncEngine] = None) -> None:
        """Initialize with the configured database, or ``engine`` in tests."""
        self.engine = engine or self._create_engine(settings.async_db_url)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @staticmethod
    def _create_engine(url: str) -> AsyncEngine:
        options = {} if url.startswith("sqlite") else SERVER_POOL_OPTIONS
        return create_async_engine(url, echo=settings.DEBUG, **options)

    async def create_tables(self) -> None:
        """Create every registered table that does not exist yet."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def reset_tables(self) -> None:
        """Drop and recreate every registered table."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)

    @asynccontextmanager
    async def get_db(self) -> AsyncIterator[AsyncSession]:
        """Session scoped to one unit of work, rolled back if it fails."""
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

"""Owner-scoped CRUD contract shared by the tenant entity repositories."""

from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.exceptions import ValidationFailed


class OwnedRepository:
    """
    CRUD over one model, restricted to the rows of a single account.

    Subclasses set ``model`` and may set ``default_sort``. Sort keys follow
    the ``"-field"`` convention for descending order.
    """

    model: Any = None
    default_sort: str = "-created_date"

    def __init__(self, session: AsyncSession, owner_id: int):
        """Initialize repository with database session and owning account."""
        self.session = session
        self.owner_id = owner_id

    def _column(self, name: str):
        if name not in self.model.__table__.columns:
            raise ValidationFailed(f"Unknown field: {name}")
        return getattr(self.model, name)

    def _order_by(self, sort_key: str):
        descending = sort_key.startswith("-")
        column = self._column(sort_key.lstrip("-"))
        return column.desc() if descending else column.asc()

    def _scoped(self):
        return select(self.model).where(self.model.owner_id == self.owner_id)

    async def list(self, sort_key: Optional[str] = None, limit: Optional[int] = None) -> List[Any]:
        """Return up to ``limit`` records ordered by ``sort_key``."""
        query = self._scoped().order_by(
            self._order_by(sort_key or self.default_sort),
            self.model.id.desc(),
        )
        if limit is not None:
            query = query.limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def filter(
        self,
        sort_key: Optional[str] = None,
        limit: Optional[int] = None,
        **fields: Any,
    ) -> List[Any]:
        """Return up to ``limit`` records whose named fields match exactly."""
        query = self._scoped()
        for name, value in fields.items():
            query = query.where(self._column(name) == value)
        query = query.order_by(self._order_by(sort_key or self.default_sort), self.model.id.desc())
        if limit is not None:
            query = query.limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get(self, record_id: int) -> Optional[Any]:
        """Get a record by ID."""
        result = await self.session.execute(
            self._scoped().where(self.model.id == record_id)
        )
        return result.scalar_one_or_none()

    async def create(self, fields: Dict[str, Any]) -> Any:
        """Insert a record owned by the current account."""
        record = self.model(owner_id=self.owner_id, **fields)
        self.session.add(record)
        await self.session.commit()
        await self.session.refresh(record)
        return record

    async def update(self, record_id: int, fields: Dict[str, Any]) -> Optional[Any]:
        """Merge ``fields`` into an existing record."""
        record = await self.get(record_id)
        if not record:
            return None

        for name, value in fields.items():
            self._column(name)
            setattr(record, name, value)

        await self.session.commit()
        await self.session.refresh(record)
        return record

    async def delete(self, record_id: int) -> bool:
        """Delete a record by ID."""
        record = await self.get(record_id)
        if not record:
            return False

        await self.session.delete(record)
        await self.session.commit()
        return True

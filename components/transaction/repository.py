"""Repository for transaction operations."""

from typing import List, Optional

from components.core.config import get_settings
from components.core.repository import OwnedRepository
from components.report import engine
from components.transaction.models import Transaction

settings = get_settings()


class TransactionRepository(OwnedRepository):
    """Repository for transaction operations."""

    model = Transaction
    default_sort = "-date"

    async def for_month(self, month: str, kind: Optional[str] = None) -> List[Transaction]:
        """Ledger entries of ``month`` from the financial snapshot, optionally one type."""
        engine.parse_month(month)
        snapshot = await self.list("-date", settings.FINANCIAL_LIST_LIMIT)
        entries = engine.in_month(snapshot, month)
        if kind:
            entries = [entry for entry in entries if entry.type == kind]
        return entries

"""Repository for account operations."""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from components.account.models import Account
from components.account.policy import Plan, normalize_plan
from components.account.schemas import AccountCreate, AccountUpdate
from components.core.security import hash_password

logger = logging.getLogger(__name__)


class AccountRepository:
    """Repository for account operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def create(self, account: AccountCreate) -> Account:
        """Create a new account on the free plan."""
        db_account = Account(
            email=account.email.lower(),
            full_name=account.full_name,
            password=hash_password(account.password),
            role="user",
            plan=Plan.FREE.value,
        )
        self.session.add(db_account)
        await self.session.commit()
        await self.session.refresh(db_account)
        return db_account

    async def get_by_id(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        result = await self.session.execute(
            select(Account).where(Account.id == account_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[Account]:
        """Get account by email."""
        result = await self.session.execute(
            select(Account).where(Account.email == email.lower())
        )
        return result.scalar_one_or_none()

    async def exists(self, email: str) -> bool:
        """Check if an account with given email exists."""
        result = await self.session.execute(
            select(Account.id).where(Account.email == email.lower())
        )
        return result.scalar_one_or_none() is not None

    async def list(self, sort_key: str = "full_name", limit: int = 500) -> List[Account]:
        """List accounts across all tenants, for the admin overview."""
        column = getattr(Account, sort_key.lstrip("-"))
        order = column.desc() if sort_key.startswith("-") else column.asc()
        result = await self.session.execute(
            select(Account).order_by(order).limit(limit)
        )
        return list(result.scalars().all())

    async def update(self, account: Account, changes: AccountUpdate) -> Account:
        """Apply profile edits."""
        if changes.full_name is not None:
            account.full_name = changes.full_name
        if changes.password:
            account.password = hash_password(changes.password)

        await self.session.commit()
        await self.session.refresh(account)
        return account

    async def set_plan(self, account: Account, plan: Plan) -> Account:
        """Switch the account to another plan."""
        previous = normalize_plan(account.plan)
        account.plan = plan.value
        await self.session.commit()
        await self.session.refresh(account)
        logger.info(f"Account {account.id} plan changed: {previous.value} -> {plan.value}")
        return account

    async def record_month_usage(self, account: Account, month: str, count: int) -> Account:
        """Refresh the cached appointment counter for ``month``."""
        account.reference_month = month
        account.appointments_this_month = count
        await self.session.commit()
        await self.session.refresh(account)
        return account

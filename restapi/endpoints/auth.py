"""Authentication endpoints and access dependencies."""

import logging
from typing import Any, Callable
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from components.account import schemas
from components.account.models import Account
from components.account.policy import Feature, has_feature
from components.account.repository import AccountRepository
from components.core.exceptions import FeatureNotAvailable
from components.core.init_db import get_db
from components.core.security import (
    account_id_from_token,
    create_access_token,
    verify_password,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")

UPSELL_DETAIL = "This feature is available on the Premium plan. Upgrade to unlock it."


async def get_current_account(
    db: AsyncSession = Depends(get_db),
    token: str = Depends(oauth2_scheme)
) -> Account:
    """Get current account from JWT token."""
    account_id = account_id_from_token(token)
    if account_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    account = await AccountRepository(db).get_by_id(account_id)
    if account is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return account


def require_feature(feature: Feature) -> Callable:
    """Dependency that only lets through accounts whose plan unlocks ``feature``."""
    async def dependency(account: Account = Depends(get_current_account)) -> Account:
        if not has_feature(account.plan, feature):
            raise FeatureNotAvailable(UPSELL_DETAIL)
        return account
    return dependency


async def require_admin(account: Account = Depends(get_current_account)) -> Account:
    """Dependency that only lets through administrators."""
    if account.role != "admin":
        raise FeatureNotAvailable("You need to be an administrator to access this area.")
    return account


@router.post("/register", response_model=schemas.AccountWithToken)
async def register(
    account_in: schemas.AccountCreate,
    db: AsyncSession = Depends(get_db)
) -> Any:
    """Create new account and return JWT token."""
    repo = AccountRepository(db)
    if await repo.exists(account_in.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )

    account = await repo.create(account_in)
    logger.info(f"Account {account.id} registered")
    return schemas.AccountWithToken(
        **schemas.Account.model_validate(account).model_dump(),
        access_token=create_access_token(account.id),
    )


@router.post("/login", response_model=schemas.AccountWithToken)
async def login(
    db: AsyncSession = Depends(get_db),
    form_data: OAuth2PasswordRequestForm = Depends()
) -> Any:
    """Login with email and password and return JWT token."""
    account = await AccountRepository(db).get_by_email(form_data.username)
    if not account or not verify_password(form_data.password, account.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return schemas.AccountWithToken(
        **schemas.Account.model_validate(account).model_dump(),
        access_token=create_access_token(account.id),
    )


@router.get("/me", response_model=schemas.Account)
async def read_me(account: Account = Depends(get_current_account)):
    """Get the signed-in account."""
    return account


@router.patch("/me", response_model=schemas.Account)
async def update_me(
    changes: schemas.AccountUpdate,
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(get_current_account)
):
    """Edit the signed-in account's profile."""
    return await AccountRepository(db).update(account, changes)

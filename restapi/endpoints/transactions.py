"""Transaction (bookkeeping) endpoints for the API."""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from components.account.models import Account
from components.account.policy import Feature
from components.core.config import get_settings
from components.core.init_db import get_db
from components.core.schemas import Message
from components.transaction import schemas
from components.transaction.repository import TransactionRepository
from restapi.endpoints.auth import require_feature

settings = get_settings()

router = APIRouter(
    prefix="/transactions",
    tags=["transactions"],
    responses={404: {"description": "Not found"}},
)

NOT_FOUND = "Transaction not found"


@router.get("/", response_model=List[schemas.Transaction])
async def read_transactions(
    month: Optional[str] = Query(None, description="Only this month, YYYY-MM"),
    kind: Optional[schemas.TransactionType] = Query(None, alias="type", description="Only income or expense"),
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.FINANCIAL))
):
    """Get ledger entries, most recent first."""
    repo = TransactionRepository(db, account.id)
    if month:
        return await repo.for_month(month, kind.value if kind else None)
    if kind:
        return await repo.filter("-date", settings.FINANCIAL_LIST_LIMIT, type=kind.value)
    return await repo.list("-date", settings.FINANCIAL_LIST_LIMIT)


@router.post("/", response_model=schemas.Transaction)
async def create_transaction(
    transaction: schemas.TransactionCreate,
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.FINANCIAL))
):
    """Record income or an expense."""
    return await TransactionRepository(db, account.id).create(transaction.model_dump())


@router.get("/{transaction_id}", response_model=schemas.Transaction)
async def read_transaction(
    transaction_id: int,
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.FINANCIAL))
):
    """Get a specific ledger entry by ID."""
    transaction = await TransactionRepository(db, account.id).get(transaction_id)
    if transaction is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return transaction


@router.put("/{transaction_id}", response_model=schemas.Transaction)
async def update_transaction(
    transaction_id: int,
    transaction: schemas.TransactionUpdate,
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.FINANCIAL))
):
    """Replace a ledger entry."""
    updated = await TransactionRepository(db, account.id).update(transaction_id, transaction.model_dump())
    if updated is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return updated


@router.delete("/{transaction_id}", response_model=Message)
async def delete_transaction(
    transaction_id: int,
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.FINANCIAL))
):
    """Delete a ledger entry."""
    if not await TransactionRepository(db, account.id).delete(transaction_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return Message(message="Transaction deleted successfully")

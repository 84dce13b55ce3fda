"""Plan selection and checkout endpoints for the API."""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from components.account import schemas as account_schemas
from components.account.models import Account
from components.account.policy import PLAN_CATALOG, Feature, is_downgrade, normalize_plan
from components.billing import schemas
from components.billing.gateway import MercadoPagoGateway
from components.billing.service import apply_payment_return, select_plan
from components.core.init_db import get_db
from restapi.endpoints.auth import require_feature
from restapi.endpoints.helpers import get_gateway

router = APIRouter(
    prefix="/plans",
    tags=["plans"],
)


@router.get("/", response_model=List[account_schemas.PlanCatalogEntry])
async def read_plans(account: Account = Depends(require_feature(Feature.PLANS))):
    """Get the plan catalogue, marking the current plan and downgrades."""
    current = normalize_plan(account.plan)
    return [
        account_schemas.PlanCatalogEntry(
            **entry,
            is_current=entry["id"] == current,
            is_downgrade=is_downgrade(current, entry["id"]),
        )
        for entry in PLAN_CATALOG
    ]


@router.post("/checkout", response_model=schemas.CheckoutResponse)
async def checkout(
    request: schemas.CheckoutRequest,
    gateway: MercadoPagoGateway = Depends(get_gateway),
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.PLANS))
):
    """
    Select a plan.

    - The current plan: nothing happens
    - Free: applied immediately
    - Basic or Premium: returns the Mercado Pago checkout URL to redirect to
    """
    return await select_plan(db, account, request.plan, gateway)


@router.post("/confirm", response_model=schemas.PaymentReturnResult)
async def confirm_payment(
    payment: Optional[str] = Query(None, description="Payment status from the redirect"),
    plan: Optional[str] = Query(None, description="Plan from the redirect"),
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.PLANS))
):
    """
    Apply the plan carried by a checkout success redirect.

    The redirect is not verified with the payment provider.
    """
    return await apply_payment_return(db, account, payment, plan)

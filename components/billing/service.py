"""Plan changes driven from the plans page."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from components.account.models import Account
from components.account.policy import Plan, is_paid, normalize_plan
from components.account.repository import AccountRepository
from components.billing.gateway import MercadoPagoGateway
from components.billing.schemas import CheckoutOutcome, CheckoutResponse, PaymentReturnResult

logger = logging.getLogger(__name__)


async def select_plan(
    session: AsyncSession,
    account: Account,
    target: Plan,
    gateway: MercadoPagoGateway,
) -> CheckoutResponse:
    """
    Start moving the account to ``target``.

    The current plan is a no-op and the free plan is applied straight away.
    Paid plans return a checkout URL; the plan only changes once the payer
    comes back through ``apply_payment_return``.
    """
    current = normalize_plan(account.plan)
    if target == current:
        return CheckoutResponse(outcome=CheckoutOutcome.UNCHANGED, plan=current)

    if not is_paid(target):
        await AccountRepository(session).set_plan(account, target)
        return CheckoutResponse(outcome=CheckoutOutcome.CHANGED, plan=target)

    preference = await gateway.create_preference(target.value, account.email, account.full_name or "")
    return CheckoutResponse(
        outcome=CheckoutOutcome.CHECKOUT,
        plan=current,
        checkout_url=preference.checkout_url,
        preference_id=preference.preference_id,
    )


async def apply_payment_return(session: AsyncSession, account: Account, payment: str, plan: str) -> PaymentReturnResult:
    """
    Apply the plan named in a success redirect.

    The redirect parameters come from the browser and are not checked against
    the provider, so the upgrade is logged as unverified.
    """
    current = normalize_plan(account.plan)
    if payment != "success" or not plan or plan not in {p.value for p in Plan}:
        return PaymentReturnResult(applied=False, plan=current)

    target = Plan(plan)
    logger.warning(f"Applying unverified payment return for account {account.id}: {current.value} -> {target.value}")
    await AccountRepository(session).set_plan(account, target)
    return PaymentReturnResult(applied=True, plan=target)

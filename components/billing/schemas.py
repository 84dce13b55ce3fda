"""Pydantic schemas for plan checkout."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel

from components.account.policy import Plan


class CheckoutOutcome(str, Enum):
    UNCHANGED = "unchanged"
    CHANGED = "changed"
    CHECKOUT = "checkout"


class CheckoutRequest(BaseModel):
    """Schema for selecting a plan on the plans page."""
    plan: Plan


class CheckoutPreference(BaseModel):
    """Schema for a created checkout preference."""
    checkout_url: str
    preference_id: str


class CheckoutResponse(BaseModel):
    """Schema for the result of selecting a plan."""
    outcome: CheckoutOutcome
    plan: Plan
    checkout_url: Optional[str] = None
    preference_id: Optional[str] = None



class PaymentReturnResult(BaseModel):
    """Schema for the result of processing a payment redirect."""
    applied: bool
    plan: Plan

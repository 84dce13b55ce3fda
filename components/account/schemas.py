"""Pydantic schemas for account data validation."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from components.account.policy import Plan, normalize_plan


class AccountBase(BaseModel):
    """Base account schema."""
    email: str
    full_name: str = Field("", max_length=255)


class AccountCreate(AccountBase):
    """Schema for account registration."""
    email: EmailStr
    password: str = Field(..., min_length=6)


class AccountUpdate(BaseModel):
    """Schema for profile edits."""
    full_name: Optional[str] = Field(None, max_length=255)
    password: Optional[str] = Field(None, min_length=6)


class Account(AccountBase):
    """Schema for account response."""
    id: int
    role: str
    plan: Plan
    appointments_this_month: Optional[int] = None
    reference_month: Optional[str] = None
    created_date: Optional[datetime] = None

    class Config:
        from_attributes = True

    @field_validator("plan", mode="before")
    @classmethod
    def default_to_free(cls, value):
        return normalize_plan(value)


class AccountWithToken(Account):
    """Schema for account response carrying a fresh access token."""
    access_token: str
    token_type: str = "bearer"


class PlanCatalogEntry(BaseModel):
    """Schema for one plan on the plans page."""
    id: Plan
    name: str
    description: str
    price: Decimal
    features: List[str]
    highlighted: bool
    is_current: bool
    is_downgrade: bool

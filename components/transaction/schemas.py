"""Pydantic schemas for transaction data validation."""

from datetime import date as date_type, datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, model_validator


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


CATEGORIES: Dict[TransactionType, List[str]] = {
    TransactionType.INCOME: ["service", "product", "other"],
    TransactionType.EXPENSE: ["rent", "supplies", "equipment", "marketing", "other"],
}

DEFAULT_CATEGORY: Dict[TransactionType, str] = {
    TransactionType.INCOME: "service",
    TransactionType.EXPENSE: "other",
}


class TransactionBase(BaseModel):
    """Base transaction schema."""
    type: TransactionType = TransactionType.INCOME
    category: Optional[str] = None
    description: Optional[str] = None
    amount: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    date: date_type
    client_name: Optional[str] = Field(None, max_length=255)

    class Config:
        use_enum_values = True

    @model_validator(mode="after")
    def category_matches_type(self):
        kind = TransactionType(self.type)
        if not self.category:
            self.category = DEFAULT_CATEGORY[kind]
        if self.category not in CATEGORIES[kind]:
            raise ValueError(
                f"Category '{self.category}' is not valid for {kind.value}; "
                f"expected one of {', '.join(CATEGORIES[kind])}"
            )
        return self


class TransactionCreate(TransactionBase):
    """Schema for transaction creation."""
    pass


class TransactionUpdate(TransactionBase):
    """Schema for a full transaction edit."""
    pass


class Transaction(BaseModel):
    """Schema for transaction response."""
    id: int
    type: TransactionType
    category: str
    description: Optional[str] = None
    amount: Decimal
    date: date_type
    client_name: Optional[str] = None
    created_date: Optional[datetime] = None

    class Config:
        from_attributes = True

"""Pydantic schemas for service data validation."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class ServiceBase(BaseModel):
    """Base service schema."""
    name: str = Field(..., max_length=255)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    duration: int = Field(0, ge=0, description="Duration in minutes")
    active: bool = True

    @field_validator("name")
    @classmethod
    def name_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Name is required")
        return value.strip()


class ServiceCreate(ServiceBase):
    """Schema for service creation."""
    pass


class ServiceUpdate(BaseModel):
    """Schema for partial service edits."""
    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    duration: Optional[int] = Field(None, ge=0)
    active: Optional[bool] = None

    @field_validator("name", "price", "duration", "active")
    @classmethod
    def not_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class ServiceActiveToggle(BaseModel):
    """Schema for switching a service on or off."""
    active: bool


class Service(ServiceBase):
    """Schema for service response."""
    id: int
    created_date: Optional[datetime] = None

    class Config:
        from_attributes = True

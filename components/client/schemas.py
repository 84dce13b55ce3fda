"""Pydantic schemas for client data validation."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


class ClientBase(BaseModel):
    """Base client schema."""
    name: str = Field(..., max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    tax_id: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Name is required")
        return value.strip()


class ClientCreate(ClientBase):
    """Schema for client creation."""
    pass


class ClientUpdate(BaseModel):
    """Schema for partial client edits."""
    name: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    tax_id: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: Optional[str]) -> str:
        # Only runs when a name is sent; null would clear a required column
        if value is None or not value.strip():
            raise ValueError("Name is required")
        return value.strip()


class Client(ClientBase):
    """Schema for client response."""
    id: int
    created_date: Optional[datetime] = None

    class Config:
        from_attributes = True


class ClientImportError(BaseModel):
    """Schema for client import error."""
    row: int
    message: str


class ClientImportResponse(BaseModel):
    """Schema for client import response."""
    success: bool
    message: str
    imported: int = 0
    errors: Optional[List[ClientImportError]] = None

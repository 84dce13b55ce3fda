"""Response schemas shared across resources."""

from pydantic import BaseModel


class HealthCheck(BaseModel):
    """Schema for health check response."""
    service_name: str
    version: str
    status: str
    database: str


class Message(BaseModel):
    """Schema for plain acknowledgement responses."""
    message: str

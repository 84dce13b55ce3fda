"""Shared request dependencies for the endpoints."""

from datetime import date

from components.billing.gateway import MercadoPagoGateway


def get_today() -> date:
    """Reference date for quota and report computations."""
    return date.today()


def get_gateway() -> MercadoPagoGateway:
    """Payment gateway configured from settings."""
    return MercadoPagoGateway()

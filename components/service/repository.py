"""Repository for service operations."""

from components.core.repository import OwnedRepository
from components.service.models import Service


class ServiceRepository(OwnedRepository):
    """Repository for service operations."""

    model = Service
    default_sort = "name"

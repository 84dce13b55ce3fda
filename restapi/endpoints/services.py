"""Service catalogue endpoints for the API."""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from components.account.models import Account
from components.account.policy import Feature
from components.core.init_db import get_db
from components.core.schemas import Message
from components.service import schemas
from components.service.repository import ServiceRepository
from restapi.endpoints.auth import require_feature

router = APIRouter(
    prefix="/services",
    tags=["services"],
    responses={404: {"description": "Not found"}},
)


@router.get("/", response_model=List[schemas.Service])
async def read_services(
    active: Optional[bool] = Query(None, description="Only services with this active flag"),
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.SERVICES))
):
    """Get the account's services ordered by name."""
    repo = ServiceRepository(db, account.id)
    if active is None:
        return await repo.list("name")
    return await repo.filter(active=active)


@router.post("/", response_model=schemas.Service)
async def create_service(
    service: schemas.ServiceCreate,
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.SERVICES))
):
    """Add a service to the catalogue."""
    return await ServiceRepository(db, account.id).create(service.model_dump())


@router.get("/{service_id}", response_model=schemas.Service)
async def read_service(
    service_id: int,
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.SERVICES))
):
    """Get a specific service by ID."""
    service = await ServiceRepository(db, account.id).get(service_id)
    if service is None:
        raise HTTPException(status_code=404, detail="Service not found")
    return service


@router.put("/{service_id}", response_model=schemas.Service)
async def update_service(
    service_id: int,
    service: schemas.ServiceUpdate,
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.SERVICES))
):
    """Update a service. Booked appointments keep the price they were booked at."""
    changes = service.model_dump(exclude_unset=True)
    if "name" in changes and not (changes["name"] or "").strip():
        raise HTTPException(status_code=400, detail="Name is required")
    updated = await ServiceRepository(db, account.id).update(service_id, changes)
    if updated is None:
        raise HTTPException(status_code=404, detail="Service not found")
    return updated


@router.patch("/{service_id}/active", response_model=schemas.Service)
async def toggle_service(
    service_id: int,
    toggle: schemas.ServiceActiveToggle,
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.SERVICES))
):
    """Switch a service on or off for new bookings."""
    updated = await ServiceRepository(db, account.id).update(service_id, {"active": toggle.active})
    if updated is None:
        raise HTTPException(status_code=404, detail="Service not found")
    return updated


@router.delete("/{service_id}", response_model=Message)
async def delete_service(
    service_id: int,
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.SERVICES))
):
    """Delete a service. Appointments already booked are kept."""
    if not await ServiceRepository(db, account.id).delete(service_id):
        raise HTTPException(status_code=404, detail="Service not found")
    return Message(message="Service deleted successfully")

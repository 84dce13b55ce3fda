"""Client endpoints for the API."""

import io
from typing import List, Optional
from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from components.account.models import Account
from components.account.policy import Feature
from components.client import schemas
from components.client.repository import ClientRepository
from components.core.init_db import get_db
from components.core.schemas import Message
from restapi.endpoints.auth import require_feature

router = APIRouter(
    prefix="/clients",
    tags=["clients"],
    responses={404: {"description": "Not found"}},
)


@router.get("/", response_model=List[schemas.Client])
async def read_clients(
    search: Optional[str] = Query(None, description="Filter by name, email or phone"),
    limit: int = Query(500, ge=1, le=1000, description="Number of records to return"),
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.CLIENTS))
):
    """Get the account's clients ordered by name."""
    repo = ClientRepository(db, account.id)
    if search:
        return await repo.search(search, limit)
    return await repo.list("name", limit)


@router.post("/", response_model=schemas.Client)
async def create_client(
    client: schemas.ClientCreate,
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.CLIENTS))
):
    """Register a new client."""
    return await ClientRepository(db, account.id).create(client.model_dump())


@router.post("/import", response_model=schemas.ClientImportResponse)
async def import_clients(
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.CLIENTS))
):
    """
    Import clients from a CSV file.

    The CSV file must have a ``name`` column and may have ``email``,
    ``phone``, ``tax_id``, ``address`` and ``notes``. Nothing is imported
    when any row is invalid.
    """
    if not (file.filename or "").lower().endswith(".csv"):
        return schemas.ClientImportResponse(
            success=False,
            message="Invalid file format. Only CSV files (.csv) are supported."
        )

    file_content = await file.read()
    success, message, imported, errors = await ClientRepository(db, account.id).import_from_csv(
        io.BytesIO(file_content)
    )
    return schemas.ClientImportResponse(
        success=success,
        message=message,
        imported=imported,
        errors=[schemas.ClientImportError(**error) for error in errors] or None,
    )


@router.get("/{client_id}", response_model=schemas.Client)
async def read_client(
    client_id: int,
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.CLIENTS))
):
    """Get a specific client by ID."""
    client = await ClientRepository(db, account.id).get(client_id)
    if client is None:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


@router.put("/{client_id}", response_model=schemas.Client)
async def update_client(
    client_id: int,
    client: schemas.ClientUpdate,
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.CLIENTS))
):
    """Update a client. Existing appointments keep the name they were booked with."""
    updated = await ClientRepository(db, account.id).update(client_id, client.model_dump(exclude_unset=True))
    if updated is None:
        raise HTTPException(status_code=404, detail="Client not found")
    return updated


@router.delete("/{client_id}", response_model=Message)
async def delete_client(
    client_id: int,
    db: AsyncSession = Depends(get_db),
    account: Account = Depends(require_feature(Feature.CLIENTS))
):
    """Delete a client. Their appointments are kept."""
    if not await ClientRepository(db, account.id).delete(client_id):
        raise HTTPException(status_code=404, detail="Client not found")
    return Message(message="Client deleted successfully")

# =============================================================================
# app/routers/clients.py - Client Endpoints
# =============================================================================

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path

from app.dependencies import CurrentUser, UploaderDep, resolve_form_media
from core.models.client import ClientCreate, ClientResponse, ClientUpdate
from core.services.organization_service import OrganizationService
from core.services.record_service import ClientService

logger = logging.getLogger(__name__)

router = APIRouter()

OrganizationId = Annotated[UUID, Path(description="Organization UUID")]
ClientId = Annotated[UUID, Path(description="Client UUID")]


@router.post("/organizations/{organization_id}/clients", response_model=ClientResponse, status_code=201)
async def create_client(
    organization_id: OrganizationId,
    payload: ClientCreate,
    user: CurrentUser,
    uploader: UploaderDep,
):
    OrganizationService.get_organization(str(organization_id), user_id=user.id)
    resolved = await resolve_form_media(uploader, payload)
    client = ClientService.create(str(organization_id), user.id, payload.to_record(resolved))
    return ClientResponse(**client)


@router.get("/organizations/{organization_id}/clients", response_model=list[ClientResponse])
async def list_clients(organization_id: OrganizationId, user: CurrentUser):
    rows = ClientService.list_for_organization(str(organization_id), user.id)
    return [ClientResponse(**r) for r in rows]


@router.get("/clients/{client_id}", response_model=ClientResponse)
async def get_client(client_id: ClientId, user: CurrentUser):
    return ClientResponse(**ClientService.get(str(client_id), user.id))


@router.put("/clients/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: ClientId,
    payload: ClientUpdate,
    user: CurrentUser,
    uploader: UploaderDep,
):
    """Rename a client or swap its logo."""
    ClientService.get(str(client_id), user.id)
    resolved = await resolve_form_media(uploader, payload)
    client = ClientService.update(str(client_id), user.id, payload.to_record(resolved))
    return ClientResponse(**client)


@router.delete("/clients/{client_id}")
async def delete_client(client_id: ClientId, user: CurrentUser):
    ClientService.delete(str(client_id), user.id)
    return {"success": True, "message": "Client deleted successfully"}

# =============================================================================
# app/routers/offerings.py - Service Endpoints
# =============================================================================
# Services an organization offers, with logo, banner and sample work images.
# Mounted under /api/v1 with "/services" paths; the module is named
# offerings to stay clear of core/services.
# =============================================================================

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path

from app.dependencies import CurrentUser, UploaderDep, resolve_form_media
from core.models.offering import ServiceCreate, ServiceResponse, ServiceUpdate
from core.services.organization_service import OrganizationService
from core.services.record_service import OfferingService

logger = logging.getLogger(__name__)

router = APIRouter()

OrganizationId = Annotated[UUID, Path(description="Organization UUID")]
ServiceId = Annotated[UUID, Path(description="Service UUID")]


@router.post("/organizations/{organization_id}/services", response_model=ServiceResponse, status_code=201)
async def create_service(
    organization_id: OrganizationId,
    payload: ServiceCreate,
    user: CurrentUser,
    uploader: UploaderDep,
):
    """
    Add a service.

    Logo, banner and every sample work image are resolved together; if one
    upload fails the service isn't created.
    """
    OrganizationService.get_organization(str(organization_id), user_id=user.id)
    resolved = await resolve_form_media(uploader, payload)
    service = OfferingService.create(str(organization_id), user.id, payload.to_record(resolved))
    return ServiceResponse(**service)


@router.get("/organizations/{organization_id}/services", response_model=list[ServiceResponse])
async def list_services(organization_id: OrganizationId, user: CurrentUser):
    rows = OfferingService.list_for_organization(str(organization_id), user.id)
    return [ServiceResponse(**r) for r in rows]


@router.get("/services/{service_id}", response_model=ServiceResponse)
async def get_service(service_id: ServiceId, user: CurrentUser):
    return ServiceResponse(**OfferingService.get(str(service_id), user.id))


@router.put("/services/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: ServiceId,
    payload: ServiceUpdate,
    user: CurrentUser,
    uploader: UploaderDep,
):
    OfferingService.get(str(service_id), user.id)
    resolved = await resolve_form_media(uploader, payload)
    service = OfferingService.update(str(service_id), user.id, payload.to_record(resolved))
    return ServiceResponse(**service)


@router.delete("/services/{service_id}")
async def delete_service(service_id: ServiceId, user: CurrentUser):
    OfferingService.delete(str(service_id), user.id)
    return {"success": True, "message": "Service deleted successfully"}

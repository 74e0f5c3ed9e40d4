# =============================================================================
# app/routers/organizations.py - Organization CRUD Endpoints
# =============================================================================
# Dashboard endpoints for a user's organizations.
# All endpoints require authentication.
#
# Create/update first persist media fields (logo, cover_image) through the
# conditional uploader. If an upload fails the organization isn't written.
# =============================================================================

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path

from app.dependencies import CurrentUser, UploaderDep, resolve_form_media
from core.models.organization import (
    OrganizationCreate,
    OrganizationList,
    OrganizationResponse,
    OrganizationUpdate,
    PublishToggleResponse,
)
from core.services.organization_service import OrganizationService

logger = logging.getLogger(__name__)

router = APIRouter()

OrganizationId = Annotated[UUID, Path(description="Organization UUID")]


@router.post("", response_model=OrganizationResponse, status_code=201)
async def create_organization(
    payload: OrganizationCreate,
    user: CurrentUser,
    uploader: UploaderDep,
):
    """
    Create an organization.

    New organizations start unpublished. The slug must be unique.
    """
    OrganizationService.ensure_slug_available(payload.slug)
    resolved = await resolve_form_media(uploader, payload)
    org = OrganizationService.create_organization(user.id, payload.to_record(resolved))
    return OrganizationResponse(**org)


@router.get("", response_model=OrganizationList)
async def list_organizations(user: CurrentUser):
    """List the caller's organizations, newest first."""
    orgs = OrganizationService.list_organizations(user.id)
    return OrganizationList(
        organizations=[OrganizationResponse(**o) for o in orgs],
        total=len(orgs),
    )


@router.get("/{organization_id}")
async def get_organization(organization_id: OrganizationId, user: CurrentUser):
    """Organization with its projects, services, clients and reviews."""
    return OrganizationService.get_organization_with_children(str(organization_id), user_id=user.id)


@router.put("/{organization_id}", response_model=OrganizationResponse)
async def update_organization(
    organization_id: OrganizationId,
    payload: OrganizationUpdate,
    user: CurrentUser,
    uploader: UploaderDep,
):
    """
    Update an organization.

    Omitted fields are unchanged. Media fields that still hold their
    uploaded URL are not uploaded again.
    """
    current = OrganizationService.get_organization(str(organization_id), user_id=user.id)
    if payload.slug and payload.slug != current.get("slug"):
        OrganizationService.ensure_slug_available(payload.slug, exclude_id=current["id"])
    resolved = await resolve_form_media(uploader, payload)
    data = payload.to_record(resolved, current_social_links=current.get("social_links"))
    org = OrganizationService.update_organization(str(organization_id), user.id, data)
    return OrganizationResponse(**org)


@router.post("/{organization_id}/publish", response_model=PublishToggleResponse)
async def toggle_publish(organization_id: OrganizationId, user: CurrentUser):
    """Publish or unpublish the public portfolio page."""
    is_published = OrganizationService.toggle_publish(str(organization_id), user.id)
    return PublishToggleResponse(is_published=is_published)


@router.delete("/{organization_id}")
async def delete_organization(organization_id: OrganizationId, user: CurrentUser):
    """Delete an organization and everything attached to it."""
    OrganizationService.delete_organization(str(organization_id), user.id)
    return {"success": True, "message": "Organization deleted successfully"}

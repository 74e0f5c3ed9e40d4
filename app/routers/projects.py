# =============================================================================
# app/routers/projects.py - Project Endpoints
# =============================================================================
# Projects of an organization: cover image plus an image gallery.
# All endpoints require authentication and organization ownership.
# =============================================================================

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path

from app.dependencies import CurrentUser, UploaderDep, resolve_form_media
from core.models.project import ProjectCreate, ProjectResponse, ProjectUpdate
from core.services.organization_service import OrganizationService
from core.services.record_service import ProjectService

logger = logging.getLogger(__name__)

router = APIRouter()

OrganizationId = Annotated[UUID, Path(description="Organization UUID")]
ProjectId = Annotated[UUID, Path(description="Project UUID")]


@router.post("/organizations/{organization_id}/projects", response_model=ProjectResponse, status_code=201)
async def create_project(
    organization_id: OrganizationId,
    payload: ProjectCreate,
    user: CurrentUser,
    uploader: UploaderDep,
):
    """Add a project. Cover and gallery images are uploaded on save."""
    OrganizationService.get_organization(str(organization_id), user_id=user.id)
    resolved = await resolve_form_media(uploader, payload)
    project = ProjectService.create(str(organization_id), user.id, payload.to_record(resolved))
    return ProjectResponse(**project)


@router.get("/organizations/{organization_id}/projects", response_model=list[ProjectResponse])
async def list_projects(organization_id: OrganizationId, user: CurrentUser):
    """Projects of an organization, pinned first."""
    rows = ProjectService.list_for_organization(str(organization_id), user.id)
    return [ProjectResponse(**r) for r in rows]


@router.get("/projects/{project_id}", response_model=ProjectResponse)
async def get_project(project_id: ProjectId, user: CurrentUser):
    return ProjectResponse(**ProjectService.get(str(project_id), user.id))


@router.put("/projects/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: ProjectId,
    payload: ProjectUpdate,
    user: CurrentUser,
    uploader: UploaderDep,
):
    """Update a project. Unchanged image URLs are kept without re-uploading."""
    ProjectService.get(str(project_id), user.id)
    resolved = await resolve_form_media(uploader, payload)
    project = ProjectService.update(str(project_id), user.id, payload.to_record(resolved))
    return ProjectResponse(**project)


@router.delete("/projects/{project_id}")
async def delete_project(project_id: ProjectId, user: CurrentUser):
    ProjectService.delete(str(project_id), user.id)
    return {"success": True, "message": "Project deleted successfully"}

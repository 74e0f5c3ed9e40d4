# =============================================================================
# app/routers/reviews.py - Review Endpoints
# =============================================================================

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path

from app.dependencies import CurrentUser, UploaderDep, resolve_form_media
from core.models.review import ReviewCreate, ReviewResponse, ReviewUpdate
from core.services.organization_service import OrganizationService
from core.services.record_service import ReviewService

logger = logging.getLogger(__name__)

router = APIRouter()

OrganizationId = Annotated[UUID, Path(description="Organization UUID")]
ReviewId = Annotated[UUID, Path(description="Review UUID")]


@router.post("/organizations/{organization_id}/reviews", response_model=ReviewResponse, status_code=201)
async def create_review(
    organization_id: OrganizationId,
    payload: ReviewCreate,
    user: CurrentUser,
    uploader: UploaderDep,
):
    """Add a review. The author's photo is uploaded on save."""
    OrganizationService.get_organization(str(organization_id), user_id=user.id)
    resolved = await resolve_form_media(uploader, payload)
    review = ReviewService.create(str(organization_id), user.id, payload.to_record(resolved))
    return ReviewResponse(**review)


@router.get("/organizations/{organization_id}/reviews", response_model=list[ReviewResponse])
async def list_reviews(organization_id: OrganizationId, user: CurrentUser):
    """Reviews of an organization, newest first."""
    rows = ReviewService.list_for_organization(str(organization_id), user.id)
    return [ReviewResponse(**r) for r in rows]


@router.get("/reviews/{review_id}", response_model=ReviewResponse)
async def get_review(review_id: ReviewId, user: CurrentUser):
    return ReviewResponse(**ReviewService.get(str(review_id), user.id))


@router.put("/reviews/{review_id}", response_model=ReviewResponse)
async def update_review(
    review_id: ReviewId,
    payload: ReviewUpdate,
    user: CurrentUser,
    uploader: UploaderDep,
):
    ReviewService.get(str(review_id), user.id)
    resolved = await resolve_form_media(uploader, payload)
    review = ReviewService.update(str(review_id), user.id, payload.to_record(resolved))
    return ReviewResponse(**review)


@router.delete("/reviews/{review_id}")
async def delete_review(review_id: ReviewId, user: CurrentUser):
    ReviewService.delete(str(review_id), user.id)
    return {"success": True, "message": "Review deleted successfully"}

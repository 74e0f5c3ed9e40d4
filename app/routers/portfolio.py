# =============================================================================
# app/routers/portfolio.py - Public Portfolio Endpoints
# =============================================================================
# Read-only, unauthenticated views of published organizations.
# Unpublished and unknown slugs both answer 404.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path

from core.models.organization import PublicOrganization, PublicPortfolio, PublicServicePage
from core.services.organization_service import OrganizationService

router = APIRouter()

Slug = Annotated[str, Path(min_length=3, max_length=100, description="Organization slug")]


@router.get("/{slug}", response_model=PublicPortfolio)
async def get_portfolio(slug: Slug):
    """
    Public portfolio page data.

    Includes pinned/featured projects, services, up to 12 clients, the 6
    latest reviews and the average rating.
    """
    data = OrganizationService.get_public_portfolio(slug)
    return PublicPortfolio(
        organization=PublicOrganization(**data["organization"]),
        projects=data["projects"],
        services=data["services"],
        clients=data["clients"],
        reviews=data["reviews"],
        average_rating=data["average_rating"],
    )


@router.get("/{slug}/services/{service_id}", response_model=PublicServicePage)
async def get_portfolio_service(
    slug: Slug,
    service_id: Annotated[UUID, Path(description="Service UUID")],
):
    """One service of a published organization."""
    data = OrganizationService.get_public_service(slug, str(service_id))
    return PublicServicePage(
        organization=PublicOrganization(**data["organization"]),
        service=data["service"],
    )

# =============================================================================
# core/models/organization.py - Organization Schemas
# =============================================================================
# These models define the API contract for organization operations:
# - OrganizationCreate / OrganizationUpdate: dashboard form input
# - OrganizationResponse: owner-facing record
# - PublicPortfolio: published, slug-addressed read-only page
#
# An organization is a user's business profile. Projects, services,
# clients and reviews all hang off one organization.
# =============================================================================

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from core.models.common import MediaField, MediaSpec, OptionalMediaField, OptionalUrl, media_spec, media_value
from core.media import MediaReference

SLUG_PATTERN = r"^[a-z0-9-]+$"

SOCIAL_FIELDS = ("linkedin", "twitter", "instagram", "facebook")


class OrganizationCreate(BaseModel):
    """
    Schema for creating an organization.

    `logo` and `cover_image` accept an uploaded URL or a blob: reference
    from POST /media/drafts. Blob references are uploaded when the form is
    saved.

    Example:
        {
            "name": "Acme Studio",
            "slug": "acme-studio",
            "logo": "blob:3f2a...",
            "website": "https://acme.example"
        }
    """

    name: str = Field(..., min_length=2, max_length=150)
    display_name: str | None = Field(default=None, max_length=150)
    tagline: str | None = Field(default=None, max_length=200)
    description: str | None = None

    logo: MediaField = Field(default_factory=MediaReference.empty)
    cover_image: MediaField = Field(default_factory=MediaReference.empty)

    website: OptionalUrl = None
    location: str | None = Field(default=None, max_length=100)
    team_size: str | None = None
    phone: str | None = Field(default=None, max_length=20)
    country: str | None = Field(default=None, max_length=100)
    currency: str | None = Field(default=None, max_length=10)

    # Public address: /portfolio/{slug}
    slug: str = Field(
        ...,
        min_length=3,
        max_length=100,
        pattern=SLUG_PATTERN,
        description="Slug must contain only lowercase letters, numbers, and hyphens"
    )

    linkedin: OptionalUrl = None
    twitter: OptionalUrl = None
    instagram: OptionalUrl = None
    facebook: OptionalUrl = None

    def media_specs(self) -> list[MediaSpec]:
        return [
            ("logo", self.logo, "organization-logo"),
            ("cover_image", self.cover_image, "organization-cover"),
        ]

    def to_record(self, resolved: dict[str, MediaReference]) -> dict[str, Any]:
        """Row for the organizations table, media fields already persisted."""
        data = self.model_dump(exclude={"logo", "cover_image", *SOCIAL_FIELDS})
        data["logo"] = media_value(resolved, "logo")
        data["cover_image"] = media_value(resolved, "cover_image")
        data["social_links"] = {name: getattr(self, name) or None for name in SOCIAL_FIELDS}
        return data


class OrganizationUpdate(BaseModel):
    """
    Schema for updating an organization.

    Omitted (null) fields are left unchanged. An empty string clears a
    media field.
    """

    name: str | None = Field(default=None, min_length=2, max_length=150)
    display_name: str | None = Field(default=None, max_length=150)
    tagline: str | None = Field(default=None, max_length=200)
    description: str | None = None
    logo: OptionalMediaField = None
    cover_image: OptionalMediaField = None
    website: OptionalUrl = None
    location: str | None = Field(default=None, max_length=100)
    team_size: str | None = None
    phone: str | None = Field(default=None, max_length=20)
    country: str | None = Field(default=None, max_length=100)
    currency: str | None = Field(default=None, max_length=10)
    slug: str | None = Field(default=None, min_length=3, max_length=100, pattern=SLUG_PATTERN)
    linkedin: OptionalUrl = None
    twitter: OptionalUrl = None
    instagram: OptionalUrl = None
    facebook: OptionalUrl = None

    def media_specs(self) -> list[MediaSpec]:
        return [
            *media_spec("logo", self.logo, "organization-logo"),
            *media_spec("cover_image", self.cover_image, "organization-cover"),
        ]

    def to_record(
        self,
        resolved: dict[str, MediaReference],
        current_social_links: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Changed columns only."""
        data = self.model_dump(
            exclude={"logo", "cover_image", *SOCIAL_FIELDS},
            exclude_none=True,
        )
        for field in ("logo", "cover_image"):
            if field in resolved:
                data[field] = media_value(resolved, field)

        changed_links = {
            name: getattr(self, name) or None
            for name in SOCIAL_FIELDS
            if getattr(self, name) is not None
        }
        if changed_links:
            data["social_links"] = {**(current_social_links or {}), **changed_links}
        return data


class OrganizationResponse(BaseModel):
    """Organization as returned to its owner."""

    id: UUID
    user_id: UUID
    name: str
    display_name: str | None = None
    tagline: str | None = None
    description: str | None = None
    logo: str | None = None
    cover_image: str | None = None
    website: str | None = None
    location: str | None = None
    team_size: str | None = None
    phone: str | None = None
    country: str | None = None
    currency: str | None = None
    slug: str
    social_links: dict[str, str | None] = Field(default_factory=dict)
    is_published: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class OrganizationList(BaseModel):
    """Organizations owned by the current user."""

    organizations: list[OrganizationResponse] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)


class PublishToggleResponse(BaseModel):
    """Result of flipping an organization's published flag."""

    success: bool = True
    is_published: bool


class PublicOrganization(BaseModel):
    """
    Organization as shown on its public page.

    Leaves out the owner's user_id, the publish flag and timestamps.
    """

    id: UUID
    name: str
    display_name: str | None = None
    tagline: str | None = None
    description: str | None = None
    logo: str | None = None
    cover_image: str | None = None
    website: str | None = None
    location: str | None = None
    team_size: str | None = None
    phone: str | None = None
    country: str | None = None
    currency: str | None = None
    slug: str
    social_links: dict[str, str | None] = Field(default_factory=dict)

    model_config = {"from_attributes": True}


class PublicPortfolio(BaseModel):
    """
    Published portfolio page.

    Projects are limited to pinned/featured ones (pinned first), clients to
    12 and reviews to the 6 most recent. average_rating is formatted with
    one decimal ("0.0" when there are no reviews).
    """

    organization: PublicOrganization
    projects: list[dict[str, Any]] = Field(default_factory=list)
    services: list[dict[str, Any]] = Field(default_factory=list)
    clients: list[dict[str, Any]] = Field(default_factory=list)
    reviews: list[dict[str, Any]] = Field(default_factory=list)
    average_rating: str = "0.0"


class PublicServicePage(BaseModel):
    """One service of a published organization."""

    organization: PublicOrganization
    service: dict[str, Any]

# =============================================================================
# core/models/project.py - Project Schemas
# =============================================================================
# A project is a piece of work shown on an organization's portfolio.
# It has one cover image plus a gallery (`images`), all media fields.
# =============================================================================

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any
from uuid import UUID

from pydantic import BaseModel, BeforeValidator, Field

from core.media import MediaReference
from core.models.common import MediaField, MediaSpec, OptionalMediaField, OptionalUrl, media_spec, media_value, split_tags

Tags = Annotated[list[str], BeforeValidator(split_tags)]


def _gallery_specs(images: list[MediaReference]) -> list[MediaSpec]:
    return [(f"images[{i}]", ref, "project-image") for i, ref in enumerate(images)]


def _gallery_values(resolved: dict[str, MediaReference], count: int) -> list[str]:
    # Empty gallery slots are dropped
    values = (media_value(resolved, f"images[{i}]") for i in range(count))
    return [v for v in values if v]


class ProjectCreate(BaseModel):
    """
    Schema for adding a project to an organization.

    Example:
        {
            "title": "Harbour Rebrand",
            "cover_image": "blob:9c1e...",
            "images": ["https://cdn.example.com/a.png", "blob:77ab..."],
            "tags": "branding, print"
        }
    """

    title: str = Field(..., min_length=3, max_length=150)
    description: str | None = None
    cover_image: MediaField = Field(default_factory=MediaReference.empty)
    images: list[MediaField] = Field(default_factory=list)
    date: str | None = None
    is_pinned: bool = False
    is_featured: bool = False
    project_url: OptionalUrl = None
    tags: Tags = Field(default_factory=list)

    def media_specs(self) -> list[MediaSpec]:
        return [("cover_image", self.cover_image, "project-cover"), *_gallery_specs(self.images)]

    def to_record(self, resolved: dict[str, MediaReference]) -> dict[str, Any]:
        data = self.model_dump(exclude={"cover_image", "images"})
        data["cover_image"] = media_value(resolved, "cover_image")
        data["images"] = _gallery_values(resolved, len(self.images))
        return data


class ProjectUpdate(BaseModel):
    """Partial project update. A provided `images` list replaces the gallery."""

    title: str | None = Field(default=None, min_length=3, max_length=150)
    description: str | None = None
    cover_image: OptionalMediaField = None
    images: list[MediaField] | None = None
    date: str | None = None
    is_pinned: bool | None = None
    is_featured: bool | None = None
    project_url: OptionalUrl = None
    tags: Tags | None = None

    def media_specs(self) -> list[MediaSpec]:
        specs = media_spec("cover_image", self.cover_image, "project-cover")
        if self.images is not None:
            specs += _gallery_specs(self.images)
        return specs

    def to_record(self, resolved: dict[str, MediaReference]) -> dict[str, Any]:
        data = self.model_dump(exclude={"cover_image", "images"}, exclude_none=True)
        if "cover_image" in resolved:
            data["cover_image"] = media_value(resolved, "cover_image")
        if self.images is not None:
            data["images"] = _gallery_values(resolved, len(self.images))
        return data


class ProjectResponse(BaseModel):
    """Project row."""

    id: UUID
    organization_id: UUID
    title: str
    description: str | None = None
    cover_image: str | None = None
    images: list[str] = Field(default_factory=list)
    date: str | None = None
    is_pinned: bool = False
    is_featured: bool = False
    project_url: str | None = None
    tags: list[str] = Field(default_factory=list)
    order: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}

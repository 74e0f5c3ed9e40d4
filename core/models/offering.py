# =============================================================================
# core/models/offering.py - Service Schemas
# =============================================================================
# Services an organization offers (stored in the `services` table).
# Named "offering" in code to keep them apart from the core/services layer.
#
# Each service can carry a list of sample work items, each with its own
# image. Those images are uploaded together with logo and banner.
# =============================================================================

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Annotated, Any
from uuid import UUID

from pydantic import BaseModel, BeforeValidator, Field

from core.media import MediaReference
from core.models.common import MediaField, MediaSpec, OptionalMediaField, OptionalUrl, media_spec, media_value, split_tags


class SampleWorkItem(BaseModel):
    """One sample work entry shown on a service page."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    title: str = Field(..., min_length=1, max_length=150)
    description: str = Field(..., min_length=1)
    image_url: MediaField = Field(default_factory=MediaReference.empty)
    project_url: OptionalUrl = None
    technologies: Annotated[list[str], BeforeValidator(split_tags)] = Field(default_factory=list)


def _sample_work_specs(items: list[SampleWorkItem]) -> list[MediaSpec]:
    return [(f"sample_work[{i}].image_url", item.image_url, "sample-work") for i, item in enumerate(items)]


def _sample_work_values(items: list[SampleWorkItem], resolved: dict[str, MediaReference]) -> list[dict[str, Any]]:
    rows = []
    for i, item in enumerate(items):
        row = item.model_dump(exclude={"image_url"})
        row["image_url"] = media_value(resolved, f"sample_work[{i}].image_url")
        rows.append(row)
    return rows


class ServiceCreate(BaseModel):
    """
    Schema for adding a service to an organization.

    Example:
        {
            "title": "Brand Identity",
            "price_per_hour": 95,
            "logo": "blob:1d2e...",
            "sample_work": [
                {"title": "Café Nord", "description": "Logo + menu", "image_url": "blob:aa01..."}
            ]
        }
    """

    title: str = Field(..., min_length=3, max_length=150)
    description: str | None = None
    icon: str | None = None
    logo: MediaField = Field(default_factory=MediaReference.empty)
    banner: MediaField = Field(default_factory=MediaReference.empty)
    price_per_hour: float | None = Field(default=None, ge=0)
    sample_work: list[SampleWorkItem] = Field(default_factory=list)

    def media_specs(self) -> list[MediaSpec]:
        return [
            ("logo", self.logo, "service-logo"),
            ("banner", self.banner, "service-banner"),
            *_sample_work_specs(self.sample_work),
        ]

    def to_record(self, resolved: dict[str, MediaReference]) -> dict[str, Any]:
        data = self.model_dump(exclude={"logo", "banner", "sample_work"})
        data["logo"] = media_value(resolved, "logo")
        data["banner"] = media_value(resolved, "banner")
        data["sample_work"] = _sample_work_values(self.sample_work, resolved)
        return data


class ServiceUpdate(BaseModel):
    """Partial service update. A provided `sample_work` list replaces the old one."""

    title: str | None = Field(default=None, min_length=3, max_length=150)
    description: str | None = None
    icon: str | None = None
    logo: OptionalMediaField = None
    banner: OptionalMediaField = None
    price_per_hour: float | None = Field(default=None, ge=0)
    sample_work: list[SampleWorkItem] | None = None

    def media_specs(self) -> list[MediaSpec]:
        specs = [
            *media_spec("logo", self.logo, "service-logo"),
            *media_spec("banner", self.banner, "service-banner"),
        ]
        if self.sample_work is not None:
            specs += _sample_work_specs(self.sample_work)
        return specs

    def to_record(self, resolved: dict[str, MediaReference]) -> dict[str, Any]:
        data = self.model_dump(exclude={"logo", "banner", "sample_work"}, exclude_none=True)
        for field in ("logo", "banner"):
            if field in resolved:
                data[field] = media_value(resolved, field)
        if self.sample_work is not None:
            data["sample_work"] = _sample_work_values(self.sample_work, resolved)
        return data


class ServiceResponse(BaseModel):
    """Service row."""

    id: UUID
    organization_id: UUID
    title: str
    description: str | None = None
    icon: str | None = None
    logo: str | None = None
    banner: str | None = None
    price_per_hour: float | None = None
    sample_work: list[dict[str, Any]] = Field(default_factory=list)
    order: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}

# =============================================================================
# core/models/client.py - Client Schemas
# =============================================================================
# Clients an organization has worked with (name + logo).
# =============================================================================

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from core.media import MediaReference
from core.models.common import MediaField, MediaSpec, OptionalMediaField, media_spec, media_value


class ClientCreate(BaseModel):
    """Schema for adding a client."""

    name: str = Field(..., min_length=2, max_length=150)
    logo: MediaField = Field(default_factory=MediaReference.empty)

    def media_specs(self) -> list[MediaSpec]:
        return [("logo", self.logo, "client-logo")]

    def to_record(self, resolved: dict[str, MediaReference]) -> dict[str, Any]:
        return {"name": self.name, "logo": media_value(resolved, "logo")}


class ClientUpdate(BaseModel):
    """Schema for updating a client. Omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=2, max_length=150)
    logo: OptionalMediaField = None

    def media_specs(self) -> list[MediaSpec]:
        return media_spec("logo", self.logo, "client-logo")

    def to_record(self, resolved: dict[str, MediaReference]) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.name is not None:
            data["name"] = self.name
        if "logo" in resolved:
            data["logo"] = media_value(resolved, "logo")
        return data


class ClientResponse(BaseModel):
    id: UUID
    organization_id: UUID
    name: str
    logo: str | None = None
    order: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}

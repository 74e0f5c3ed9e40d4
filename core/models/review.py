# =============================================================================
# core/models/review.py - Review Schemas
# =============================================================================
# Testimonials shown on a portfolio. Ratings are whole stars, 1-5.
# =============================================================================

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from core.media import MediaReference
from core.models.common import MediaField, MediaSpec, OptionalMediaField, media_spec, media_value


class ReviewCreate(BaseModel):
    """
    Schema for adding a review.

    Example:
        {
            "author_name": "Dana Ruiz",
            "author_company": "Harbour Co",
            "author_logo": "blob:5b0c...",
            "rating": 5,
            "content": "Delivered ahead of schedule and on budget."
        }
    """

    author_name: str = Field(..., min_length=2, max_length=150)
    author_company: str | None = Field(default=None, max_length=150)
    author_logo: MediaField = Field(default_factory=MediaReference.empty)
    rating: int = Field(..., ge=1, le=5)
    content: str = Field(..., min_length=10)
    date: str | None = None

    def media_specs(self) -> list[MediaSpec]:
        return [("author_logo", self.author_logo, "review-author")]

    def to_record(self, resolved: dict[str, MediaReference]) -> dict[str, Any]:
        data = self.model_dump(exclude={"author_logo"})
        data["author_logo"] = media_value(resolved, "author_logo")
        return data


class ReviewUpdate(BaseModel):
    """Partial review update."""

    author_name: str | None = Field(default=None, min_length=2, max_length=150)
    author_company: str | None = Field(default=None, max_length=150)
    author_logo: OptionalMediaField = None
    rating: int | None = Field(default=None, ge=1, le=5)
    content: str | None = Field(default=None, min_length=10)
    date: str | None = None

    def media_specs(self) -> list[MediaSpec]:
        return media_spec("author_logo", self.author_logo, "review-author")

    def to_record(self, resolved: dict[str, MediaReference]) -> dict[str, Any]:
        data = self.model_dump(exclude={"author_logo"}, exclude_none=True)
        if "author_logo" in resolved:
            data["author_logo"] = media_value(resolved, "author_logo")
        return data


class ReviewResponse(BaseModel):
    id: UUID
    organization_id: UUID
    author_name: str
    author_company: str | None = None
    author_logo: str | None = None
    rating: int
    content: str
    date: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}

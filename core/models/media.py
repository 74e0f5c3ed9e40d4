# =============================================================================
# core/models/media.py - Media Upload Schemas
# =============================================================================
# Responses for the upload gateway and the media draft endpoints.
# =============================================================================

from pydantic import BaseModel, Field


class UploadResponse(BaseModel):
    """
    Upload gateway response.

    Example:
        {
            "url": "https://xyz.supabase.co/storage/v1/object/public/portfolio-media/media/.../logo-1718000000000a1b2c3d4.png",
            "path": "media/550e8400-.../logo-1718000000000a1b2c3d4.png"
        }
    """

    url: str = Field(..., description="Public, durable URL of the stored object")
    path: str = Field(..., description="Path inside the storage bucket")


class MediaDraftResponse(BaseModel):
    """A selected file held in the editing session, not yet uploaded."""

    ref: str = Field(..., description="Ephemeral reference to put in a media field (blob:...)")
    content_type: str
    size_bytes: int = Field(..., ge=0)
    filename: str | None = None
    message: str = "Selected - will upload when you save"


class MediaDraftClearResponse(BaseModel):
    released: int = Field(default=0, ge=0)

# =============================================================================
# app/routers/media.py - Media Drafts
# =============================================================================
# Selecting an image in a dashboard form lands here. The bytes stay in the
# user's editing session and a blob: reference comes back; the form puts
# that reference in its media field. Nothing is uploaded until the form
# is saved.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, File, Path, UploadFile

from app.dependencies import MediaStoreDep
from app.exceptions import MediaDraftLimitError, MediaDraftNotFoundError
from app.routers.upload import normalize_content_type, validate_image
from core.media import DraftLimitExceeded, MediaReference
from core.models.media import MediaDraftClearResponse, MediaDraftResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/drafts", response_model=MediaDraftResponse)
async def select_media(
    file: Annotated[UploadFile, File(description="Image to attach to a form field")],
    store: MediaStoreDep,
):
    """
    Hold a selected image and return its ephemeral reference.

    Rejects non-images, files over MAX_UPLOAD_SIZE_MB, and selections past
    the per-user draft limits (MAX_MEDIA_DRAFTS, MAX_DRAFT_STORAGE_MB).
    """
    content = await file.read()
    content_type = normalize_content_type(file.content_type)
    validate_image(content, content_type, file.filename)

    try:
        ref = store.add(content, content_type, filename=file.filename)
    except DraftLimitExceeded as e:
        logger.warning(f"Media draft rejected: {e.message}")
        raise MediaDraftLimitError(e.limit, e.current, e.maximum) from e

    logger.info(f"Media selected: {file.filename} -> {ref} ({len(content)} bytes)")

    return MediaDraftResponse(
        ref=ref.value,
        content_type=content_type,
        size_bytes=len(content),
        filename=file.filename,
        message=f"{file.filename or 'Image'} selected - will upload when you save",
    )


@router.delete("/drafts/{handle}", response_model=MediaDraftClearResponse)
async def remove_media(
    handle: Annotated[str, Path(description="Handle part of a blob: reference")],
    store: MediaStoreDep,
):
    """Drop a selected image (user removed it from the field)."""
    ref = MediaReference.ephemeral(handle)
    if not store.release(ref):
        raise MediaDraftNotFoundError(ref.value)
    return MediaDraftClearResponse(released=1)


@router.delete("/drafts", response_model=MediaDraftClearResponse)
async def reset_media(store: MediaStoreDep):
    """Drop every selected image (form reset)."""
    released = len(store)
    store.clear()
    return MediaDraftClearResponse(released=released)

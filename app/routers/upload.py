# =============================================================================
# app/routers/upload.py - Upload Gateway
# =============================================================================
# The object storage endpoint used by UploadGatewayClient:
#
#   POST /api/v1/upload?filename=<key>     body = raw image bytes
#   200  {"url": "<public url>", "path": "<bucket path>"}
#
# Every call creates a new object; existing objects are never overwritten.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Header, Query, Request

from app.auth import get_current_user, AuthUser
from app.config import settings
from app.exceptions import (
    EmptyFileError,
    FileTooLargeError,
    InvalidFilenameError,
    InvalidMediaTypeError,
)
from core.models.media import UploadResponse
from core.services.storage_service import StorageService, is_safe_filename

logger = logging.getLogger(__name__)

router = APIRouter()


def normalize_content_type(content_type: str | None) -> str:
    """Strip parameters and lowercase: image/PNG; charset=binary -> image/png."""
    return (content_type or "").split(";", 1)[0].strip().lower()


def validate_image(content: bytes, content_type: str, filename: str | None = None) -> None:
    """
    Check an image against the configured type and size limits.

    Raises:
        EmptyFileError, InvalidMediaTypeError, FileTooLargeError
    """
    if not content:
        raise EmptyFileError(filename)

    if content_type not in settings.allowed_media_types_list:
        raise InvalidMediaTypeError(content_type, settings.allowed_media_types_list)

    if len(content) > settings.max_upload_size_bytes:
        raise FileTooLargeError(len(content) / (1024 * 1024), settings.MAX_UPLOAD_SIZE_MB)


@router.post("/upload", response_model=UploadResponse)
async def upload_media(
    request: Request,
    filename: Annotated[str, Query(description="Storage key for the new object")],
    content_type: Annotated[str | None, Header()] = None,
    user: AuthUser = Depends(get_current_user),
):
    """
    Store raw image bytes and return their public URL.

    The body is the file itself (not multipart). The Content-Type header
    must be one of the accepted image types.
    """
    if not is_safe_filename(filename):
        raise InvalidFilenameError(filename)

    media_type = normalize_content_type(content_type)
    content = await request.body()
    validate_image(content, media_type, filename)

    logger.info(f"Gateway upload: {filename} ({len(content)} bytes, {media_type}) for user {user.id}")

    path = StorageService.upload_media(
        user_id=str(user.id),
        filename=filename,
        content=content,
        content_type=media_type,
    )
    url = StorageService.get_public_url(path)

    return UploadResponse(url=url, path=path)

# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# Media flow per request:
#   registry (app.state) -> caller's EphemeralStore -> UploadGatewayClient
#   -> ConditionalUploader, which routes call through resolve_form_media()
# =============================================================================

import logging
from typing import Annotated, Any, Protocol

from fastapi import Depends, Request

from app.auth import AuthUser, get_access_token, get_current_user
from app.config import settings
from app.exceptions import MediaUploadFailedError
from core.media import (
    ConditionalUploader,
    EphemeralStore,
    MediaReference,
    MediaSessionRegistry,
    UploadFailed,
    UploadGatewayClient,
)
from core.models.common import MediaSpec

logger = logging.getLogger(__name__)


def build_media_registry() -> MediaSessionRegistry:
    """Draft registry with the configured per-user limits."""
    return MediaSessionRegistry(
        max_drafts=settings.MAX_MEDIA_DRAFTS,
        max_bytes=settings.max_draft_storage_bytes,
        ttl_seconds=settings.MEDIA_DRAFT_TTL_SECONDS,
    )


def get_media_registry(request: Request) -> MediaSessionRegistry:
    """Process-level registry created in the app lifespan."""
    registry = getattr(request.app.state, "media_sessions", None)
    if registry is None:
        registry = build_media_registry()
        request.app.state.media_sessions = registry
    return registry


def get_media_store(
    user: AuthUser = Depends(get_current_user),
    registry: MediaSessionRegistry = Depends(get_media_registry),
) -> EphemeralStore:
    """The caller's own editing-session store."""
    return registry.store_for(user.id)


def get_uploader(
    store: EphemeralStore = Depends(get_media_store),
    token: str = Depends(get_access_token),
) -> ConditionalUploader:
    """Conditional uploader bound to the caller's store and token."""
    gateway = UploadGatewayClient(
        store=store,
        upload_url=settings.UPLOAD_GATEWAY_URL,
        access_token=token,
        timeout=settings.UPLOAD_TIMEOUT_SECONDS,
    )
    return ConditionalUploader(gateway)


# Type aliases for dependency injection
CurrentUser = Annotated[AuthUser, Depends(get_current_user)]
MediaStoreDep = Annotated[EphemeralStore, Depends(get_media_store)]
UploaderDep = Annotated[ConditionalUploader, Depends(get_uploader)]


class HasMediaFields(Protocol):
    def media_specs(self) -> list[MediaSpec]: ...


async def resolve_form_media(
    uploader: ConditionalUploader,
    payload: HasMediaFields,
) -> dict[str, MediaReference]:
    """
    Persist every media field of a submitted form.

    Must complete before the record is written. If any field fails, nothing
    is returned and the caller's save never runs.

    Raises:
        MediaUploadFailedError: one of the fields couldn't be uploaded
    """
    specs = payload.media_specs()
    try:
        resolved = await uploader.resolve_specs(specs)
    except UploadFailed as e:
        cause: Any = e.__cause__
        raise MediaUploadFailedError(e.field, e.reason, code=getattr(cause, "code", None)) from e

    return {name: ref for (name, _, _), ref in zip(specs, resolved)}

# =============================================================================
# core/media/errors.py - Media Upload Errors
# =============================================================================
# Error taxonomy for the conditional upload flow:
# - InvalidReference: an ephemeral handle can't be resolved (user must re-select)
# - TransportError: the upload gateway failed (caller decides on retry)
# - UploadFailed: umbrella raised to the form-submission layer
# - DraftLimitExceeded: the session holds too many unsaved files
#
# None of these are swallowed inside core/media. The submission handler
# receives UploadFailed and must not write the record.
# =============================================================================

from __future__ import annotations

from lib.utils import ApplicationError


class MediaError(ApplicationError):
    """Base class for media reference and upload errors."""


class InvalidReference(MediaError):
    """
    A media reference could not be resolved or classified.

    Raised when an ephemeral handle was released, never existed, or the
    string doesn't look like any known reference shape. Not retryable.
    """

    def __init__(self, ref: str, reason: str = "unknown_handle"):
        super().__init__(
            message=f"Media reference could not be resolved: {ref!r} ({reason})",
            code="INVALID_MEDIA_REFERENCE",
            suggestion="Select the file again before saving",
            details={"ref": ref, "reason": reason},
        )
        self.ref = ref
        self.reason = reason


class TransportError(MediaError):
    """Network or server-side failure while talking to the upload gateway."""

    def __init__(self, error: str, status_code: int | None = None, key: str | None = None):
        super().__init__(
            message=f"Upload gateway request failed: {error}",
            code="MEDIA_TRANSPORT_ERROR",
            suggestion="Try saving again in a moment",
            details={"error": error, "status_code": status_code, "key": key},
        )
        self.status_code = status_code
        self.key = key


class UploadFailed(MediaError):
    """
    A media field could not be made persistent.

    The original InvalidReference / TransportError is kept as __cause__.
    """

    def __init__(self, field: str, reason: str):
        super().__init__(
            message=f"Upload failed for field '{field}': {reason}",
            code="MEDIA_UPLOAD_FAILED",
            suggestion="Nothing was saved. Re-select the image if needed and submit again",
            details={"field": field, "reason": reason},
        )
        self.field = field
        self.reason = reason


class DraftLimitExceeded(MediaError):
    """The editing session already holds as many unsaved files as it may."""

    def __init__(self, limit: str, current: int, maximum: int):
        super().__init__(
            message=f"Too many unsaved images ({limit}: {current} of {maximum})",
            code="MEDIA_DRAFT_LIMIT",
            suggestion="Save or remove some selected images before adding more",
            details={"limit": limit, "current": current, "maximum": maximum},
        )
        self.limit = limit
        self.current = current
        self.maximum = maximum

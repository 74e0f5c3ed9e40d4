# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors should tell HOW to fix, not just WHAT failed.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class PortfolioException(Exception):
    """
    Base exception for the Portfolio Builder API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "PORTFOLIO_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Record Exceptions
# =============================================================================

class RecordNotFoundError(PortfolioException):
    """
    Raised when a record doesn't exist or isn't owned by the caller.

    Ownership failures use the same error so we never reveal that a
    record exists.
    """

    def __init__(self, kind: str, record_id: str):
        super().__init__(
            message=f"{kind.capitalize()} not found: {record_id}",
            code=f"{kind.upper()}_NOT_FOUND",
            status_code=404,
            suggestion=f"Check that the {kind} id is correct and belongs to one of your organizations",
            details={f"{kind}_id": record_id}
        )


class OrganizationNotFoundError(RecordNotFoundError):
    """Raised when an organization ID doesn't exist for this user."""

    def __init__(self, organization_id: str):
        super().__init__("organization", organization_id)


class SlugTakenError(PortfolioException):
    """Raised when an organization slug is already used."""

    def __init__(self, slug: str):
        super().__init__(
            message=f"This slug is already taken: {slug}",
            code="SLUG_TAKEN",
            status_code=409,
            suggestion="Pick a different slug (lowercase letters, numbers and hyphens)",
            details={"slug": slug}
        )


class PortfolioNotFoundError(PortfolioException):
    """Raised when no published portfolio exists for a slug."""

    def __init__(self, slug: str):
        super().__init__(
            message=f"Portfolio not found: {slug}",
            code="PORTFOLIO_NOT_FOUND",
            status_code=404,
            suggestion="Check the address, or publish the organization from the dashboard",
            details={"slug": slug}
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class InvalidMediaTypeError(PortfolioException):
    """Raised when an uploaded file is not an accepted image type."""

    def __init__(self, content_type: str, allowed: list[str]):
        super().__init__(
            message=f"Please select an image file (got {content_type or 'unknown type'})",
            code="INVALID_MEDIA_TYPE",
            status_code=400,
            suggestion=f"Only these types are supported: {', '.join(allowed)}",
            details={"content_type": content_type, "allowed_types": allowed}
        )


class FileTooLargeError(PortfolioException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"File size must be less than {max_mb}MB",
            details={"size_mb": size_mb, "max_mb": max_mb}
        )


class EmptyFileError(PortfolioException):
    """Raised when an upload carries no bytes."""

    def __init__(self, filename: str | None = None):
        super().__init__(
            message="Uploaded file is empty",
            code="EMPTY_FILE",
            status_code=400,
            suggestion="Select a non-empty image file",
            details={"filename": filename} if filename else None
        )


class InvalidFilenameError(PortfolioException):
    """Raised when the gateway receives a missing or unsafe storage key."""

    def __init__(self, filename: str):
        super().__init__(
            message=f"Invalid upload filename: {filename!r}",
            code="INVALID_FILENAME",
            status_code=400,
            suggestion="Pass ?filename= with letters, numbers, '.', '-' or '_' only",
            details={"filename": filename}
        )


class MediaDraftNotFoundError(PortfolioException):
    """Raised when removing a draft handle that isn't held."""

    def __init__(self, ref: str):
        super().__init__(
            message=f"Selected file not found: {ref}",
            code="MEDIA_DRAFT_NOT_FOUND",
            status_code=404,
            suggestion="The selection may already have been saved or removed",
            details={"ref": ref}
        )


class MediaDraftLimitError(PortfolioException):
    """Raised when a user selects more unsaved images than allowed."""

    def __init__(self, limit: str, current: int, maximum: int):
        super().__init__(
            message=f"Too many unsaved images ({limit}: {current} of {maximum})",
            code="MEDIA_DRAFT_LIMIT",
            status_code=413,
            suggestion="Save or remove some selected images before adding more",
            details={"limit": limit, "current": current, "maximum": maximum}
        )


class StorageUploadError(PortfolioException):
    """Raised when file upload to storage fails."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Failed to upload file to storage: {error}",
            code="STORAGE_UPLOAD_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"error": error}
        )


class MediaUploadFailedError(PortfolioException):
    """
    Raised when a media field couldn't be persisted during a form submission.

    The record was not written. The client should show a failure notice and
    let the user resubmit.
    """

    def __init__(self, field: str, reason: str, code: str | None = None):
        super().__init__(
            message=f"Upload failed for '{field}', nothing was saved",
            code="MEDIA_UPLOAD_FAILED",
            status_code=502,
            suggestion="Submit the form again. If the image was removed or expired, select it again first",
            details={"field": field, "reason": reason, "cause": code}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def portfolio_exception_handler(
    request: Request,
    exc: PortfolioException
) -> JSONResponse:
    """
    Convert PortfolioException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )

# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .organization_service import OrganizationService
from .record_service import (
    ClientService,
    OfferingService,
    OwnedRecordService,
    ProjectService,
    ReviewService,
)
from .storage_service import StorageService

__all__ = [
    "OrganizationService",
    "OwnedRecordService",
    "ProjectService",
    "OfferingService",
    "ClientService",
    "ReviewService",
    "StorageService",
]

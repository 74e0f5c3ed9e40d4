# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - common.py: MediaField and other shared field types
# - organization.py: Organization CRUD + public portfolio schemas
# - project.py / offering.py / client.py / review.py: child records
# - media.py: Upload gateway and media draft responses
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Shared field types
# -----------------------------------------------------------------------------
from .common import MediaField, MediaSpec, OptionalMediaField, OptionalUrl

# -----------------------------------------------------------------------------
# Organization Models
# -----------------------------------------------------------------------------
from .organization import (
    OrganizationCreate,
    OrganizationList,
    OrganizationResponse,
    OrganizationUpdate,
    PublicOrganization,
    PublicPortfolio,
    PublicServicePage,
    PublishToggleResponse,
)

# -----------------------------------------------------------------------------
# Child Record Models
# -----------------------------------------------------------------------------
from .project import ProjectCreate, ProjectResponse, ProjectUpdate
from .offering import SampleWorkItem, ServiceCreate, ServiceResponse, ServiceUpdate
from .client import ClientCreate, ClientResponse, ClientUpdate
from .review import ReviewCreate, ReviewResponse, ReviewUpdate

# -----------------------------------------------------------------------------
# Media Models
# -----------------------------------------------------------------------------
from .media import MediaDraftClearResponse, MediaDraftResponse, UploadResponse

__all__ = [
    # Shared
    "MediaField",
    "MediaSpec",
    "OptionalMediaField",
    "OptionalUrl",
    # Organization
    "OrganizationCreate",
    "OrganizationList",
    "OrganizationResponse",
    "OrganizationUpdate",
    "PublicOrganization",
    "PublicPortfolio",
    "PublicServicePage",
    "PublishToggleResponse",
    # Project
    "ProjectCreate",
    "ProjectResponse",
    "ProjectUpdate",
    # Service
    "SampleWorkItem",
    "ServiceCreate",
    "ServiceResponse",
    "ServiceUpdate",
    # Client
    "ClientCreate",
    "ClientResponse",
    "ClientUpdate",
    # Review
    "ReviewCreate",
    "ReviewResponse",
    "ReviewUpdate",
    # Media
    "MediaDraftClearResponse",
    "MediaDraftResponse",
    "UploadResponse",
]

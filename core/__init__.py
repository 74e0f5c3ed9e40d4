# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the portfolio builder's business logic:
# - media/: Media references and the conditional upload protocol
# - models/: Pydantic schemas for data validation
# - services/: Supabase-backed record and storage services
#
# core/media does not import from FastAPI.
# =============================================================================

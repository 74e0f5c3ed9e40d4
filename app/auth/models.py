# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================

from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a Supabase JWT.

    Only what the token carries: every ownership check in the API compares
    record user_id against `id`.
    """
    id: UUID
    email: Optional[str] = None

    model_config = {"frozen": True}

# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Verifies Supabase Auth access tokens. Sign-up/sign-in is handled by
# Supabase itself.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
# =============================================================================

from app.auth.dependencies import decode_access_token, get_access_token, get_current_user
from app.auth.models import AuthUser

__all__ = [
    "decode_access_token",
    "get_access_token",
    "get_current_user",
    "AuthUser",
]

# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides an ephemeral store, a fake upload gateway and auth tokens
# =============================================================================

import os
import time
import uuid

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-with-enough-length")
os.environ.setdefault("UPLOAD_GATEWAY_URL", "https://gateway.test/api/v1/upload")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import httpx
import pytest
from jose import jwt

from core.media import ConditionalUploader, EphemeralStore, UploadGatewayClient

GATEWAY_URL = "https://gateway.test/api/v1/upload"
STORAGE_BASE = "https://test-project.supabase.co/storage/v1/object/public/portfolio-media"

# 10KB of something that starts like a JPEG
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * (10 * 1024 - 4)
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 256


# =============================================================================
# Fake Upload Gateway
# =============================================================================

class FakeGateway:
    """
    httpx.MockTransport handler that behaves like the upload gateway.

    Records every request. Set `fail_keys` (prefixes) or `status_code` to
    make uploads fail.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.fail_prefixes: tuple[str, ...] = ()

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = request.url.params.get("filename", "")
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"detail": "gateway error"})
        if self.fail_prefixes and key.startswith(self.fail_prefixes):
            return httpx.Response(500, json={"detail": "storage unavailable"})
        return httpx.Response(200, json={"url": f"{STORAGE_BASE}/{key}"})

    @property
    def keys(self) -> list[str]:
        return [r.url.params.get("filename", "") for r in self.requests]


@pytest.fixture
def store():
    """Fresh editing-session store."""
    return EphemeralStore()


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def gateway_client(store, fake_gateway):
    """UploadGatewayClient wired to the fake gateway."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake_gateway))
    return UploadGatewayClient(
        store=store,
        upload_url=GATEWAY_URL,
        access_token="test-token",
        http_client=http_client,
    )


@pytest.fixture
def uploader(gateway_client):
    return ConditionalUploader(gateway_client)


# =============================================================================
# Auth
# =============================================================================

@pytest.fixture
def user_id():
    return uuid.UUID("11111111-2222-3333-4444-555555555555")


def make_token(sub: str, expires_in: int = 3600, secret: str | None = None) -> str:
    """HS256 Supabase-style access token."""
    now = int(time.time())
    claims = {
        "sub": sub,
        "email": "owner@example.com",
        "aud": "authenticated",
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(claims, secret or os.environ["SUPABASE_JWT_SECRET"], algorithm="HS256")


@pytest.fixture
def auth_headers(user_id):
    return {"Authorization": f"Bearer {make_token(str(user_id))}"}


# =============================================================================
# Sample Rows
# =============================================================================

@pytest.fixture
def organization_row(user_id):
    """Organization row as returned by Supabase."""
    return {
        "id": "aaaaaaaa-0000-0000-0000-000000000001",
        "user_id": str(user_id),
        "name": "Acme Studio",
        "slug": "acme-studio",
        "logo": f"{STORAGE_BASE}/organization-logo-1718000000000a1b2c3d4.png",
        "cover_image": None,
        "social_links": {"linkedin": "https://linkedin.com/company/acme"},
        "is_published": True,
        "created_at": "2024-01-15T10:00:00Z",
    }

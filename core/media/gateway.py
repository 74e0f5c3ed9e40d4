# =============================================================================
# core/media/gateway.py - Upload Gateway Client
# =============================================================================
# Moves bytes behind an ephemeral handle to persistent object storage.
#
# Wire contract of the gateway:
#   POST {upload_url}?filename=<urlencoded-key>   body = raw bytes
#   200 OK {"url": "<https-url>"}                 anything else = TransportError
#
# Every upload creates a new object. Nothing is retried here; the caller
# owns retry policy.
# =============================================================================

from __future__ import annotations

import logging

import httpx

from core.media.errors import InvalidReference, TransportError
from core.media.references import MediaReference, is_persisted
from core.media.store import EphemeralStore

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class UploadGatewayClient:
    """
    Client for the object storage upload gateway.

    Args:
        store: The editing session's ephemeral store (handles are resolved here)
        upload_url: Absolute URL of the gateway's upload endpoint
        access_token: Optional bearer token forwarded to the gateway
        http_client: Optional shared httpx.AsyncClient (tests inject a
            MockTransport-backed client here)
        timeout: Request timeout in seconds when no client is injected
    """

    def __init__(
        self,
        store: EphemeralStore,
        upload_url: str,
        access_token: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.store = store
        self.upload_url = upload_url
        self.access_token = access_token
        self._http_client = http_client
        self._timeout = timeout

    def fetch_bytes(self, ref: MediaReference | str) -> tuple[bytes, str]:
        """
        Resolve an ephemeral reference to (content, content_type).

        Raises:
            InvalidReference: handle released, never existed, or malformed
        """
        blob = self.store.fetch(ref)
        return blob.content, blob.content_type

    async def upload(self, content: bytes, key: str, content_type: str | None = None) -> str:
        """
        Send bytes to the gateway under `key` and return the public URL.

        Raises:
            TransportError: network failure, non-200, or a malformed body
        """
        headers = {"Content-Type": content_type or "application/octet-stream"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"

        try:
            if self._http_client is not None:
                response = await self._http_client.post(
                    self.upload_url, params={"filename": key}, content=content, headers=headers
                )
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(
                        self.upload_url, params={"filename": key}, content=content, headers=headers
                    )
        except httpx.HTTPError as e:
            logger.error(f"Upload gateway unreachable for {key}: {e}")
            raise TransportError(str(e) or type(e).__name__, key=key) from e

        if response.status_code != 200:
            logger.error(f"Upload gateway returned {response.status_code} for {key}")
            raise TransportError(
                f"unexpected status {response.status_code}",
                status_code=response.status_code,
                key=key,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise TransportError("response body is not JSON", status_code=200, key=key) from e

        url = payload.get("url") if isinstance(payload, dict) else None
        if not isinstance(url, str) or not is_persisted(url):
            raise TransportError("response did not contain a usable url", status_code=200, key=key)

        logger.info(f"Uploaded {len(content)} bytes as {key}")
        return url


__all__ = ["UploadGatewayClient"]

# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Backs the upload gateway: puts image bytes into the media bucket and
# returns their public URL.
#
# Objects are only ever created. Keys are disambiguated by the caller, so
# uploads run with upsert disabled and never overwrite an existing object.
# =============================================================================

import logging
import re

from lib.supabase_client import SupabaseClient
from app.config import settings
from app.exceptions import StorageUploadError

logger = logging.getLogger(__name__)

_SAFE_KEY_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]{0,199}$")


def is_safe_filename(filename: str) -> bool:
    """True if `filename` is a single safe path segment (no traversal)."""
    return bool(filename) and ".." not in filename and bool(_SAFE_KEY_RE.match(filename))


class StorageService:
    """
    Service for Supabase Storage operations.

    Handles uploading media files and resolving their public URLs.
    """

    @staticmethod
    def build_path(user_id: str, filename: str) -> str:
        """Storage path for a user's upload: media/{user_id}/{filename}."""
        return f"media/{user_id}/{filename}"

    @staticmethod
    def upload_media(
        user_id: str,
        filename: str,
        content: bytes,
        content_type: str,
    ) -> str:
        """
        Upload raw image bytes to storage.

        Args:
            user_id: Owner of the upload (namespaces the path)
            filename: Storage key produced by the uploader
            content: File bytes
            content_type: MIME type stored with the object

        Returns:
            Storage path where file was uploaded

        Raises:
            StorageUploadError: If upload fails
        """
        client = SupabaseClient.get_client()
        path = StorageService.build_path(user_id, filename)

        try:
            client.storage.from_(settings.STORAGE_BUCKET).upload(
                path=path,
                file=content,
                file_options={"content-type": content_type, "upsert": "false"}
            )

            logger.info(f"Uploaded media to storage: {path} ({len(content)} bytes)")
            return path

        except Exception as e:
            logger.error(f"Storage upload failed: {e}")
            raise StorageUploadError(str(e))

    @staticmethod
    def get_public_url(storage_path: str) -> str:
        """
        Get a public URL for a storage file.

        Args:
            storage_path: Path in storage bucket

        Returns:
            Public URL string
        """
        client = SupabaseClient.get_client()

        try:
            return client.storage.from_(settings.STORAGE_BUCKET).get_public_url(storage_path)
        except Exception as e:
            logger.error(f"Failed to get public URL: {e}")
            raise StorageUploadError(f"could not resolve public url: {e}")

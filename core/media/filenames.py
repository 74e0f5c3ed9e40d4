# =============================================================================
# core/media/filenames.py - Storage Key Derivation
# =============================================================================
# Builds human-readable, collision-resistant storage keys:
#
#   {slugified-label}-{epoch_ms}{8 hex}.{ext}   e.g. client-avatar-1718000000000a1b2c3d4.jpg
#
# The disambiguator only avoids collisions between human-facing filenames.
# The storage layer stays the source of truth for addressing.
# =============================================================================

from __future__ import annotations

import re
import secrets
import time
import unicodedata

DEFAULT_EXTENSION = "jpg"

# Known image types. Anything else falls back to DEFAULT_EXTENSION, which is
# a lossy approximation (e.g. image/avif is stored as .jpg).
MIME_EXTENSIONS: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/svg+xml": "svg",
    "image/bmp": "bmp",
    "image/tiff": "tiff",
}

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def derive_extension(content_type: str | None) -> str:
    """
    Map a content type to a file extension.

    Total: unknown or empty types return "jpg". Parameters such as
    "; charset=binary" and letter case are ignored.
    """
    base = (content_type or "").split(";", 1)[0].strip().lower()
    return MIME_EXTENSIONS.get(base, DEFAULT_EXTENSION)


def slugify_label(label: str | None, *, fallback: str = "file") -> str:
    """Lowercase ASCII slug: "Client Avatar!" -> "client-avatar"."""
    normalized = unicodedata.normalize("NFKD", label or "")
    ascii_value = normalized.encode("ascii", "ignore").decode("ascii").lower()
    slug = _SLUG_RE.sub("-", ascii_value).strip("-")
    return slug or fallback


def _clean_extension(extension: str | None) -> str:
    ext = "".join(ch for ch in (extension or "").lower() if ch.isalnum())
    return ext or DEFAULT_EXTENSION


def generate_key(label: str | None, extension: str | None) -> str:
    """
    Build a storage key for an upload.

    Two calls with the same label yield distinct keys: the millisecond
    timestamp is followed by 32 random bits.
    """
    epoch_ms = time.time_ns() // 1_000_000
    token = secrets.token_hex(4)
    return f"{slugify_label(label)}-{epoch_ms}{token}.{_clean_extension(extension)}"


__all__ = [
    "DEFAULT_EXTENSION",
    "MIME_EXTENSIONS",
    "derive_extension",
    "generate_key",
    "slugify_label",
]

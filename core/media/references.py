# =============================================================================
# core/media/references.py - Media Reference Classification
# =============================================================================
# A media field holds one of three shapes:
# - Empty:      "" (nothing selected)
# - Ephemeral:  "blob:<handle>" (bytes held in the user's media session)
# - Persisted:  absolute http(s) URL, or a URL on the storage provider domain
#
# Strings are classified once, at the HTTP boundary, into a MediaReference.
# Everything downstream switches on MediaReference.kind.
# =============================================================================

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlparse

from core.media.errors import InvalidReference

EPHEMERAL_SCHEME = "blob:"

# Public object URLs served by Supabase Storage
STORAGE_DOMAIN_PATTERN = re.compile(r"\.supabase\.co/storage/", re.IGNORECASE)

_PERSISTED_SCHEMES = ("http", "https")


class MediaKind(str, Enum):
    """The three shapes a media field value can take."""
    EMPTY = "empty"
    EPHEMERAL = "ephemeral"
    PERSISTED = "persisted"


def is_ephemeral(ref: str) -> bool:
    """True iff the reference uses the local-only blob: scheme."""
    return ref.startswith(EPHEMERAL_SCHEME)


def is_persisted(ref: str) -> bool:
    """
    True iff the reference is a durable address.

    Accepts absolute http/https URLs with a host, or anything on the
    storage provider's public domain. Ephemeral and empty refs never match.
    """
    if not ref or is_ephemeral(ref):
        return False
    parsed = urlparse(ref)
    if parsed.scheme.lower() in _PERSISTED_SCHEMES and parsed.netloc:
        return True
    return bool(STORAGE_DOMAIN_PATTERN.search(ref))


@dataclass(frozen=True, slots=True)
class MediaReference:
    """
    Tagged media field value.

    Construct with MediaReference.parse() at the boundary, or with the
    empty() / ephemeral() / persisted() helpers.
    """

    kind: MediaKind
    value: str = ""

    @classmethod
    def parse(cls, raw: str | None) -> MediaReference:
        """
        Classify a raw field value.

        Raises:
            InvalidReference: value is non-empty but matches no known shape
        """
        text = (raw or "").strip()
        if not text:
            return cls.empty()
        if is_ephemeral(text):
            if not text[len(EPHEMERAL_SCHEME):]:
                raise InvalidReference(text, reason="malformed_handle")
            return cls(MediaKind.EPHEMERAL, text)
        if is_persisted(text):
            return cls(MediaKind.PERSISTED, text)
        raise InvalidReference(text, reason="unrecognized_reference")

    @classmethod
    def empty(cls) -> MediaReference:
        return cls(MediaKind.EMPTY, "")

    @classmethod
    def ephemeral(cls, handle: str) -> MediaReference:
        return cls(MediaKind.EPHEMERAL, f"{EPHEMERAL_SCHEME}{handle}")

    @classmethod
    def persisted(cls, url: str) -> MediaReference:
        if not is_persisted(url):
            raise InvalidReference(url, reason="not_a_persisted_url")
        return cls(MediaKind.PERSISTED, url)

    @property
    def handle(self) -> str:
        """Handle part of an ephemeral reference ("" for other kinds)."""
        if self.kind is not MediaKind.EPHEMERAL:
            return ""
        return self.value[len(EPHEMERAL_SCHEME):]

    @property
    def is_empty(self) -> bool:
        return self.kind is MediaKind.EMPTY

    @property
    def is_ephemeral(self) -> bool:
        return self.kind is MediaKind.EPHEMERAL

    @property
    def is_persisted(self) -> bool:
        return self.kind is MediaKind.PERSISTED

    def to_field(self) -> str | None:
        """Value to write to a text column (None for empty)."""
        return self.value or None

    def __str__(self) -> str:
        return self.value

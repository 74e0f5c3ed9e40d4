# =============================================================================
# core/media/store.py - Ephemeral Media Store
# =============================================================================
# Holds file bytes a user selected in a form but hasn't saved yet.
#
# Each editing session owns one EphemeralStore and passes it explicitly to
# the upload gateway. There is no process-wide handle table; the registry
# below only maps an authenticated user to their own store.
#
# Handle lifetime:
#   created on file selection (add)
#   released on removal, form reset (clear) or successful upload
#   expired after ttl_seconds (fetch then fails with reason "expired")
#
# A store is bounded by max_drafts and max_bytes; add() raises
# DraftLimitExceeded once either would be exceeded.
# =============================================================================

from __future__ import annotations

import logging
import threading
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from uuid import UUID

from core.media.errors import DraftLimitExceeded, InvalidReference
from core.media.references import EPHEMERAL_SCHEME, MediaReference, is_ephemeral

logger = logging.getLogger(__name__)

DEFAULT_MAX_DRAFTS = 20
DEFAULT_MAX_BYTES = 40 * 1024 * 1024
DEFAULT_TTL_SECONDS = 3600.0

Clock = Callable[[], float]


@dataclass(frozen=True, slots=True)
class EphemeralBlob:
    """Bytes behind an ephemeral handle."""

    content: bytes
    content_type: str
    filename: str | None = None
    created_at: float = 0.0

    @property
    def size_bytes(self) -> int:
        return len(self.content)


class EphemeralStore:
    """
    Explicit handle -> bytes map for one editing session.

    Args:
        max_drafts: Most handles held at once
        max_bytes: Most bytes held at once
        ttl_seconds: Age after which a handle counts as expired
        clock: Monotonic time source (tests pass a fake)
    """

    def __init__(
        self,
        max_drafts: int = DEFAULT_MAX_DRAFTS,
        max_bytes: int = DEFAULT_MAX_BYTES,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Clock = time.monotonic,
    ) -> None:
        self.max_drafts = max_drafts
        self.max_bytes = max_bytes
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._blobs: dict[str, EphemeralBlob] = {}
        self.last_used = clock()

    def add(self, content: bytes, content_type: str, filename: str | None = None) -> MediaReference:
        """
        Keep bytes locally and return a fresh ephemeral reference.

        Raises:
            DraftLimitExceeded: the draft count or byte budget would be exceeded
        """
        self.purge_expired()
        self.touch()

        if len(self._blobs) >= self.max_drafts:
            raise DraftLimitExceeded("drafts", len(self._blobs), self.max_drafts)
        held = self.total_bytes
        if held + len(content) > self.max_bytes:
            raise DraftLimitExceeded("bytes", held + len(content), self.max_bytes)

        handle = uuid.uuid4().hex
        self._blobs[handle] = EphemeralBlob(
            content=content,
            content_type=content_type,
            filename=filename,
            created_at=self._clock(),
        )
        logger.debug(f"Stored ephemeral media {handle} ({len(content)} bytes, {content_type})")
        return MediaReference.ephemeral(handle)

    def fetch(self, ref: MediaReference | str) -> EphemeralBlob:
        """
        Resolve an ephemeral reference to its bytes.

        Raises:
            InvalidReference: not an ephemeral ref, released, expired, or
                never existed
        """
        handle = self._handle_of(ref)
        self.touch()
        blob = self._blobs.get(handle)
        if blob is None:
            raise InvalidReference(str(ref), reason="unknown_handle")
        if self._is_expired(blob):
            del self._blobs[handle]
            raise InvalidReference(str(ref), reason="expired")
        return blob

    def release(self, ref: MediaReference | str) -> bool:
        """Drop a handle. Returns False if it wasn't held."""
        try:
            handle = self._handle_of(ref)
        except InvalidReference:
            return False
        return self._blobs.pop(handle, None) is not None

    def purge_expired(self) -> int:
        """Drop expired handles. Returns how many were dropped."""
        expired = [h for h, blob in self._blobs.items() if self._is_expired(blob)]
        for handle in expired:
            del self._blobs[handle]
        if expired:
            logger.info(f"Dropped {len(expired)} expired media drafts")
        return len(expired)

    def is_idle(self) -> bool:
        """Empty and untouched for longer than the TTL."""
        return not self._blobs and self._clock() - self.last_used > self.ttl_seconds

    def clear(self) -> None:
        self._blobs.clear()

    @property
    def total_bytes(self) -> int:
        return sum(blob.size_bytes for blob in self._blobs.values())

    def __len__(self) -> int:
        return len(self._blobs)

    def __contains__(self, ref: object) -> bool:
        if not isinstance(ref, (MediaReference, str)):
            return False
        try:
            return self._handle_of(ref) in self._blobs
        except InvalidReference:
            return False

    def touch(self) -> None:
        self.last_used = self._clock()

    def _is_expired(self, blob: EphemeralBlob) -> bool:
        return self._clock() - blob.created_at > self.ttl_seconds

    @staticmethod
    def _handle_of(ref: MediaReference | str) -> str:
        if isinstance(ref, MediaReference):
            if not ref.is_ephemeral or not ref.handle:
                raise InvalidReference(ref.value, reason="not_ephemeral")
            return ref.handle
        if not is_ephemeral(ref):
            raise InvalidReference(ref, reason="not_ephemeral")
        handle = ref[len(EPHEMERAL_SCHEME):]
        if not handle:
            raise InvalidReference(ref, reason="malformed_handle")
        return handle


class MediaSessionRegistry:
    """
    One EphemeralStore per authenticated user.

    Lives on app.state; route handlers look up the caller's store and pass
    it down explicitly. Every lookup also prunes: expired drafts are dropped
    and stores left empty and idle past the TTL are discarded.
    """

    def __init__(
        self,
        max_drafts: int = DEFAULT_MAX_DRAFTS,
        max_bytes: int = DEFAULT_MAX_BYTES,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Clock = time.monotonic,
    ) -> None:
        self.max_drafts = max_drafts
        self.max_bytes = max_bytes
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._stores: dict[str, EphemeralStore] = {}
        self._lock = threading.Lock()

    def store_for(self, user_id: UUID | str) -> EphemeralStore:
        key = str(user_id)
        with self._lock:
            self._prune(keep=key)
            store = self._stores.get(key)
            if store is None:
                store = EphemeralStore(
                    max_drafts=self.max_drafts,
                    max_bytes=self.max_bytes,
                    ttl_seconds=self.ttl_seconds,
                    clock=self._clock,
                )
                self._stores[key] = store
            store.touch()
            return store

    def prune(self) -> int:
        """Drop expired drafts and idle stores. Returns stores discarded."""
        with self._lock:
            return self._prune()

    def clear(self) -> None:
        """Release every draft of every user."""
        with self._lock:
            for store in self._stores.values():
                store.clear()
            self._stores.clear()

    @property
    def draft_count(self) -> int:
        return sum(len(store) for store in self._stores.values())

    def __len__(self) -> int:
        return len(self._stores)

    def _prune(self, keep: str | None = None) -> int:
        idle = []
        for key, store in self._stores.items():
            store.purge_expired()
            if key != keep and store.is_idle():
                idle.append(key)
        for key in idle:
            del self._stores[key]
        if idle:
            logger.debug(f"Discarded {len(idle)} idle media sessions")
        return len(idle)

# =============================================================================
# core/media/orchestrator.py - Conditional Upload
# =============================================================================
# Uploads a media field only when it holds an ephemeral reference:
#
#   Empty      -> Empty           (no network call)
#   Persisted  -> same Persisted  (no network call; resubmitting is a no-op)
#   Ephemeral  -> fetch bytes -> derive key -> upload -> Persisted
#
# Per field the chain is strictly sequential. Fields of one form fan out
# concurrently and are joined before the record is saved; any single
# failure fails the whole submission and no handle is released.
# =============================================================================

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence

from core.media.errors import MediaError, UploadFailed
from core.media.filenames import derive_extension, generate_key
from core.media.gateway import UploadGatewayClient
from core.media.references import MediaKind, MediaReference

logger = logging.getLogger(__name__)

# (field name, reference, label prefix)
FieldSpec = tuple[str, "MediaReference | str", str]


class ConditionalUploader:
    """
    Resolves media references into persisted ones, uploading at most once
    per field per submission.
    """

    def __init__(self, gateway: UploadGatewayClient):
        self.gateway = gateway

    async def resolve(
        self,
        media_ref: MediaReference | str | None,
        label_prefix: str,
        field: str | None = None,
    ) -> MediaReference:
        """
        Resolve one media reference.

        On success an uploaded handle is released from the session store.

        Raises:
            UploadFailed: the reference couldn't be resolved or uploaded
        """
        result = await self._resolve(media_ref, label_prefix, field or label_prefix)
        self._release([media_ref])
        return result

    async def resolve_fields(
        self,
        fields: Mapping[str, tuple[MediaReference | str | None, str]],
    ) -> dict[str, MediaReference]:
        """
        Resolve every field of a form concurrently.

        Args:
            fields: field name -> (reference, label prefix)

        Returns:
            field name -> resolved reference, in the same order

        Raises:
            UploadFailed: for the first failing field (declaration order)
        """
        specs = [(name, ref, label) for name, (ref, label) in fields.items()]
        resolved = await self.resolve_specs(specs)
        return {name: ref for (name, _, _), ref in zip(specs, resolved)}

    async def resolve_many(
        self,
        refs: Sequence[MediaReference | str | None],
        label_prefix: str,
        field: str = "images",
    ) -> list[MediaReference]:
        """Resolve a list-valued media field with the same all-or-nothing rule."""
        specs = [(f"{field}[{i}]", ref, label_prefix) for i, ref in enumerate(refs)]
        return await self.resolve_specs(specs)

    async def resolve_specs(self, specs: Sequence[FieldSpec]) -> list[MediaReference]:
        """
        Resolve (field, reference, label) triples concurrently.

        Handles are released only once every spec has resolved.

        Raises:
            UploadFailed: for the first failing spec, in the given order
        """
        results = await asyncio.gather(
            *(self._resolve(ref, label, name) for name, ref, label in specs),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result

        self._release([ref for _, ref, _ in specs])
        return list(results)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    async def _resolve(
        self,
        media_ref: MediaReference | str | None,
        label_prefix: str,
        field: str,
    ) -> MediaReference:
        try:
            ref = media_ref if isinstance(media_ref, MediaReference) else MediaReference.parse(media_ref)

            if ref.kind is MediaKind.EMPTY:
                return ref
            if ref.kind is MediaKind.PERSISTED:
                return ref

            content, content_type = self.gateway.fetch_bytes(ref)
            key = generate_key(label_prefix, derive_extension(content_type))
            url = await self.gateway.upload(content, key, content_type)
            return MediaReference.persisted(url)

        except MediaError as e:
            logger.warning(f"Media field '{field}' failed to resolve: {e.message}")
            raise UploadFailed(field, e.message) from e

    def _release(self, refs: Sequence[MediaReference | str | None]) -> None:
        for ref in refs:
            if isinstance(ref, MediaReference):
                if ref.is_ephemeral:
                    self.gateway.store.release(ref)
            elif ref:
                self.gateway.store.release(ref.strip())


__all__ = ["ConditionalUploader"]

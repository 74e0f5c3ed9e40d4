# =============================================================================
# tests/test_conditional_uploader.py - Conditional Upload Tests
# =============================================================================
# Tests for ConditionalUploader:
# - Empty and persisted references never touch the network
# - Ephemeral references upload exactly once and come back persisted
# - Multi-field submissions are all-or-nothing
#
# Run with: pytest tests/test_conditional_uploader.py -v
# =============================================================================

import asyncio
import fnmatch
from unittest.mock import MagicMock

import pytest

from core.media import (
    InvalidReference,
    MediaReference,
    TransportError,
    UploadFailed,
)
from tests.conftest import JPEG_BYTES, PNG_BYTES, STORAGE_BASE


class TestResolveSingle:

    def test_empty_passes_through(self, uploader, fake_gateway):
        result = asyncio.run(uploader.resolve("", "client-avatar"))

        assert result.is_empty
        assert result.value == ""
        assert fake_gateway.requests == []

    def test_persisted_passes_through(self, uploader, fake_gateway):
        url = "https://cdn.example.com/x/a.png"
        result = asyncio.run(uploader.resolve(url, "client-avatar"))

        assert result.value == url
        assert fake_gateway.requests == []

    def test_ephemeral_jpeg_uploads_once(self, uploader, store, fake_gateway):
        ref = store.add(JPEG_BYTES, "image/jpeg")

        result = asyncio.run(uploader.resolve(ref, "client-avatar"))

        assert len(fake_gateway.requests) == 1
        key = fake_gateway.keys[0]
        assert fnmatch.fnmatch(key, "client-avatar-*.jpg")
        assert fake_gateway.requests[0].content == JPEG_BYTES
        assert result.is_persisted
        assert result.value == f"{STORAGE_BASE}/{key}"
        assert result != ref

    def test_extension_follows_content_type(self, uploader, store, fake_gateway):
        asyncio.run(uploader.resolve(store.add(PNG_BYTES, "image/png"), "logo"))
        assert fake_gateway.keys[0].endswith(".png")

    def test_handle_released_after_upload(self, uploader, store):
        ref = store.add(JPEG_BYTES, "image/jpeg")
        asyncio.run(uploader.resolve(ref, "logo"))
        assert ref not in store

    def test_raw_string_ephemeral_ref(self, uploader, store, fake_gateway):
        ref = store.add(JPEG_BYTES, "image/jpeg")
        result = asyncio.run(uploader.resolve(ref.value, "logo"))
        assert result.is_persisted
        assert len(fake_gateway.requests) == 1

    def test_fixed_point(self, uploader, store, fake_gateway):
        ref = store.add(JPEG_BYTES, "image/jpeg")

        first = asyncio.run(uploader.resolve(ref, "logo"))
        second = asyncio.run(uploader.resolve(first, "logo"))

        assert second == first
        assert len(fake_gateway.requests) == 1

    def test_expired_handle_fails_and_nothing_is_saved(self, uploader, store, fake_gateway):
        ref = store.add(JPEG_BYTES, "image/jpeg")
        store.release(ref)
        save_record = MagicMock()

        async def submit():
            resolved = await uploader.resolve(ref, "client-avatar", field="logo")
            save_record({"logo": resolved.to_field()})

        with pytest.raises(UploadFailed) as exc_info:
            asyncio.run(submit())

        assert isinstance(exc_info.value.__cause__, InvalidReference)
        assert exc_info.value.field == "logo"
        save_record.assert_not_called()
        assert fake_gateway.requests == []

    def test_draft_past_ttl_fails(self, uploader, store, fake_gateway):
        ref = store.add(JPEG_BYTES, "image/jpeg")
        store.ttl_seconds = -1

        with pytest.raises(UploadFailed) as exc_info:
            asyncio.run(uploader.resolve(ref, "client-avatar", field="logo"))

        assert exc_info.value.__cause__.reason == "expired"
        assert ref not in store
        assert fake_gateway.requests == []

    def test_gateway_failure_keeps_handle(self, uploader, store, fake_gateway):
        fake_gateway.status_code = 503
        ref = store.add(JPEG_BYTES, "image/jpeg")

        with pytest.raises(UploadFailed) as exc_info:
            asyncio.run(uploader.resolve(ref, "logo"))

        assert isinstance(exc_info.value.__cause__, TransportError)
        # Still there so the user can resubmit without re-selecting
        assert ref in store

    def test_unclassifiable_string_fails(self, uploader, fake_gateway):
        with pytest.raises(UploadFailed) as exc_info:
            asyncio.run(uploader.resolve("logo.png", "logo"))
        assert isinstance(exc_info.value.__cause__, InvalidReference)
        assert fake_gateway.requests == []


class TestResolveFields:

    def test_mixed_form(self, uploader, store, fake_gateway):
        logo = store.add(PNG_BYTES, "image/png")
        cover_url = f"{STORAGE_BASE}/organization-cover-1.jpg"

        resolved = asyncio.run(uploader.resolve_fields({
            "logo": (logo, "organization-logo"),
            "cover_image": (cover_url, "organization-cover"),
            "banner": ("", "service-banner"),
        }))

        assert list(resolved) == ["logo", "cover_image", "banner"]
        assert resolved["logo"].is_persisted
        assert resolved["cover_image"].value == cover_url
        assert resolved["banner"].is_empty
        assert len(fake_gateway.requests) == 1
        assert fake_gateway.keys[0].startswith("organization-logo-")

    def test_one_failure_fails_all_and_releases_nothing(self, uploader, store, fake_gateway):
        fake_gateway.fail_prefixes = ("organization-cover",)
        logo = store.add(PNG_BYTES, "image/png")
        cover = store.add(JPEG_BYTES, "image/jpeg")

        with pytest.raises(UploadFailed) as exc_info:
            asyncio.run(uploader.resolve_fields({
                "logo": (logo, "organization-logo"),
                "cover_image": (cover, "organization-cover"),
            }))

        assert exc_info.value.field == "cover_image"
        assert logo in store
        assert cover in store

    def test_first_failure_in_declaration_order_wins(self, uploader, store):
        missing_a = MediaReference.ephemeral("gone-a")
        missing_b = MediaReference.ephemeral("gone-b")

        with pytest.raises(UploadFailed) as exc_info:
            asyncio.run(uploader.resolve_fields({
                "first": (missing_a, "a"),
                "second": (missing_b, "b"),
            }))

        assert exc_info.value.field == "first"


class TestResolveMany:

    def test_gallery(self, uploader, store, fake_gateway):
        existing = "https://cdn.example.com/gallery/1.png"
        new_one = store.add(JPEG_BYTES, "image/jpeg")

        resolved = asyncio.run(uploader.resolve_many([existing, new_one, ""], "project-image"))

        assert [r.kind.value for r in resolved] == ["persisted", "persisted", "empty"]
        assert resolved[0].value == existing
        assert len(fake_gateway.requests) == 1
        assert new_one not in store

    def test_failure_names_the_slot(self, uploader, store):
        ok = store.add(JPEG_BYTES, "image/jpeg")

        with pytest.raises(UploadFailed) as exc_info:
            asyncio.run(uploader.resolve_many([ok, "blob:expired"], "project-image"))

        assert exc_info.value.field == "images[1]"
        assert ok in store

    def test_each_upload_gets_its_own_key(self, uploader, store, fake_gateway):
        refs = [store.add(JPEG_BYTES, "image/jpeg") for _ in range(5)]
        asyncio.run(uploader.resolve_many(refs, "project-image"))

        assert len(set(fake_gateway.keys)) == 5

# =============================================================================
# tests/test_media_references.py - Media Reference Classification Tests
# =============================================================================
# Run with: pytest tests/test_media_references.py -v
# =============================================================================

import pytest

from core.media import (
    EPHEMERAL_SCHEME,
    InvalidReference,
    MediaKind,
    MediaReference,
    is_ephemeral,
    is_persisted,
)

SUPABASE_URL = "https://abc.supabase.co/storage/v1/object/public/portfolio-media/logo.png"


class TestPredicates:
    """is_ephemeral / is_persisted on raw strings."""

    @pytest.mark.parametrize("ref", ["blob:abc123", "blob:x"])
    def test_blob_refs_are_ephemeral(self, ref):
        assert is_ephemeral(ref)
        assert not is_persisted(ref)

    @pytest.mark.parametrize("ref", [
        "https://cdn.example.com/a.png",
        "http://example.com/image.jpg",
        SUPABASE_URL,
    ])
    def test_urls_are_persisted(self, ref):
        assert is_persisted(ref)
        assert not is_ephemeral(ref)

    def test_empty_is_neither(self):
        assert not is_ephemeral("")
        assert not is_persisted("")

    def test_storage_domain_without_scheme_is_persisted(self):
        assert is_persisted("abc.supabase.co/storage/v1/object/public/x.png")

    @pytest.mark.parametrize("ref", ["logo.png", "ftp://example.com/a.png", "https://", "/relative/path.png"])
    def test_other_strings_are_neither(self, ref):
        assert not is_persisted(ref)
        assert not is_ephemeral(ref)


class TestParse:
    """MediaReference.parse at the request boundary."""

    @pytest.mark.parametrize("raw", ["", None, "   "])
    def test_empty_values(self, raw):
        ref = MediaReference.parse(raw)
        assert ref.kind is MediaKind.EMPTY
        assert ref.is_empty
        assert ref.to_field() is None

    def test_ephemeral(self):
        ref = MediaReference.parse("blob:3f2a")
        assert ref.kind is MediaKind.EPHEMERAL
        assert ref.handle == "3f2a"
        assert str(ref) == "blob:3f2a"

    def test_persisted_is_kept_verbatim(self):
        ref = MediaReference.parse(SUPABASE_URL)
        assert ref.is_persisted
        assert ref.value == SUPABASE_URL
        assert ref.to_field() == SUPABASE_URL

    def test_surrounding_whitespace_is_stripped(self):
        ref = MediaReference.parse("  https://cdn.example.com/a.png \n")
        assert ref.value == "https://cdn.example.com/a.png"

    def test_bare_scheme_is_malformed(self):
        with pytest.raises(InvalidReference) as exc_info:
            MediaReference.parse(EPHEMERAL_SCHEME)
        assert exc_info.value.reason == "malformed_handle"

    def test_unclassifiable_string_is_rejected(self):
        with pytest.raises(InvalidReference) as exc_info:
            MediaReference.parse("my-logo.png")
        assert exc_info.value.reason == "unrecognized_reference"
        assert exc_info.value.code == "INVALID_MEDIA_REFERENCE"


class TestConstructors:

    def test_ephemeral_builds_blob_ref(self):
        ref = MediaReference.ephemeral("abc")
        assert ref.value == "blob:abc"
        assert ref == MediaReference.parse("blob:abc")

    def test_persisted_validates(self):
        with pytest.raises(InvalidReference):
            MediaReference.persisted("blob:abc")

    def test_handle_is_empty_for_other_kinds(self):
        assert MediaReference.empty().handle == ""
        assert MediaReference.persisted(SUPABASE_URL).handle == ""

    def test_references_are_immutable(self):
        ref = MediaReference.empty()
        with pytest.raises(AttributeError):
            ref.value = "https://example.com/a.png"

# =============================================================================
# tests/test_media_filenames.py - Storage Key Tests
# =============================================================================

import re
from unittest.mock import patch

import pytest

from core.media import derive_extension, generate_key, slugify_label
from core.media.filenames import DEFAULT_EXTENSION

KEY_RE = re.compile(r"^(?P<slug>[a-z0-9-]+)-(?P<ms>\d{13})(?P<hex>[0-9a-f]{8})\.(?P<ext>[a-z0-9]+)$")


class TestDeriveExtension:

    @pytest.mark.parametrize("content_type,expected", [
        ("image/jpeg", "jpg"),
        ("image/jpg", "jpg"),
        ("image/png", "png"),
        ("image/gif", "gif"),
        ("image/webp", "webp"),
        ("image/svg+xml", "svg"),
    ])
    def test_known_types(self, content_type, expected):
        assert derive_extension(content_type) == expected

    @pytest.mark.parametrize("content_type", ["image/avif", "application/pdf", "", None, "garbage"])
    def test_unknown_types_fall_back_to_jpg(self, content_type):
        assert derive_extension(content_type) == DEFAULT_EXTENSION == "jpg"

    def test_parameters_and_case_are_ignored(self):
        assert derive_extension("Image/PNG; charset=binary") == "png"


class TestSlugifyLabel:

    def test_basic(self):
        assert slugify_label("Client Avatar!") == "client-avatar"

    def test_accents_are_folded(self):
        assert slugify_label("Café Nord") == "cafe-nord"

    def test_empty_label_falls_back(self):
        assert slugify_label("") == "file"
        assert slugify_label("!!!") == "file"


class TestGenerateKey:

    def test_format(self):
        match = KEY_RE.match(generate_key("client-avatar", "jpg"))
        assert match
        assert match["slug"] == "client-avatar"
        assert match["ext"] == "jpg"

    def test_same_label_same_millisecond_still_distinct(self):
        with patch("core.media.filenames.time.time_ns", return_value=1_718_000_000_000_000_000):
            keys = {generate_key("logo", "png") for _ in range(50)}
        assert len(keys) == 50

    def test_embeds_epoch_milliseconds(self):
        with patch("core.media.filenames.time.time_ns", return_value=1_718_000_000_123_456_789):
            key = generate_key("logo", "png")
        assert KEY_RE.match(key)["ms"] == "1718000000123"

    def test_extension_is_sanitized(self):
        assert generate_key("logo", ".PNG").endswith(".png")
        assert generate_key("logo", "").endswith(".jpg")

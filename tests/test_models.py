# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the request/response models to ensure:
# - Media fields are classified when the request is parsed
# - Invalid data raises ValidationError
# - media_specs() and to_record() agree on field paths
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

import pytest
from pydantic import ValidationError

from core.media import MediaReference
from core.models import (
    ClientCreate,
    ClientUpdate,
    OrganizationCreate,
    OrganizationResponse,
    OrganizationUpdate,
    ProjectCreate,
    ProjectUpdate,
    ReviewCreate,
    ServiceCreate,
    ServiceUpdate,
)

URL_A = "https://test-project.supabase.co/storage/v1/object/public/portfolio-media/a.png"
URL_B = "https://test-project.supabase.co/storage/v1/object/public/portfolio-media/b.png"


def _resolve_all(payload) -> dict[str, MediaReference]:
    """Pretend every ephemeral ref was uploaded to URL_B."""
    return {
        name: MediaReference.persisted(URL_B) if ref.is_ephemeral else ref
        for name, ref, _ in payload.media_specs()
    }


# =============================================================================
# Media Field Tests
# =============================================================================

class TestMediaField:

    def test_blob_ref_is_classified(self):
        client = ClientCreate(name="Harbour Co", logo="blob:abc")
        assert client.logo.is_ephemeral
        assert client.logo.handle == "abc"

    def test_url_is_classified(self):
        client = ClientCreate(name="Harbour Co", logo=URL_A)
        assert client.logo.is_persisted

    def test_missing_defaults_to_empty(self):
        assert ClientCreate(name="Harbour Co").logo.is_empty

    def test_null_is_empty_on_create(self):
        assert ClientCreate(name="Harbour Co", logo=None).logo.is_empty

    def test_unrecognized_string_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ClientCreate(name="Harbour Co", logo="logo.png")
        assert "logo" in str(exc_info.value)

    def test_non_string_is_rejected(self):
        with pytest.raises(ValidationError):
            ClientCreate(name="Harbour Co", logo=123)

    def test_serializes_as_plain_string(self):
        dumped = ClientCreate(name="Harbour Co", logo="blob:abc").model_dump(mode="json")
        assert dumped["logo"] == "blob:abc"


# =============================================================================
# Organization Tests
# =============================================================================

class TestOrganizationCreate:

    def _payload(self, **overrides):
        data = {"name": "Acme Studio", "slug": "acme-studio"}
        data.update(overrides)
        return OrganizationCreate(**data)

    def test_media_specs_labels(self):
        specs = self._payload(logo="blob:x").media_specs()
        assert [(name, label) for name, _, label in specs] == [
            ("logo", "organization-logo"),
            ("cover_image", "organization-cover"),
        ]

    @pytest.mark.parametrize("slug", ["Acme", "ac", "acme studio", "acme_studio"])
    def test_invalid_slug(self, slug):
        with pytest.raises(ValidationError):
            self._payload(slug=slug)

    def test_invalid_website(self):
        with pytest.raises(ValidationError):
            self._payload(website="not a url")

    def test_to_record(self):
        payload = self._payload(logo="blob:x", linkedin="https://linkedin.com/company/acme")
        record = payload.to_record(_resolve_all(payload))

        assert record["logo"] == URL_B
        assert record["cover_image"] is None
        assert record["social_links"]["linkedin"] == "https://linkedin.com/company/acme"
        assert record["social_links"]["twitter"] is None
        assert "linkedin" not in record


class TestOrganizationUpdate:

    def test_omitted_media_is_not_resolved(self):
        assert OrganizationUpdate(name="New Name").media_specs() == []

    def test_omitted_fields_not_in_record(self):
        payload = OrganizationUpdate(tagline="Design that works")
        assert payload.to_record({}) == {"tagline": "Design that works"}

    def test_empty_string_clears_media(self):
        payload = OrganizationUpdate(cover_image="")
        record = payload.to_record(_resolve_all(payload))
        assert record == {"cover_image": None}

    def test_social_links_are_merged(self):
        payload = OrganizationUpdate(twitter="https://x.com/acme")
        record = payload.to_record({}, current_social_links={"linkedin": "https://linkedin.com/company/acme"})

        assert record["social_links"] == {
            "linkedin": "https://linkedin.com/company/acme",
            "twitter": "https://x.com/acme",
        }


class TestOrganizationResponse:

    def test_from_row(self, organization_row):
        org = OrganizationResponse(**organization_row)
        assert org.slug == "acme-studio"
        assert org.is_published is True


# =============================================================================
# Child Record Tests
# =============================================================================

class TestProject:

    def test_gallery_specs(self):
        payload = ProjectCreate(title="Harbour Rebrand", images=[URL_A, "blob:new", ""])
        names = [name for name, _, _ in payload.media_specs()]
        assert names == ["cover_image", "images[0]", "images[1]", "images[2]"]

    def test_empty_gallery_slots_are_dropped(self):
        payload = ProjectCreate(title="Harbour Rebrand", images=[URL_A, "blob:new", ""])
        record = payload.to_record(_resolve_all(payload))
        assert record["images"] == [URL_A, URL_B]

    def test_tags_from_comma_string(self):
        payload = ProjectCreate(title="Harbour Rebrand", tags="branding, print ,")
        assert payload.tags == ["branding", "print"]

    def test_update_without_images_keeps_gallery(self):
        payload = ProjectUpdate(title="Renamed")
        assert payload.media_specs() == []
        assert "images" not in payload.to_record({})

    def test_update_with_empty_images_clears_gallery(self):
        payload = ProjectUpdate(images=[])
        assert payload.to_record({}) == {"images": []}


class TestService:

    def test_sample_work_specs(self):
        payload = ServiceCreate(
            title="Brand Identity",
            sample_work=[
                {"title": "Café Nord", "description": "Logo", "image_url": "blob:a"},
                {"title": "Tide", "description": "Menu", "image_url": URL_A},
            ],
        )
        specs = payload.media_specs()
        assert [(name, label) for name, _, label in specs] == [
            ("logo", "service-logo"),
            ("banner", "service-banner"),
            ("sample_work[0].image_url", "sample-work"),
            ("sample_work[1].image_url", "sample-work"),
        ]

    def test_sample_work_record(self):
        payload = ServiceCreate(
            title="Brand Identity",
            sample_work=[{"title": "Café Nord", "description": "Logo", "image_url": "blob:a"}],
        )
        record = payload.to_record(_resolve_all(payload))
        item = record["sample_work"][0]

        assert item["image_url"] == URL_B
        assert item["title"] == "Café Nord"
        assert item["id"]

    def test_sample_work_without_image(self):
        payload = ServiceCreate(
            title="Brand Identity",
            sample_work=[{"title": "Tide", "description": "Menu"}],
        )
        assert payload.sample_work[0].image_url.is_empty

        record = payload.to_record(_resolve_all(payload))
        assert record["sample_work"][0]["image_url"] is None

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            ServiceCreate(title="Brand Identity", price_per_hour=-1)

    def test_update_only_logo(self):
        payload = ServiceUpdate(logo=URL_A)
        assert payload.to_record(_resolve_all(payload)) == {"logo": URL_A}


class TestClientAndReview:

    def test_client_update_name_only(self):
        assert ClientUpdate(name="Harbour").to_record({}) == {"name": "Harbour"}

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_bounds(self, rating):
        with pytest.raises(ValidationError):
            ReviewCreate(author_name="Dana Ruiz", rating=rating, content="Great work, on time.")

    def test_review_content_min_length(self):
        with pytest.raises(ValidationError):
            ReviewCreate(author_name="Dana Ruiz", rating=5, content="Great")

    def test_review_record(self):
        payload = ReviewCreate(
            author_name="Dana Ruiz", author_logo="blob:z", rating=5, content="Great work, on time."
        )
        record = payload.to_record(_resolve_all(payload))
        assert record["author_logo"] == URL_B
        assert record["rating"] == 5


class TestOptionalMediaField:
    """Update models: null keeps the image, "" clears it."""

    def test_explicit_null_leaves_unchanged(self):
        payload = ClientUpdate.model_validate({"name": "Harbour", "logo": None})
        assert payload.logo is None
        assert payload.media_specs() == []

    def test_empty_string_clears(self):
        payload = ClientUpdate.model_validate({"logo": ""})
        assert payload.logo.is_empty
        assert payload.to_record(_resolve_all(payload)) == {"logo": None}

    def test_invalid_reference_rejected(self):
        with pytest.raises(ValidationError):
            ClientUpdate.model_validate({"logo": "logo.png"})

# =============================================================================
# tests/test_services.py - Organization and Record Service Tests
# =============================================================================
# SupabaseClient is patched; these tests check ownership rules and the
# public portfolio read, not PostgREST itself.
# =============================================================================

from unittest.mock import patch

import pytest

from app.exceptions import (
    OrganizationNotFoundError,
    PortfolioNotFoundError,
    RecordNotFoundError,
    SlugTakenError,
)
from core.services.organization_service import OrganizationService, average_rating
from core.services.record_service import ClientService, ProjectService

ORG_SB = "core.services.organization_service.SupabaseClient"
RECORD_SB = "core.services.record_service.SupabaseClient"


class TestAverageRating:

    def test_no_reviews(self):
        assert average_rating([]) == "0.0"

    def test_one_decimal(self):
        assert average_rating([{"rating": 5}, {"rating": 4}, {"rating": 4}]) == "4.3"


class TestOrganizationService:

    def test_create_rejects_taken_slug(self, user_id):
        with patch(ORG_SB) as sb:
            sb.slug_exists.return_value = True

            with pytest.raises(SlugTakenError):
                OrganizationService.create_organization(user_id, {"name": "Acme", "slug": "acme"})

            sb.get_client.assert_not_called()

    def test_create_starts_unpublished(self, user_id, organization_row):
        with patch(ORG_SB) as sb:
            sb.slug_exists.return_value = False
            table = sb.get_client.return_value.table.return_value
            table.insert.return_value.execute.return_value.data = [organization_row]

            OrganizationService.create_organization(user_id, {"name": "Acme", "slug": "acme-studio"})

            row = table.insert.call_args[0][0]
            assert row["user_id"] == str(user_id)
            assert row["is_published"] is False

    def test_get_hides_other_users_organizations(self, organization_row):
        with patch(ORG_SB) as sb:
            sb.fetch_row.return_value = organization_row

            with pytest.raises(OrganizationNotFoundError):
                OrganizationService.get_organization(organization_row["id"], user_id="someone-else")

    def test_get_missing(self):
        with patch(ORG_SB) as sb:
            sb.fetch_row.return_value = None
            with pytest.raises(OrganizationNotFoundError) as exc_info:
                OrganizationService.get_organization("missing")
            assert exc_info.value.status_code == 404

    def test_update_with_no_changes_is_a_noop(self, user_id, organization_row):
        with patch(ORG_SB) as sb:
            sb.fetch_row.return_value = organization_row

            result = OrganizationService.update_organization(organization_row["id"], user_id, {})

            assert result == organization_row
            sb.get_client.assert_not_called()

    def test_update_keeping_own_slug_skips_check(self, user_id, organization_row):
        with patch(ORG_SB) as sb:
            sb.fetch_row.return_value = organization_row
            table = sb.get_client.return_value.table.return_value
            table.update.return_value.eq.return_value.eq.return_value.execute.return_value.data = [organization_row]

            OrganizationService.update_organization(organization_row["id"], user_id, {"slug": "acme-studio"})

            sb.slug_exists.assert_not_called()

    def test_toggle_publish(self, user_id, organization_row):
        with patch(ORG_SB) as sb:
            sb.fetch_row.return_value = organization_row
            assert OrganizationService.toggle_publish(organization_row["id"], user_id) is False

    def test_public_portfolio(self, organization_row):
        projects = [
            {"id": "p1", "is_pinned": True, "is_featured": False},
            {"id": "p2", "is_pinned": False, "is_featured": True},
            {"id": "p3", "is_pinned": False, "is_featured": False},
        ]
        reviews = [{"rating": 5}, {"rating": 4}]

        def children(table, org_id, order_by=None, limit=None):
            return {"projects": projects, "reviews": reviews}.get(table, [])

        with patch(ORG_SB) as sb:
            sb.fetch_organization_by_slug.return_value = organization_row
            sb.fetch_children.side_effect = children

            data = OrganizationService.get_public_portfolio("acme-studio")

        assert [p["id"] for p in data["projects"]] == ["p1", "p2"]
        assert data["average_rating"] == "4.5"
        sb.fetch_organization_by_slug.assert_called_once_with("acme-studio", published_only=True)

    def test_unpublished_portfolio_is_not_found(self):
        with patch(ORG_SB) as sb:
            sb.fetch_organization_by_slug.return_value = None
            with pytest.raises(PortfolioNotFoundError):
                OrganizationService.get_public_portfolio("draft-org")

    def test_public_service_of_another_org(self, organization_row):
        with patch(ORG_SB) as sb:
            sb.fetch_organization_by_slug.return_value = organization_row
            sb.fetch_row.return_value = {"id": "s1", "organization_id": "other-org"}

            with pytest.raises(PortfolioNotFoundError):
                OrganizationService.get_public_service("acme-studio", "s1")


class TestOwnedRecordService:

    def test_get_checks_owner_through_organization(self, organization_row):
        project = {"id": "p1", "organization_id": organization_row["id"]}

        with patch(RECORD_SB) as sb:
            sb.fetch_row.side_effect = [project, organization_row]

            with pytest.raises(RecordNotFoundError) as exc_info:
                ProjectService.get("p1", "someone-else")

        assert exc_info.value.code == "PROJECT_NOT_FOUND"

    def test_get_owned(self, user_id, organization_row):
        client_row = {"id": "c1", "organization_id": organization_row["id"], "name": "Harbour"}

        with patch(RECORD_SB) as sb:
            sb.fetch_row.side_effect = [client_row, organization_row]
            assert ClientService.get("c1", user_id) == client_row

    def test_create_sets_organization_id(self, user_id, organization_row):
        with patch(ORG_SB) as org_sb, patch(RECORD_SB) as sb:
            org_sb.fetch_row.return_value = organization_row
            table = sb.get_client.return_value.table.return_value
            table.insert.return_value.execute.return_value.data = [{"id": "c1"}]

            ClientService.create(organization_row["id"], user_id, {"name": "Harbour", "logo": None})

            sb.get_client.return_value.table.assert_called_with("clients")
            row = table.insert.call_args[0][0]
            assert row["organization_id"] == organization_row["id"]

    def test_update_empty_returns_current(self, user_id, organization_row):
        client_row = {"id": "c1", "organization_id": organization_row["id"]}
        with patch(RECORD_SB) as sb:
            sb.fetch_row.side_effect = [client_row, organization_row]
            assert ClientService.update("c1", user_id, {}) == client_row
            sb.get_client.assert_not_called()

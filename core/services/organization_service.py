# =============================================================================
# core/services/organization_service.py - Organization Business Logic
# =============================================================================
# Handles organization CRUD, publishing and the public portfolio read.
# Separates HTTP concerns from database/business logic.
#
# The Supabase client runs with the service role key, so every method that
# takes a user_id applies the ownership check itself.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from app.exceptions import OrganizationNotFoundError, PortfolioNotFoundError, SlugTakenError

logger = logging.getLogger(__name__)

# Public page limits
PUBLIC_PROJECT_LIMIT = 12
PUBLIC_CLIENT_LIMIT = 12
PUBLIC_REVIEW_LIMIT = 6


def average_rating(reviews: list[dict[str, Any]]) -> str:
    """Mean rating with one decimal, "0.0" when there are no reviews."""
    if not reviews:
        return "0.0"
    total = sum((r.get("rating") or 0) for r in reviews)
    return f"{total / len(reviews):.1f}"


class OrganizationService:
    """
    Service for organization management operations.

    Provides a clean interface between API routes and database.
    """

    @staticmethod
    def create_organization(
        user_id: UUID | str,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        """
        Create a new, unpublished organization.

        Args:
            user_id: Owner of the organization
            data: Column values (media fields already persisted)

        Returns:
            Created organization dict

        Raises:
            SlugTakenError: If the slug is already used
        """
        slug = data["slug"]
        OrganizationService.ensure_slug_available(slug)

        client = SupabaseClient.get_client()
        row = {**data, "user_id": str(user_id), "is_published": False}

        try:
            response = (
                client.table("organizations")
                .insert(row)
                .execute()
            )

            if response.data:
                org = response.data[0]
                logger.info(f"Created organization: {org['id']} ({slug}) for user: {user_id}")
                return org

            raise Exception("Insert returned no data")

        except Exception as e:
            logger.error(f"Failed to create organization: {e}")
            raise

    @staticmethod
    def ensure_slug_available(slug: str, exclude_id: str | UUID | None = None) -> None:
        """
        Raises:
            SlugTakenError: If another organization already uses the slug
        """
        if SupabaseClient.slug_exists(slug, exclude_id=exclude_id):
            raise SlugTakenError(slug)

    @staticmethod
    def get_organization(
        organization_id: str | UUID,
        user_id: UUID | str | None = None,
    ) -> dict[str, Any]:
        """
        Get an organization by ID.

        Args:
            organization_id: The organization UUID
            user_id: If provided, verify the organization belongs to this user

        Raises:
            OrganizationNotFoundError: If it doesn't exist or user doesn't own it
        """
        org = SupabaseClient.fetch_row("organizations", organization_id)

        if not org:
            raise OrganizationNotFoundError(str(organization_id))

        if user_id and str(org.get("user_id")) != str(user_id):
            # Don't reveal that the organization exists
            raise OrganizationNotFoundError(str(organization_id))

        return org

    @staticmethod
    def get_organization_with_children(
        organization_id: str | UUID,
        user_id: UUID | str,
    ) -> dict[str, Any]:
        """Dashboard view: organization plus all of its child records."""
        org = OrganizationService.get_organization(organization_id, user_id=user_id)
        org_id = org["id"]

        org["projects"] = SupabaseClient.fetch_children(
            "projects", org_id, order_by=[("is_pinned", True), ("order", False), ("created_at", True)]
        )
        org["services"] = SupabaseClient.fetch_children("services", org_id, order_by=[("order", False)])
        org["clients"] = SupabaseClient.fetch_children("clients", org_id, order_by=[("order", False)])
        org["reviews"] = SupabaseClient.fetch_children("reviews", org_id, order_by=[("created_at", True)])
        return org

    @staticmethod
    def list_organizations(user_id: UUID | str) -> list[dict[str, Any]]:
        """List organizations owned by a user, newest first."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("organizations")
                .select("*")
                .eq("user_id", str(user_id))
                .order("created_at", desc=True)
                .execute()
            )
            return response.data or []

        except Exception as e:
            logger.error(f"Failed to list organizations: {e}")
            raise

    @staticmethod
    def update_organization(
        organization_id: str | UUID,
        user_id: UUID | str,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        """
        Update an organization.

        Raises:
            OrganizationNotFoundError: If it doesn't exist or user doesn't own it
            SlugTakenError: If the new slug belongs to another organization
        """
        org = OrganizationService.get_organization(organization_id, user_id=user_id)

        if not data:
            return org  # Nothing to update

        slug = data.get("slug")
        if slug and slug != org.get("slug"):
            OrganizationService.ensure_slug_available(slug, exclude_id=org["id"])

        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("organizations")
                .update(data)
                .eq("id", str(org["id"]))
                .eq("user_id", str(user_id))
                .execute()
            )

            if response.data:
                logger.info(f"Updated organization: {org['id']}")
                return response.data[0]

            return org

        except Exception as e:
            logger.error(f"Failed to update organization: {e}")
            raise

    @staticmethod
    def toggle_publish(
        organization_id: str | UUID,
        user_id: UUID | str,
    ) -> bool:
        """
        Flip the published flag.

        Returns:
            The new is_published value
        """
        org = OrganizationService.get_organization(organization_id, user_id=user_id)
        is_published = not bool(org.get("is_published"))

        client = SupabaseClient.get_client()

        try:
            (
                client.table("organizations")
                .update({"is_published": is_published})
                .eq("id", str(org["id"]))
                .execute()
            )
            logger.info(f"Organization {org['id']} published={is_published}")
            return is_published

        except Exception as e:
            logger.error(f"Failed to toggle publish: {e}")
            raise

    @staticmethod
    def delete_organization(
        organization_id: str | UUID,
        user_id: UUID | str,
    ) -> None:
        """Delete an organization (child rows cascade in the database)."""
        org = OrganizationService.get_organization(organization_id, user_id=user_id)
        client = SupabaseClient.get_client()

        try:
            (
                client.table("organizations")
                .delete()
                .eq("id", str(org["id"]))
                .eq("user_id", str(user_id))
                .execute()
            )
            logger.info(f"Deleted organization: {org['id']}")

        except Exception as e:
            logger.error(f"Failed to delete organization: {e}")
            raise

    # -------------------------------------------------------------------------
    # Public Portfolio
    # -------------------------------------------------------------------------

    @staticmethod
    def get_public_portfolio(slug: str) -> dict[str, Any]:
        """
        Read a published organization for its public page.

        Raises:
            PortfolioNotFoundError: Unknown slug or not published
        """
        org = SupabaseClient.fetch_organization_by_slug(slug, published_only=True)
        if not org:
            raise PortfolioNotFoundError(slug)

        org_id = org["id"]

        projects = [
            p for p in SupabaseClient.fetch_children(
                "projects",
                org_id,
                order_by=[("is_pinned", True), ("is_featured", True), ("order", False)],
            )
            if p.get("is_pinned") or p.get("is_featured")
        ][:PUBLIC_PROJECT_LIMIT]

        services = SupabaseClient.fetch_children("services", org_id, order_by=[("order", False)])
        clients = SupabaseClient.fetch_children(
            "clients", org_id, order_by=[("order", False)], limit=PUBLIC_CLIENT_LIMIT
        )
        reviews = SupabaseClient.fetch_children(
            "reviews", org_id, order_by=[("created_at", True)], limit=PUBLIC_REVIEW_LIMIT
        )

        return {
            "organization": org,
            "projects": projects,
            "services": services,
            "clients": clients,
            "reviews": reviews,
            "average_rating": average_rating(reviews),
        }

    @staticmethod
    def get_public_service(slug: str, service_id: str | UUID) -> dict[str, Any]:
        """
        Read one service of a published organization.

        Raises:
            PortfolioNotFoundError: Unknown slug, not published, or the
                service belongs to another organization
        """
        org = SupabaseClient.fetch_organization_by_slug(slug, published_only=True)
        if not org:
            raise PortfolioNotFoundError(slug)

        service = SupabaseClient.fetch_row("services", service_id)
        if not service or str(service.get("organization_id")) != str(org["id"]):
            raise PortfolioNotFoundError(slug)

        return {"organization": org, "service": service}

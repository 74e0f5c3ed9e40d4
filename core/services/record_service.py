# =============================================================================
# core/services/record_service.py - Organization Child Records
# =============================================================================
# Projects, services, clients and reviews share the same shape: a row with
# an organization_id, owned through that organization's user_id.
#
# OwnedRecordService holds the CRUD + ownership logic once; subclasses only
# name their table.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from app.exceptions import RecordNotFoundError
from core.services.organization_service import OrganizationService

logger = logging.getLogger(__name__)


class OwnedRecordService:
    """
    CRUD for rows that belong to an organization.

    Subclasses set TABLE (Supabase table) and KIND (used in error codes).
    """

    TABLE: str = ""
    KIND: str = "record"
    ORDER_BY: list[tuple[str, bool]] = [("created_at", False)]

    @classmethod
    def create(
        cls,
        organization_id: str | UUID,
        user_id: UUID | str,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        """
        Insert a row under an organization the user owns.

        Raises:
            OrganizationNotFoundError: If the organization isn't the user's
        """
        org = OrganizationService.get_organization(organization_id, user_id=user_id)
        client = SupabaseClient.get_client()
        row = {**data, "organization_id": str(org["id"])}

        try:
            response = client.table(cls.TABLE).insert(row).execute()

            if response.data:
                record = response.data[0]
                logger.info(f"Created {cls.KIND}: {record['id']} in organization: {org['id']}")
                return record

            raise Exception("Insert returned no data")

        except Exception as e:
            logger.error(f"Failed to create {cls.KIND}: {e}")
            raise

    @classmethod
    def get(cls, record_id: str | UUID, user_id: UUID | str) -> dict[str, Any]:
        """
        Get a row the user owns through its organization.

        Raises:
            RecordNotFoundError: If it doesn't exist or isn't the user's
        """
        record = SupabaseClient.fetch_row(cls.TABLE, record_id)
        if not record:
            raise RecordNotFoundError(cls.KIND, str(record_id))

        org = SupabaseClient.fetch_row("organizations", record["organization_id"])
        if not org or str(org.get("user_id")) != str(user_id):
            raise RecordNotFoundError(cls.KIND, str(record_id))

        return record

    @classmethod
    def list_for_organization(
        cls,
        organization_id: str | UUID,
        user_id: UUID | str,
    ) -> list[dict[str, Any]]:
        """List rows of an organization the user owns."""
        org = OrganizationService.get_organization(organization_id, user_id=user_id)
        return SupabaseClient.fetch_children(cls.TABLE, org["id"], order_by=cls.ORDER_BY)

    @classmethod
    def update(
        cls,
        record_id: str | UUID,
        user_id: UUID | str,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        """Update a row. Returns the current row when `data` is empty."""
        record = cls.get(record_id, user_id)
        if not data:
            return record

        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(cls.TABLE)
                .update(data)
                .eq("id", str(record["id"]))
                .execute()
            )

            if response.data:
                logger.info(f"Updated {cls.KIND}: {record['id']}")
                return response.data[0]

            return record

        except Exception as e:
            logger.error(f"Failed to update {cls.KIND}: {e}")
            raise

    @classmethod
    def delete(cls, record_id: str | UUID, user_id: UUID | str) -> dict[str, Any]:
        """Delete a row. Returns the deleted row."""
        record = cls.get(record_id, user_id)
        client = SupabaseClient.get_client()

        try:
            client.table(cls.TABLE).delete().eq("id", str(record["id"])).execute()
            logger.info(f"Deleted {cls.KIND}: {record['id']}")
            return record

        except Exception as e:
            logger.error(f"Failed to delete {cls.KIND}: {e}")
            raise


class ProjectService(OwnedRecordService):
    TABLE = "projects"
    KIND = "project"
    ORDER_BY = [("is_pinned", True), ("order", False), ("created_at", True)]


class OfferingService(OwnedRecordService):
    """Services offered by an organization (`services` table)."""

    TABLE = "services"
    KIND = "service"
    ORDER_BY = [("order", False), ("created_at", False)]


class ClientService(OwnedRecordService):
    TABLE = "clients"
    KIND = "client"
    ORDER_BY = [("order", False), ("created_at", False)]


class ReviewService(OwnedRecordService):
    TABLE = "reviews"
    KIND = "review"
    ORDER_BY = [("created_at", True)]

# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database reads.
# It implements the singleton pattern to reuse a single client connection
# and provides specialized methods for fetching:
# - Single rows by ID (organizations, projects, services, clients, reviews)
# - Organizations by public slug
# - Child records of an organization
#
# Writes are issued by the services in core/services through get_client().
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   org = SupabaseClient.fetch_organization_by_slug("acme-studio")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST error code for ".single()" matching zero rows
NO_ROWS_CODE = "PGRST116"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages: errors should tell HOW to fix,
    not just WHAT failed.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        org = SupabaseClient.fetch_row("organizations", org_id)
        projects = SupabaseClient.fetch_children("projects", org_id)
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS), so
        every service must apply its own ownership checks.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def _normalize_uuid(cls, uuid_value: str | UUID) -> str:
        """Convert UUID to string for queries."""
        return str(uuid_value) if isinstance(uuid_value, UUID) else uuid_value

    # -------------------------------------------------------------------------
    # Row Reads
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_row(cls, table: str, row_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch a single row by ID.

        Returns:
            Row dict, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        row_id_str = cls._normalize_uuid(row_id)

        try:
            response = (
                client.table(table)
                .select("*")
                .eq("id", row_id_str)
                .single()
                .execute()
            )

            return response.data

        except Exception as e:
            if NO_ROWS_CODE in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch {table} row: {e}",
                code="FETCH_ROW_FAILED",
                suggestion=f"Check that the {table} id exists",
                details={"table": table, "id": row_id_str}
            )

    @classmethod
    def fetch_organization_by_slug(
        cls,
        slug: str,
        published_only: bool = True,
    ) -> dict[str, Any] | None:
        """
        Fetch an organization by its public slug.

        Args:
            slug: URL slug (unique)
            published_only: Ignore organizations that aren't published

        Returns:
            Organization dict, or None if not found
        """
        client = cls.get_client()

        try:
            query = client.table("organizations").select("*").eq("slug", slug)
            if published_only:
                query = query.eq("is_published", True)
            response = query.limit(1).execute()

            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch organization by slug: {e}",
                code="FETCH_ORGANIZATION_FAILED",
                details={"slug": slug}
            )

    @classmethod
    def slug_exists(cls, slug: str, exclude_id: str | UUID | None = None) -> bool:
        """Check whether another organization already uses `slug`."""
        client = cls.get_client()

        query = client.table("organizations").select("id").eq("slug", slug)
        if exclude_id:
            query = query.neq("id", cls._normalize_uuid(exclude_id))

        try:
            response = query.limit(1).execute()
            return bool(response.data)
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to check slug: {e}",
                code="SLUG_CHECK_FAILED",
                details={"slug": slug}
            )

    @classmethod
    def fetch_children(
        cls,
        table: str,
        organization_id: str | UUID,
        order_by: list[tuple[str, bool]] | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch child records of an organization.

        Args:
            table: projects, services, clients or reviews
            organization_id: Parent organization UUID
            order_by: (column, descending) pairs, applied in order
            limit: Maximum rows to return

        Returns:
            List of row dicts (empty if none)
        """
        client = cls.get_client()
        org_id_str = cls._normalize_uuid(organization_id)

        query = client.table(table).select("*").eq("organization_id", org_id_str)
        for column, desc in order_by or [("created_at", False)]:
            query = query.order(column, desc=desc)
        if limit:
            query = query.limit(limit)

        try:
            response = query.execute()
            return response.data or []
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch {table}: {e}",
                code="FETCH_CHILDREN_FAILED",
                details={"table": table, "organization_id": org_id_str}
            )

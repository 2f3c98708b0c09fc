# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides specialized methods for the SportsHub tables:
# - profiles
# - media_uploads
# - assessments
# - challenges / user_challenges
#
# Ownership is always enforced by filtering on user_id, since the client uses
# the service key and bypasses Row Level Security.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   media = SupabaseClient.fetch_media(media_id, user_id=user.id)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)

# PostgREST code returned by .single() when no row matches
NO_ROWS_CODE = "PGRST116"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Services translate this into an API-level PersistenceError.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        assessments = SupabaseClient.fetch_assessments(user_id, limit=10)
        scores = [a.get("score") for a in assessments]
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).

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
                )
        return cls._instance

    @classmethod
    def _normalize_uuid(cls, uuid_value: str | UUID) -> str:
        """Convert UUID to string for queries."""
        return normalize_uuid(uuid_value)

    @classmethod
    def _single(cls, query, code: str, details: dict[str, Any]) -> dict[str, Any] | None:
        """Execute a .single() query, mapping "no rows" to None."""
        try:
            response = query.single().execute()
            return response.data
        except Exception as e:
            if NO_ROWS_CODE in str(e):
                return None
            raise SupabaseClientError(
                message=f"Query failed: {e}",
                code=code,
                details=details,
            )

    @classmethod
    def _first_row(cls, response, code: str, details: dict[str, Any]) -> dict[str, Any]:
        if response.data:
            return response.data[0]
        raise SupabaseClientError(
            message="Write returned no data",
            code=code,
            details=details,
        )

    # -------------------------------------------------------------------------
    # Counting
    # -------------------------------------------------------------------------

    @classmethod
    def count_rows(cls, table: str, **filters: Any) -> int:
        """
        Count rows in a table matching equality filters.

        Example:
            SupabaseClient.count_rows("user_challenges", user_id=uid, status="completed")
        """
        client = cls.get_client()

        try:
            query = client.table(table).select("id", count="exact")
            for column, value in filters.items():
                query = query.eq(column, cls._normalize_uuid(value))
            response = query.execute()
            return response.count or 0

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to count {table}: {e}",
                code="COUNT_FAILED",
                details={"table": table},
            )

    # -------------------------------------------------------------------------
    # Profiles
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_profile(cls, user_id: str | UUID) -> dict[str, Any] | None:
        """Fetch a user's profile row, or None if it hasn't been created yet."""
        client = cls.get_client()
        user_id_str = cls._normalize_uuid(user_id)

        query = client.table("profiles").select("*").eq("id", user_id_str)
        return cls._single(query, "FETCH_PROFILE_FAILED", {"user_id": user_id_str})

    @classmethod
    def upsert_profile(cls, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert or update a profile keyed on its id.

        Raises:
            SupabaseClientError: If the upsert fails
        """
        client = cls.get_client()

        try:
            response = client.table("profiles").upsert(data).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to save profile: {e}",
                code="UPSERT_PROFILE_FAILED",
                details={"user_id": data.get("id")},
            )
        return cls._first_row(response, "UPSERT_PROFILE_NO_DATA", {"user_id": data.get("id")})

    # -------------------------------------------------------------------------
    # Media Uploads
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_media(
        cls,
        media_id: str | UUID,
        user_id: str | UUID,
    ) -> dict[str, Any] | None:
        """
        Fetch one media upload owned by the user.

        Returns None when the row doesn't exist or belongs to someone else.
        """
        client = cls.get_client()
        media_id_str = cls._normalize_uuid(media_id)

        query = (
            client.table("media_uploads")
            .select("*")
            .eq("id", media_id_str)
            .eq("user_id", cls._normalize_uuid(user_id))
        )
        return cls._single(query, "FETCH_MEDIA_FAILED", {"media_id": media_id_str})

    @classmethod
    def fetch_media_list(
        cls,
        user_id: str | UUID,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Fetch a user's uploads, newest upload_date first."""
        client = cls.get_client()
        user_id_str = cls._normalize_uuid(user_id)

        try:
            query = (
                client.table("media_uploads")
                .select("*")
                .eq("user_id", user_id_str)
                .order("upload_date", desc=True)
            )
            if limit:
                query = query.limit(limit)
            response = query.execute()
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch media: {e}",
                code="FETCH_MEDIA_LIST_FAILED",
                details={"user_id": user_id_str},
            )

    @classmethod
    def insert_media(cls, data: dict[str, Any]) -> dict[str, Any]:
        """Insert a media_uploads row and return it."""
        client = cls.get_client()

        try:
            response = client.table("media_uploads").insert(data).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert media: {e}",
                code="INSERT_MEDIA_FAILED",
                details={"file_name": data.get("file_name")},
            )
        return cls._first_row(response, "INSERT_MEDIA_NO_DATA", {"file_name": data.get("file_name")})

    @classmethod
    def delete_media(cls, media_id: str | UUID, user_id: str | UUID) -> list[dict[str, Any]]:
        """Delete an owned media row. Returns the deleted rows (empty if none)."""
        client = cls.get_client()
        media_id_str = cls._normalize_uuid(media_id)

        try:
            response = (
                client.table("media_uploads")
                .delete()
                .eq("id", media_id_str)
                .eq("user_id", cls._normalize_uuid(user_id))
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete media: {e}",
                code="DELETE_MEDIA_FAILED",
                details={"media_id": media_id_str},
            )

    # -------------------------------------------------------------------------
    # Assessments
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_assessments(
        cls,
        user_id: str | UUID,
        limit: int = 10,
        columns: str = "*",
    ) -> list[dict[str, Any]]:
        """Fetch a user's most recent assessments, newest first."""
        client = cls.get_client()
        user_id_str = cls._normalize_uuid(user_id)

        try:
            response = (
                client.table("assessments")
                .select(columns)
                .eq("user_id", user_id_str)
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch assessments: {e}",
                code="FETCH_ASSESSMENTS_FAILED",
                details={"user_id": user_id_str, "limit": limit},
            )

    @classmethod
    def fetch_media_assessments(
        cls,
        media_id: str | UUID,
        user_id: str | UUID,
    ) -> list[dict[str, Any]]:
        """Fetch every assessment of one media upload, newest first."""
        client = cls.get_client()
        media_id_str = cls._normalize_uuid(media_id)

        try:
            response = (
                client.table("assessments")
                .select("*")
                .eq("media_id", media_id_str)
                .eq("user_id", cls._normalize_uuid(user_id))
                .order("created_at", desc=True)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch media assessments: {e}",
                code="FETCH_MEDIA_ASSESSMENTS_FAILED",
                details={"media_id": media_id_str},
            )

    @classmethod
    def insert_assessment(cls, data: dict[str, Any]) -> dict[str, Any]:
        """Insert an assessments row and return it."""
        client = cls.get_client()

        try:
            response = client.table("assessments").insert(data).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert assessment: {e}",
                code="INSERT_ASSESSMENT_FAILED",
                details={"media_id": data.get("media_id")},
            )
        return cls._first_row(response, "INSERT_ASSESSMENT_NO_DATA", {"media_id": data.get("media_id")})

    # -------------------------------------------------------------------------
    # Challenges
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_open_challenges(
        cls,
        now_iso: str,
        order_by: str = "created_at",
        ascending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch challenges that expire after now_iso.

        Args:
            now_iso: Current time as ISO-8601 string
            order_by: Column to sort on ("created_at" or "expires_at")
            ascending: Sort direction
            limit: Optional row cap
        """
        client = cls.get_client()

        try:
            query = (
                client.table("challenges")
                .select("*")
                .gt("expires_at", now_iso)
                .order(order_by, desc=not ascending)
            )
            if limit:
                query = query.limit(limit)
            response = query.execute()
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch challenges: {e}",
                code="FETCH_CHALLENGES_FAILED",
            )

    @classmethod
    def fetch_challenge(cls, challenge_id: str | UUID) -> dict[str, Any] | None:
        """Fetch a challenge by ID."""
        client = cls.get_client()
        challenge_id_str = cls._normalize_uuid(challenge_id)

        query = client.table("challenges").select("*").eq("id", challenge_id_str)
        return cls._single(query, "FETCH_CHALLENGE_FAILED", {"challenge_id": challenge_id_str})

    @classmethod
    def fetch_joined_challenge_ids(cls, user_id: str | UUID) -> set[str]:
        """Return the IDs of every challenge the user has joined."""
        client = cls.get_client()
        user_id_str = cls._normalize_uuid(user_id)

        try:
            response = (
                client.table("user_challenges")
                .select("challenge_id")
                .eq("user_id", user_id_str)
                .execute()
            )
            return {str(row["challenge_id"]) for row in response.data or []}

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch memberships: {e}",
                code="FETCH_MEMBERSHIPS_FAILED",
                details={"user_id": user_id_str},
            )

    @classmethod
    def fetch_user_challenge(
        cls,
        user_id: str | UUID,
        challenge_id: str | UUID,
    ) -> dict[str, Any] | None:
        """
        Fetch the user's membership row for one challenge.

        Nothing stops a second row for the same pair from being written, so
        this reads the oldest row instead of using .single(), which reports
        duplicates the same way as no rows.
        """
        client = cls.get_client()
        challenge_id_str = cls._normalize_uuid(challenge_id)

        try:
            response = (
                client.table("user_challenges")
                .select("*")
                .eq("user_id", cls._normalize_uuid(user_id))
                .eq("challenge_id", challenge_id_str)
                .order("created_at")
                .limit(1)
                .execute()
            )
            return response.data[0] if response.data else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch membership: {e}",
                code="FETCH_MEMBERSHIP_FAILED",
                details={"challenge_id": challenge_id_str},
            )

    @classmethod
    def fetch_user_challenges(
        cls,
        user_id: str | UUID,
        limit: int = 5,
    ) -> list[dict[str, Any]]:
        """Fetch the user's most recent memberships with the challenge embedded."""
        client = cls.get_client()
        user_id_str = cls._normalize_uuid(user_id)

        try:
            response = (
                client.table("user_challenges")
                .select("*, challenge:challenges(*)")
                .eq("user_id", user_id_str)
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch user challenges: {e}",
                code="FETCH_USER_CHALLENGES_FAILED",
                details={"user_id": user_id_str},
            )

    @classmethod
    def insert_user_challenge(cls, data: dict[str, Any]) -> dict[str, Any]:
        """Insert a user_challenges row and return it."""
        client = cls.get_client()

        try:
            response = client.table("user_challenges").insert(data).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to join challenge: {e}",
                code="INSERT_MEMBERSHIP_FAILED",
                details={"challenge_id": data.get("challenge_id")},
            )
        return cls._first_row(response, "INSERT_MEMBERSHIP_NO_DATA", {"challenge_id": data.get("challenge_id")})

    @classmethod
    def update_user_challenge(
        cls,
        membership_id: str | UUID,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        """Update a membership row by its ID and return it."""
        client = cls.get_client()
        membership_id_str = cls._normalize_uuid(membership_id)

        try:
            response = (
                client.table("user_challenges")
                .update(data)
                .eq("id", membership_id_str)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update membership: {e}",
                code="UPDATE_MEMBERSHIP_FAILED",
                details={"membership_id": membership_id_str},
            )
        return cls._first_row(response, "UPDATE_MEMBERSHIP_NO_DATA", {"membership_id": membership_id_str})

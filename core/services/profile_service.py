# =============================================================================
# core/services/profile_service.py - Profile Business Logic
# =============================================================================
# A profile row is created the first time the user saves the profile form
# (upsert keyed on the auth user id) and is only ever updated afterwards.
# =============================================================================

import asyncio
import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import utc_now_iso
from core.models.challenge import MembershipStatus
from core.models.profile import ProfileStats, ProfileUpdate
from app.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class ProfileService:
    """
    Service for profile operations.
    """

    @staticmethod
    def get_profile(user_id: UUID | str, email: str | None = None) -> dict[str, Any]:
        """
        Get the caller's profile.

        Users who never saved the form get a skeleton with just id and email.
        """
        try:
            profile = SupabaseClient.fetch_profile(user_id)
        except SupabaseClientError as e:
            logger.warning(f"Could not fetch profile for {user_id}: {e}")
            raise PersistenceError("Failed to load profile", cause=str(e))

        if profile:
            return profile

        return {"id": str(user_id), "email": email}

    @staticmethod
    def save_profile(
        user_id: UUID | str,
        email: str | None,
        update: ProfileUpdate,
    ) -> dict[str, Any]:
        """
        Create or update the caller's profile.

        Returns:
            The stored profile row
        """
        data = {
            "id": str(user_id),
            "email": email,
            **update.model_dump(),
            "updated_at": utc_now_iso(),
        }

        try:
            profile = SupabaseClient.upsert_profile(data)
        except SupabaseClientError as e:
            logger.error(f"Failed to save profile for {user_id}: {e}")
            raise PersistenceError("Failed to update profile", cause=str(e))

        logger.info(f"Saved profile for user {user_id}")
        return profile

    @staticmethod
    async def get_stats(user_id: UUID | str) -> ProfileStats:
        """
        Counters for the profile page, fetched concurrently.
        """
        try:
            media_count, completed, assessment_count, profile = await asyncio.gather(
                asyncio.to_thread(SupabaseClient.count_rows, "media_uploads", user_id=user_id),
                asyncio.to_thread(
                    SupabaseClient.count_rows,
                    "user_challenges",
                    user_id=user_id,
                    status=MembershipStatus.COMPLETED.value,
                ),
                asyncio.to_thread(SupabaseClient.count_rows, "assessments", user_id=user_id),
                asyncio.to_thread(SupabaseClient.fetch_profile, user_id),
            )
        except SupabaseClientError as e:
            logger.error(f"Failed to load profile stats for {user_id}: {e}")
            raise PersistenceError("Failed to load profile stats", cause=str(e))

        return ProfileStats(
            media_count=media_count,
            completed_challenges=completed,
            assessment_count=assessment_count,
            member_since=(profile or {}).get("created_at"),
        )

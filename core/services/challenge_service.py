# =============================================================================
# core/services/challenge_service.py - Challenge Business Logic
# =============================================================================
# Listing challenges, joining them, and attaching entries.
#
# A user joins a challenge at most once: join() checks the existing
# membership before inserting. Completion/failure is decided elsewhere; the
# allowed moves are encoded in core.models.challenge.validate_transition.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import is_valid_uuid, utc_now_iso
from core.models.challenge import (
    Challenge,
    MembershipStatus,
    membership_status,
    validate_transition,
)
from core.services.media_service import MediaService
from app.exceptions import (
    ChallengeAlreadyJoinedError,
    ChallengeExpiredError,
    ChallengeNotFoundError,
    MembershipNotFoundError,
    MissingFieldError,
    PersistenceError,
)

logger = logging.getLogger(__name__)

UPCOMING_LIMIT = 3
MY_CHALLENGES_LIMIT = 5


class ChallengeService:
    """
    Service for challenge and membership operations.
    """

    @staticmethod
    def _joined_ids(user_id: UUID | str) -> set[str]:
        try:
            return SupabaseClient.fetch_joined_challenge_ids(user_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to fetch memberships: {e}")
            raise PersistenceError("Failed to load challenges", cause=str(e))

    @staticmethod
    def list_open(user_id: UUID | str) -> list[dict[str, Any]]:
        """
        List non-expired challenges, newest first, flagged with is_joined.
        """
        try:
            challenges = SupabaseClient.fetch_open_challenges(utc_now_iso())
        except SupabaseClientError as e:
            logger.error(f"Failed to fetch challenges: {e}")
            raise PersistenceError("Failed to load challenges", cause=str(e))

        joined = ChallengeService._joined_ids(user_id)
        return [
            {**challenge, "is_joined": str(challenge["id"]) in joined}
            for challenge in challenges
        ]

    @staticmethod
    def list_upcoming(user_id: UUID | str) -> list[dict[str, Any]]:
        """
        The soonest-expiring open challenges the user hasn't joined.

        The expiry window is taken first and joined ones removed afterwards,
        so fewer than UPCOMING_LIMIT may come back.
        """
        try:
            challenges = SupabaseClient.fetch_open_challenges(
                utc_now_iso(),
                order_by="expires_at",
                ascending=True,
                limit=UPCOMING_LIMIT,
            )
        except SupabaseClientError as e:
            logger.error(f"Failed to fetch upcoming challenges: {e}")
            raise PersistenceError("Failed to load challenges", cause=str(e))

        joined = ChallengeService._joined_ids(user_id)
        return [c for c in challenges if str(c["id"]) not in joined]

    @staticmethod
    def list_mine(user_id: UUID | str) -> list[dict[str, Any]]:
        """The user's most recent memberships with the challenge embedded."""
        try:
            return SupabaseClient.fetch_user_challenges(user_id, limit=MY_CHALLENGES_LIMIT)
        except SupabaseClientError as e:
            logger.error(f"Failed to fetch user challenges: {e}")
            raise PersistenceError("Failed to load challenges", cause=str(e))

    @staticmethod
    def get_challenge(challenge_id: UUID | str) -> dict[str, Any]:
        """
        Raises:
            ChallengeNotFoundError: If the challenge doesn't exist
        """
        if not is_valid_uuid(challenge_id):
            raise ChallengeNotFoundError(str(challenge_id))

        try:
            challenge = SupabaseClient.fetch_challenge(challenge_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to fetch challenge {challenge_id}: {e}")
            raise PersistenceError("Failed to load challenge", cause=str(e))

        if not challenge:
            raise ChallengeNotFoundError(str(challenge_id))
        return challenge

    @staticmethod
    def get_membership(user_id: UUID | str, challenge_id: UUID | str) -> dict[str, Any] | None:
        try:
            return SupabaseClient.fetch_user_challenge(user_id, challenge_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to fetch membership for {challenge_id}: {e}")
            raise PersistenceError("Failed to load challenge", cause=str(e))

    @staticmethod
    def get_detail(user_id: UUID | str, challenge_id: UUID | str) -> dict[str, Any]:
        """
        Challenge page data.

        Returns:
            Dict with challenge, membership (or None), status and can_join
        """
        challenge = ChallengeService.get_challenge(challenge_id)
        membership = ChallengeService.get_membership(user_id, challenge_id)
        status = membership_status(membership)

        can_join = (
            status is MembershipStatus.NOT_JOINED
            and not Challenge.model_validate(challenge).is_expired()
        )

        return {
            "challenge": challenge,
            "membership": membership,
            "status": status,
            "can_join": can_join,
        }

    @staticmethod
    def join(user_id: UUID | str, challenge_id: UUID | str) -> dict[str, Any]:
        """
        Join a challenge (not_joined -> active).

        Returns:
            The inserted user_challenges row

        Raises:
            ChallengeNotFoundError: unknown challenge
            ChallengeExpiredError: challenge past expires_at
            ChallengeAlreadyJoinedError: membership already exists
        """
        challenge = ChallengeService.get_challenge(challenge_id)
        if Challenge.model_validate(challenge).is_expired():
            raise ChallengeExpiredError(str(challenge_id))

        membership = ChallengeService.get_membership(user_id, challenge_id)
        if membership:
            raise ChallengeAlreadyJoinedError(str(challenge_id))

        status = validate_transition(MembershipStatus.NOT_JOINED, MembershipStatus.ACTIVE)

        try:
            row = SupabaseClient.insert_user_challenge({
                "user_id": str(user_id),
                "challenge_id": str(challenge_id),
                "status": status.value,
            })
        except SupabaseClientError as e:
            logger.error(f"Error joining challenge {challenge_id}: {e}")
            raise PersistenceError("Failed to join challenge", cause=str(e))

        logger.info(f"User {user_id} joined challenge {challenge_id}")
        return row

    @staticmethod
    def submit_entry(
        user_id: UUID | str,
        challenge_id: UUID | str,
        media_id: str | None,
    ) -> dict[str, Any]:
        """
        Attach an uploaded media file to an active membership.

        The status stays active; grading happens outside this service.

        Raises:
            MissingFieldError: media_id not given
            MembershipNotFoundError: user hasn't joined
            InvalidChallengeTransitionError: membership is no longer active
            MediaNotFoundError: media missing or not owned
        """
        if not media_id:
            raise MissingFieldError("Media ID is required", field="mediaId")

        ChallengeService.get_challenge(challenge_id)
        membership = ChallengeService.get_membership(user_id, challenge_id)
        if not membership:
            raise MembershipNotFoundError(str(challenge_id))

        status = membership_status(membership)
        if status is not MembershipStatus.ACTIVE:
            # Entries can only go to an active membership
            validate_transition(status, MembershipStatus.ACTIVE)

        MediaService.get_media(media_id, user_id)

        try:
            row = SupabaseClient.update_user_challenge(
                membership["id"],
                {"submission_media_id": str(media_id)},
            )
        except SupabaseClientError as e:
            logger.error(f"Error submitting entry for challenge {challenge_id}: {e}")
            raise PersistenceError("Failed to submit entry", cause=str(e))

        logger.info(f"User {user_id} submitted media {media_id} to challenge {challenge_id}")
        return row

# =============================================================================
# core/models/challenge.py - Challenge & Membership Schemas
# =============================================================================
# - Challenge: admin-authored task with a reward
# - UserChallenge: a user's membership/progress in one challenge
# - MembershipStatus + validate_transition: the membership state machine
#
# State machine:
#     not_joined -> active -> completed
#                          \-> failed
#
# Only the join transition is triggered by the API. Grading (completed /
# failed) happens outside this service.
# =============================================================================

from datetime import datetime, timezone
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, computed_field

from app.exceptions import InvalidChallengeTransitionError


class DifficultyLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class MembershipStatus(str, Enum):
    """
    Status of a user in a challenge.

    NOT_JOINED is never stored; it stands for "no user_challenges row".
    """
    NOT_JOINED = "not_joined"
    ACTIVE = "active"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (MembershipStatus.COMPLETED, MembershipStatus.FAILED)


ALLOWED_TRANSITIONS: dict[MembershipStatus, frozenset[MembershipStatus]] = {
    MembershipStatus.NOT_JOINED: frozenset({MembershipStatus.ACTIVE}),
    MembershipStatus.ACTIVE: frozenset({MembershipStatus.COMPLETED, MembershipStatus.FAILED}),
    MembershipStatus.COMPLETED: frozenset(),
    MembershipStatus.FAILED: frozenset(),
}


def validate_transition(current: MembershipStatus, target: MembershipStatus) -> MembershipStatus:
    """
    Check that a membership may move from `current` to `target`.

    Returns:
        The target status

    Raises:
        InvalidChallengeTransitionError: If the move is not allowed
    """
    if target not in ALLOWED_TRANSITIONS[current]:
        raise InvalidChallengeTransitionError(current.value, target.value)
    return target


def membership_status(user_challenge: dict | None) -> MembershipStatus:
    """Status of a membership row, NOT_JOINED when there is none."""
    if not user_challenge:
        return MembershipStatus.NOT_JOINED
    return MembershipStatus(user_challenge["status"])


class Challenge(BaseModel):
    """A row of the challenges table."""
    id: UUID
    title: str
    description: str
    sport: str
    difficulty_level: DifficultyLevel
    requirements: list[str] = Field(default_factory=list)
    reward_points: int = 0
    created_at: datetime | None = None
    expires_at: datetime | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return expires_at <= now


class UserChallenge(BaseModel):
    """A row of the user_challenges table."""
    id: UUID
    user_id: UUID
    challenge_id: UUID
    status: MembershipStatus = MembershipStatus.ACTIVE
    submission_media_id: UUID | None = None
    completed_at: datetime | None = None
    points_earned: int = 0
    created_at: datetime | None = None
    challenge: Challenge | None = None

    @computed_field
    @property
    def effective_points(self) -> int:
        """Points only count once the challenge is completed."""
        return self.points_earned if self.status is MembershipStatus.COMPLETED else 0


class ChallengeListItem(Challenge):
    """Challenge with the caller's membership flag."""
    is_joined: bool = False


class ChallengeDetail(BaseModel):
    """Challenge page: the challenge, the caller's membership, and whether joining is possible."""
    challenge: Challenge
    membership: UserChallenge | None = None
    status: MembershipStatus = MembershipStatus.NOT_JOINED
    can_join: bool = False


class SubmissionRequest(BaseModel):
    """Body of POST /api/challenges/{id}/submission."""
    media_id: str | None = Field(default=None, alias="mediaId")

    model_config = ConfigDict(populate_by_name=True)

# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - profile.py: athlete profile and sports catalog
# - media.py: media uploads
# - assessment.py: analysis requests and stored assessments
# - challenge.py: challenges, memberships and the membership state machine
# - dashboard.py: dashboard aggregates
#
# These models define the "contract" between API and clients.
# =============================================================================

from .profile import (
    MAX_AGE,
    MIN_AGE,
    SPORTS_POSITIONS,
    Profile,
    ProfileStats,
    ProfileUpdate,
    SportOption,
)

from .media import (
    MediaDetail,
    MediaList,
    MediaType,
    MediaUpload,
    UploadResponse,
    UploadResult,
    format_file_size,
)

from .assessment import (
    AnalyzeRequest,
    AnalyzeResponse,
    Assessment,
)

from .challenge import (
    Challenge,
    ChallengeDetail,
    ChallengeListItem,
    DifficultyLevel,
    MembershipStatus,
    SubmissionRequest,
    UserChallenge,
    membership_status,
    validate_transition,
)

from .dashboard import (
    ActivityItem,
    ActivityType,
    DashboardStats,
    InsightsSummary,
    TrendSummary,
)

__all__ = [
    # Profile
    "MAX_AGE",
    "MIN_AGE",
    "SPORTS_POSITIONS",
    "Profile",
    "ProfileStats",
    "ProfileUpdate",
    "SportOption",
    # Media
    "MediaDetail",
    "MediaList",
    "MediaType",
    "MediaUpload",
    "UploadResponse",
    "UploadResult",
    "format_file_size",
    # Assessment
    "AnalyzeRequest",
    "AnalyzeResponse",
    "Assessment",
    # Challenge
    "Challenge",
    "ChallengeDetail",
    "ChallengeListItem",
    "DifficultyLevel",
    "MembershipStatus",
    "SubmissionRequest",
    "UserChallenge",
    "membership_status",
    "validate_transition",
    # Dashboard
    "ActivityItem",
    "ActivityType",
    "DashboardStats",
    "InsightsSummary",
    "TrendSummary",
]

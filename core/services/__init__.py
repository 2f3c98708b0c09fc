# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .storage_service import StorageService
from .media_service import MediaService
from .assessment_service import AssessmentService
from .challenge_service import ChallengeService
from .profile_service import ProfileService
from .dashboard_service import DashboardService

__all__ = [
    "StorageService",
    "MediaService",
    "AssessmentService",
    "ChallengeService",
    "ProfileService",
    "DashboardService",
]

# =============================================================================
# core/services/assessment_service.py - Analysis Business Logic
# =============================================================================
# Runs the (mock) analysis for an owned video and records the assessment.
# One call == one new assessments row; rows are never updated.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient, SupabaseClientError
from core.analysis import perform_analysis
from core.models.media import MediaType
from core.services.media_service import MediaService
from app.config import settings
from app.exceptions import MediaNotAnalyzableError, MissingFieldError, PersistenceError

logger = logging.getLogger(__name__)


class AssessmentService:
    """
    Service for assessment operations.
    """

    @staticmethod
    async def analyze(
        user_id: UUID | str,
        media_id: str | None,
        analysis_type: str | None = None,
    ) -> dict[str, Any]:
        """
        Analyze one of the caller's videos and store the assessment.

        Args:
            user_id: Caller
            media_id: Media upload to analyze
            analysis_type: Label for the run (defaults to DEFAULT_ANALYSIS_TYPE)

        Returns:
            The inserted assessments row

        Raises:
            MissingFieldError: media_id not given
            MediaNotFoundError: media missing or not owned
            MediaNotAnalyzableError: media is not a video
            PersistenceError: assessment could not be saved
        """
        if not media_id:
            raise MissingFieldError("Media ID is required", field="mediaId")

        analysis_type = analysis_type or settings.DEFAULT_ANALYSIS_TYPE
        media = MediaService.get_media(media_id, user_id)

        if media.get("file_type") != MediaType.VIDEO.value:
            raise MediaNotAnalyzableError(str(media_id))

        result = await perform_analysis(media["file_url"], analysis_type)

        try:
            assessment = SupabaseClient.insert_assessment({
                "user_id": str(user_id),
                "media_id": str(media_id),
                "assessment_type": analysis_type,
                "results": result["results"],
                "score": result["score"],
                "recommendations": result["recommendations"],
            })
        except SupabaseClientError as e:
            logger.error(f"Assessment save error for media {media_id}: {e}")
            raise PersistenceError("Failed to save assessment", cause=str(e))

        logger.info(f"Created assessment {assessment['id']} (score {result['score']}) for media {media_id}")
        return assessment

    @staticmethod
    def recent_assessments(
        user_id: UUID | str,
        limit: int = 10,
        columns: str = "*",
    ) -> list[dict[str, Any]]:
        """Return the caller's most recent assessments, newest first."""
        try:
            return SupabaseClient.fetch_assessments(user_id, limit=limit, columns=columns)
        except SupabaseClientError as e:
            logger.error(f"Failed to fetch assessments: {e}")
            raise PersistenceError("Failed to load assessments", cause=str(e))

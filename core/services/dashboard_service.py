# =============================================================================
# core/services/dashboard_service.py - Dashboard Aggregates
# =============================================================================
# Read-only views over the caller's rows:
# - stats: counters + performance score (last 10 assessments)
# - activity: uploads and assessments merged into one feed
# - insights: average of the last 5 assessments and latest recommendations
#
# The independent count queries run concurrently; the Supabase client is
# synchronous, so each one runs in a worker thread.
# =============================================================================

import asyncio
import logging
from uuid import UUID

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import parse_timestamp
from core.models.dashboard import (
    ActivityItem,
    ActivityType,
    DashboardStats,
    InsightsSummary,
    TrendSummary,
)
from core.scoring import (
    TREND_WINDOW,
    average_score,
    format_score,
    score_band,
    score_trend,
)
from app.exceptions import PersistenceError

logger = logging.getLogger(__name__)

ACTIVITY_MEDIA_LIMIT = 5
ACTIVITY_ASSESSMENT_LIMIT = 3
ACTIVITY_FEED_LIMIT = 6
INSIGHTS_LIMIT = 5
INSIGHTS_RECOMMENDATIONS = 2


class DashboardService:
    """
    Service for dashboard aggregates.
    """

    @staticmethod
    async def get_stats(user_id: UUID | str) -> DashboardStats:
        """
        Counters plus the performance score.

        performance_score is "N/A" until the user has two assessments.
        """
        try:
            media_count, challenges_joined, assessment_count, recent = await asyncio.gather(
                asyncio.to_thread(SupabaseClient.count_rows, "media_uploads", user_id=user_id),
                asyncio.to_thread(SupabaseClient.count_rows, "user_challenges", user_id=user_id),
                asyncio.to_thread(SupabaseClient.count_rows, "assessments", user_id=user_id),
                asyncio.to_thread(
                    SupabaseClient.fetch_assessments,
                    user_id,
                    limit=TREND_WINDOW,
                    columns="score, created_at",
                ),
            )
        except SupabaseClientError as e:
            logger.error(f"Failed to load dashboard stats for {user_id}: {e}")
            raise PersistenceError("Failed to load dashboard", cause=str(e))

        trend = score_trend([a.get("score") for a in recent])

        return DashboardStats(
            media_count=media_count,
            challenges_joined=challenges_joined,
            assessment_count=assessment_count,
            performance_score=format_score(trend.value if trend else None),
            trend=TrendSummary(**trend.to_dict()) if trend else None,
        )

    @staticmethod
    async def get_activity(user_id: UUID | str) -> list[ActivityItem]:
        """Latest uploads and assessments, newest first."""
        try:
            media, assessments = await asyncio.gather(
                asyncio.to_thread(SupabaseClient.fetch_media_list, user_id, limit=ACTIVITY_MEDIA_LIMIT),
                asyncio.to_thread(SupabaseClient.fetch_assessments, user_id, limit=ACTIVITY_ASSESSMENT_LIMIT),
            )
        except SupabaseClientError as e:
            logger.error(f"Failed to load activity for {user_id}: {e}")
            raise PersistenceError("Failed to load activity", cause=str(e))

        items = [
            ActivityItem(
                type=ActivityType.UPLOAD,
                title=f"Uploaded {m['file_name']}",
                description=m.get("description") or f"{m['file_type']} file",
                timestamp=parse_timestamp(m["upload_date"]),
            )
            for m in media
        ]
        items += [
            ActivityItem(
                type=ActivityType.ASSESSMENT,
                title="AI Assessment Completed",
                description=f"{a['assessment_type']} analysis - Score: {a.get('score') or 'N/A'}",
                timestamp=parse_timestamp(a["created_at"]),
                band=score_band(a.get("score")) if a.get("score") is not None else None,
            )
            for a in assessments
        ]

        items.sort(key=lambda item: item.timestamp, reverse=True)
        return items[:ACTIVITY_FEED_LIMIT]

    @staticmethod
    def get_insights(user_id: UUID | str) -> InsightsSummary:
        """AI insights card over the last INSIGHTS_LIMIT assessments."""
        try:
            assessments = SupabaseClient.fetch_assessments(user_id, limit=INSIGHTS_LIMIT)
        except SupabaseClientError as e:
            logger.error(f"Failed to load insights for {user_id}: {e}")
            raise PersistenceError("Failed to load insights", cause=str(e))

        if not assessments:
            return InsightsSummary()

        latest = assessments[0]
        average = average_score(a.get("score") for a in assessments)

        return InsightsSummary(
            has_data=True,
            analysis_count=len(assessments),
            average_score=average,
            average_band=score_band(average),
            latest_score=latest.get("score"),
            latest_band=score_band(latest.get("score")),
            latest_assessment_type=latest.get("assessment_type"),
            recommendations=(latest.get("recommendations") or [])[:INSIGHTS_RECOMMENDATIONS],
        )

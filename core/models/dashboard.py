# =============================================================================
# core/models/dashboard.py - Dashboard Schemas
# =============================================================================
# Read-only aggregates shown on the athlete dashboard:
# - DashboardStats: counters + performance score and trend
# - ActivityItem: one line of the recent activity feed
# - InsightsSummary: the AI insights card
# =============================================================================

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from core.scoring import ScoreBand


class TrendSummary(BaseModel):
    value: int
    recent_average: float
    older_average: float | None = None
    direction: str


class DashboardStats(BaseModel):
    """
    Example:
        {
            "media_count": 12,
            "challenges_joined": 3,
            "assessment_count": 7,
            "performance_score": "84%",
            "trend": {"value": 84, "recent_average": 83.6, "older_average": 80.5, "direction": "up"}
        }
    """
    media_count: int = 0
    challenges_joined: int = 0
    assessment_count: int = 0
    performance_score: str = Field(..., description='"NN%" or "N/A"')
    trend: TrendSummary | None = None


class ActivityType(str, Enum):
    UPLOAD = "upload"
    ASSESSMENT = "assessment"


class ActivityItem(BaseModel):
    type: ActivityType
    title: str
    description: str
    timestamp: datetime
    band: ScoreBand | None = None


class InsightsSummary(BaseModel):
    has_data: bool = False
    analysis_count: int = 0
    average_score: int | None = None
    average_band: ScoreBand | None = None
    latest_score: int | None = None
    latest_band: ScoreBand | None = None
    latest_assessment_type: str | None = None
    recommendations: list[str] = Field(default_factory=list)

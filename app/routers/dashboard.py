# =============================================================================
# app/routers/dashboard.py - Athlete Dashboard Endpoints
# =============================================================================
# Endpoints:
# - GET /dashboard/stats: Counters + performance score
# - GET /dashboard/activity: Recent uploads and assessments
# - GET /dashboard/insights: AI insights card
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth import get_current_user, AuthUser
from core.models.dashboard import ActivityItem, DashboardStats, InsightsSummary
from core.services.dashboard_service import DashboardService

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    user: AuthUser = Depends(get_current_user),
):
    """
    Counters and performance score.

    performance_score is "N/A" with fewer than two assessments; otherwise it
    is the rounded average of the five most recent scores, e.g. "84%".
    """
    return await DashboardService.get_stats(user.id)


@router.get("/activity", response_model=list[ActivityItem])
async def get_dashboard_activity(
    user: AuthUser = Depends(get_current_user),
):
    return await DashboardService.get_activity(user.id)


@router.get("/insights", response_model=InsightsSummary)
async def get_dashboard_insights(
    user: AuthUser = Depends(get_current_user),
):
    return DashboardService.get_insights(user.id)

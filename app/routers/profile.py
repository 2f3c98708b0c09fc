# =============================================================================
# app/routers/profile.py - Athlete Profile Endpoints
# =============================================================================
# Endpoints:
# - GET /profile: The caller's profile (skeleton if never saved)
# - PUT /profile: Create or update the caller's profile
# - GET /profile/options: Sports catalog for the profile form
# - GET /profile/stats: Counters shown on the profile page
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth import get_current_user, AuthUser
from core.models.profile import (
    SPORTS_POSITIONS,
    Profile,
    ProfileStats,
    ProfileUpdate,
    SportOption,
)
from core.services.profile_service import ProfileService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=Profile)
async def get_profile(
    user: AuthUser = Depends(get_current_user),
):
    """
    Get the caller's profile.

    Returns only id and email until the profile form has been saved once.
    """
    return ProfileService.get_profile(user.id, email=user.email)


@router.put("", response_model=Profile)
async def update_profile(
    update: ProfileUpdate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Save the profile form.

    Errors:
    - 400: full_name blank, age outside 13-30, unknown sport or position
    - 401: not authenticated
    - 500: profile could not be saved
    """
    return ProfileService.save_profile(user.id, user.email, update)


@router.get("/options", response_model=list[SportOption])
async def get_profile_options(
    user: AuthUser = Depends(get_current_user),
):
    """Sports with their positions, in display order."""
    return [
        SportOption(sport=sport, positions=positions)
        for sport, positions in SPORTS_POSITIONS.items()
    ]


@router.get("/stats", response_model=ProfileStats)
async def get_profile_stats(
    user: AuthUser = Depends(get_current_user),
):
    """Uploads, completed challenges and assessments of the caller."""
    return await ProfileService.get_stats(user.id)

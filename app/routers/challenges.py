# =============================================================================
# app/routers/challenges.py - Challenge Endpoints
# =============================================================================
# Endpoints:
# - GET /challenges: Open challenges flagged with is_joined
# - GET /challenges/upcoming: Soonest-expiring challenges not yet joined
# - GET /challenges/mine: The caller's recent memberships
# - GET /challenges/{challenge_id}: Challenge page (membership + can_join)
# - POST /challenges/{challenge_id}/join: Join a challenge
# - POST /challenges/{challenge_id}/submission: Attach an entry
#
# The static paths are declared before /{challenge_id} so they aren't
# captured as ids.
# =============================================================================

import logging

from fastapi import APIRouter, Depends, Request, status

from app.auth import get_current_user, AuthUser
from app.dependencies import json_body_schema, read_json_body
from core.models.challenge import (
    Challenge,
    ChallengeDetail,
    ChallengeListItem,
    SubmissionRequest,
    UserChallenge,
)
from core.services.challenge_service import ChallengeService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[ChallengeListItem])
async def list_challenges(
    user: AuthUser = Depends(get_current_user),
):
    """Open challenges, newest first."""
    return ChallengeService.list_open(user.id)


@router.get("/upcoming", response_model=list[Challenge])
async def list_upcoming_challenges(
    user: AuthUser = Depends(get_current_user),
):
    """Up to three challenges closing soonest that the caller hasn't joined."""
    return ChallengeService.list_upcoming(user.id)


@router.get("/mine", response_model=list[UserChallenge])
async def list_my_challenges(
    user: AuthUser = Depends(get_current_user),
):
    """The caller's five most recent memberships, with the challenge embedded."""
    return ChallengeService.list_mine(user.id)


@router.get("/{challenge_id}", response_model=ChallengeDetail)
async def get_challenge(
    challenge_id: str,
    user: AuthUser = Depends(get_current_user),
):
    """
    Challenge page.

    can_join is false once joined or after expires_at, so the client can
    disable the join button.
    """
    return ChallengeService.get_detail(user.id, challenge_id)


@router.post(
    "/{challenge_id}/join",
    response_model=UserChallenge,
    status_code=status.HTTP_201_CREATED,
)
async def join_challenge(
    challenge_id: str,
    user: AuthUser = Depends(get_current_user),
):
    """
    Join a challenge.

    Errors:
    - 400: already joined, challenge expired
    - 404: challenge not found
    """
    return ChallengeService.join(user.id, challenge_id)


@router.post(
    "/{challenge_id}/submission",
    response_model=UserChallenge,
    openapi_extra=json_body_schema(SubmissionRequest),
)
async def submit_challenge_entry(
    challenge_id: str,
    request: Request,
    user: AuthUser = Depends(get_current_user),
):
    """
    Attach one of the caller's uploads as the entry for a joined challenge.

    Errors:
    - 400: malformed body, mediaId missing, membership no longer active
    - 404: challenge, membership or media not found
    """
    body = await read_json_body(request, SubmissionRequest)
    return ChallengeService.submit_entry(user.id, challenge_id, body.media_id)

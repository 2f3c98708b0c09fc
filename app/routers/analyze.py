# =============================================================================
# app/routers/analyze.py - Video Analysis Endpoint
# =============================================================================
# POST /api/analyze  {"mediaId": "...", "analysisType": "comprehensive"}
#
# Runs the mock analyzer over one of the caller's videos and stores the
# resulting assessment. Images are rejected with 400.
# =============================================================================

import logging

from fastapi import APIRouter, Depends, Request

from app.auth import get_current_user, AuthUser
from app.dependencies import json_body_schema, read_json_body
from core.models.assessment import AnalyzeRequest, AnalyzeResponse
from core.services.assessment_service import AssessmentService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    openapi_extra=json_body_schema(AnalyzeRequest),
)
async def analyze_media(
    request: Request,
    user: AuthUser = Depends(get_current_user),
):
    """
    Analyze a video.

    Errors:
    - 400: malformed body, mediaId missing, media is not a video
    - 401: not authenticated
    - 404: media not found (or owned by someone else)
    - 500: assessment could not be saved
    """
    body = await read_json_body(request, AnalyzeRequest)

    assessment = await AssessmentService.analyze(
        user_id=user.id,
        media_id=body.media_id,
        analysis_type=body.analysis_type,
    )

    return AnalyzeResponse(assessment=assessment)

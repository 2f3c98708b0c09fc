# =============================================================================
# app/routers/media.py - Media Library Endpoints
# =============================================================================
# Endpoints:
# - GET /media: List the caller's uploads
# - GET /media/{media_id}: One upload with its assessments
# - DELETE /media/{media_id}: Delete an upload
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth import get_current_user, AuthUser
from core.models.media import MediaDetail, MediaList, MediaUpload
from core.services.media_service import MediaService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=MediaList)
async def list_media(
    user: AuthUser = Depends(get_current_user),
):
    """
    List the caller's uploads, newest first.

    Each item carries file_size_label and can_analyze.
    """
    media = MediaService.list_media(user.id)

    return MediaList(
        media=[MediaUpload.model_validate(m) for m in media],
        total=len(media),
    )


@router.get("/{media_id}", response_model=MediaDetail)
async def get_media(
    media_id: str,
    user: AuthUser = Depends(get_current_user),
):
    """
    Get one upload and its assessment history.

    Each assessment carries its score band. 404 if the media isn't the caller's.
    """
    media = MediaService.get_media_with_assessments(media_id, user.id)
    return MediaDetail.model_validate(media)


@router.delete("/{media_id}")
async def delete_media(
    media_id: str,
    user: AuthUser = Depends(get_current_user),
):
    """
    Delete an upload and its stored file.

    Assessments of the upload are removed by the database (ON DELETE CASCADE).
    """
    media = MediaService.delete_media(media_id, user.id)

    return {
        "success": True,
        "id": str(media["id"]),
        "message": f"Deleted {media['file_name']}",
    }

# =============================================================================
# app/routers/upload.py - Media Upload Endpoint
# =============================================================================
# POST /api/upload (multipart: file, description, tags)
#
# Validates MIME type (video/mp4, video/mov, video/avi, image/jpeg,
# image/png, image/gif) and size (<= 50MB), stores the file in Supabase
# Storage and records a media_uploads row.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.auth import get_current_user, AuthUser
from app.config import settings
from core.models.media import UploadResponse, UploadResult
from core.services.media_service import MediaService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/upload", response_model=UploadResponse)
async def upload_media(
    user: AuthUser = Depends(get_current_user),
    file: Annotated[UploadFile | None, File(description="Video or image to upload")] = None,
    description: Annotated[str | None, Form(description="Optional description")] = None,
    tags: Annotated[str | None, Form(description='JSON list of up to 5 tags, e.g. ["training"]')] = None,
):
    """
    Upload a video or image.

    Returns {success, data: {id, fileName, fileUrl, fileType}}.

    Errors:
    - 400: no file, invalid file type, file too large, bad tags
    - 401: not authenticated
    - 500: storage or database failure
    """
    filename = file.filename if file else None
    content_type = file.content_type if file else None

    # Reject on the reported size before pulling the body into memory, and
    # never read past the limit when the size is unknown.
    if filename and file.size is not None:
        MediaService.validate_file(content_type, file.size)
    content = await file.read(settings.max_upload_size_bytes + 1) if file else b""

    media = MediaService.create_upload(
        user_id=user.id,
        filename=filename,
        content_type=content_type,
        content=content,
        description=description,
        tags=tags,
    )

    return UploadResponse(
        data=UploadResult(
            id=str(media["id"]),
            file_name=media["file_name"],
            file_url=media["file_url"],
            file_type=media["file_type"],
        )
    )

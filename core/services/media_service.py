# =============================================================================
# core/services/media_service.py - Media Upload Business Logic
# =============================================================================
# Validates uploads, stores the bytes, writes media_uploads rows, and serves
# the caller's media library. Ownership is checked on every read/delete.
# =============================================================================

import json
import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import is_valid_uuid
from core.models.media import MediaType
from core.services.storage_service import StorageService
from app.config import settings
from app.exceptions import (
    FileTooLargeError,
    InvalidFileTypeError,
    InvalidTagsError,
    MediaNotFoundError,
    MissingFieldError,
    PersistenceError,
)

logger = logging.getLogger(__name__)


class MediaService:
    """
    Service for media upload operations.

    Provides a clean interface between API routes and database/storage.
    """

    @staticmethod
    def validate_file(content_type: str | None, size_bytes: int) -> MediaType:
        """
        Check MIME type and size of an upload.

        Returns:
            The MediaType the file will be stored as

        Raises:
            InvalidFileTypeError: MIME type not in ALLOWED_MEDIA_TYPES
            FileTooLargeError: larger than MAX_UPLOAD_SIZE_MB
        """
        allowed = settings.allowed_media_types_list
        if not content_type or content_type.lower() not in allowed:
            raise InvalidFileTypeError(content_type, allowed)

        if size_bytes > settings.max_upload_size_bytes:
            raise FileTooLargeError(size_bytes, settings.max_upload_size_bytes)

        return MediaType.from_content_type(content_type.lower())

    @staticmethod
    def parse_tags(raw: str | None) -> list[str] | None:
        """
        Parse the tags form field (a JSON list of strings).

        Tags are trimmed, blanks dropped, duplicates removed keeping order.
        Returns None when no tags remain.

        Raises:
            InvalidTagsError: not a JSON list of strings, or too many tags
        """
        if raw is None or not raw.strip():
            return None

        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            raise InvalidTagsError("Tags must be a JSON list of strings")

        if not isinstance(parsed, list) or not all(isinstance(t, str) for t in parsed):
            raise InvalidTagsError("Tags must be a JSON list of strings")

        tags: list[str] = []
        for tag in parsed:
            tag = tag.strip()
            if tag and tag not in tags:
                tags.append(tag)

        if len(tags) > settings.MAX_TAGS:
            raise InvalidTagsError(f"At most {settings.MAX_TAGS} tags are allowed")

        return tags or None

    @staticmethod
    def create_upload(
        user_id: UUID | str,
        filename: str | None,
        content_type: str | None,
        content: bytes,
        description: str | None = None,
        tags: str | None = None,
    ) -> dict[str, Any]:
        """
        Validate, store and record one uploaded file.

        Args:
            user_id: Owner
            filename: Original filename
            content_type: MIME type reported by the client
            content: File bytes
            description: Optional free text
            tags: Raw tags field (JSON list)

        Returns:
            The inserted media_uploads row

        Raises:
            MissingFieldError, InvalidFileTypeError, FileTooLargeError,
            InvalidTagsError: 400 cases
            StorageUploadError, PersistenceError: 500 cases
        """
        if not filename:
            raise MissingFieldError("No file provided", field="file")

        media_type = MediaService.validate_file(content_type, len(content))
        parsed_tags = MediaService.parse_tags(tags)
        user_id_str = str(user_id)

        logger.info(f"Processing upload: {filename} ({len(content)} bytes, {content_type})")

        _, file_url = StorageService.upload_media(
            user_id=user_id_str,
            content=content,
            filename=filename,
            content_type=content_type,
        )

        try:
            media = SupabaseClient.insert_media({
                "user_id": user_id_str,
                "file_name": filename,
                "file_url": file_url,
                "file_type": media_type.value,
                "file_size": len(content),
                "description": (description or "").strip() or None,
                "tags": parsed_tags,
            })
        except SupabaseClientError as e:
            logger.error(f"Database error saving media {filename}: {e}")
            StorageService.delete_media(file_url)
            raise PersistenceError("Failed to save file metadata", cause=str(e))

        logger.info(f"Created media {media['id']} for user {user_id_str}")
        return media

    @staticmethod
    def list_media(user_id: UUID | str) -> list[dict[str, Any]]:
        """Return the caller's uploads, newest first."""
        try:
            return SupabaseClient.fetch_media_list(user_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to list media: {e}")
            raise PersistenceError("Failed to load media", cause=str(e))

    @staticmethod
    def get_media(media_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        """
        Get one upload owned by the caller.

        Raises:
            MediaNotFoundError: If missing or owned by someone else
        """
        if not is_valid_uuid(media_id):
            raise MediaNotFoundError(str(media_id))

        try:
            media = SupabaseClient.fetch_media(media_id, user_id=user_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to fetch media {media_id}: {e}")
            raise PersistenceError("Failed to load media", cause=str(e))

        if not media:
            # Don't reveal whether the media exists for another user
            raise MediaNotFoundError(str(media_id))

        return media

    @staticmethod
    def get_media_with_assessments(media_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        """Get an owned upload together with its assessments (newest first)."""
        media = MediaService.get_media(media_id, user_id)

        try:
            assessments = SupabaseClient.fetch_media_assessments(media_id, user_id=user_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to fetch assessments for media {media_id}: {e}")
            raise PersistenceError("Failed to load assessments", cause=str(e))

        return {**media, "assessments": assessments}

    @staticmethod
    def delete_media(media_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        """
        Delete an owned upload and its stored file.

        Returns:
            The deleted row

        Raises:
            MediaNotFoundError: If missing or owned by someone else
        """
        media = MediaService.get_media(media_id, user_id)

        try:
            SupabaseClient.delete_media(media_id, user_id=user_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to delete media {media_id}: {e}")
            raise PersistenceError("Failed to delete media", cause=str(e))

        StorageService.delete_media(media["file_url"])
        logger.info(f"Deleted media {media_id} for user {user_id}")
        return media

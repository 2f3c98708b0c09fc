# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Handles media file upload/removal with Supabase Storage.
# Objects live in the media bucket under {user_id}/{epoch_ms}.{ext}.
# =============================================================================

import logging
import time

from lib.supabase_client import SupabaseClient
from app.config import settings
from app.exceptions import StorageUploadError

logger = logging.getLogger(__name__)

PUBLIC_URL_MARKER = "/storage/v1/object/public/"

# A path taken by a concurrent upload in the same millisecond is retried
# with the next millisecond.
UPLOAD_ATTEMPTS = 2
DUPLICATE_MARKERS = ("already exists", "duplicate", "409")


class StorageService:
    """
    Service for Supabase Storage operations on uploaded media.
    """

    @staticmethod
    def build_path(user_id: str, filename: str, timestamp_ms: int | None = None) -> str:
        """
        Build the storage path for a new upload.

        Example:
            build_path("u1", "sprint.mp4", 1700000000000) -> "u1/1700000000000.mp4"
        """
        timestamp_ms = timestamp_ms or int(time.time() * 1000)
        ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else "bin"
        return f"{user_id}/{timestamp_ms}.{ext}"

    @staticmethod
    def upload_media(
        user_id: str,
        content: bytes,
        filename: str,
        content_type: str,
    ) -> tuple[str, str]:
        """
        Upload raw media bytes to storage.

        Args:
            user_id: Owner's user ID (first path segment)
            content: File bytes
            filename: Original filename (extension is kept)
            content_type: MIME type stored with the object

        Returns:
            Tuple of (storage path, public URL)

        Raises:
            StorageUploadError: If upload fails
        """
        client = SupabaseClient.get_client()
        bucket = client.storage.from_(settings.MEDIA_BUCKET)
        timestamp_ms = int(time.time() * 1000)

        for attempt in range(1, UPLOAD_ATTEMPTS + 1):
            path = StorageService.build_path(user_id, filename, timestamp_ms)
            try:
                bucket.upload(
                    path=path,
                    file=content,
                    file_options={"content-type": content_type, "upsert": "false"},
                )
                public_url = bucket.get_public_url(path)
                break

            except Exception as e:
                if attempt < UPLOAD_ATTEMPTS and StorageService.is_duplicate_error(e):
                    logger.warning(f"Storage path {path} taken, retrying: {e}")
                    timestamp_ms += 1
                    continue
                logger.error(f"Storage upload failed: {e}")
                raise StorageUploadError(str(e))

        logger.info(f"Uploaded media to storage: {path} ({len(content)} bytes)")
        return path, public_url

    @staticmethod
    def is_duplicate_error(error: Exception) -> bool:
        """True when storage rejected the upload because the path exists."""
        message = str(error).lower()
        return any(marker in message for marker in DUPLICATE_MARKERS)

    @staticmethod
    def path_from_url(file_url: str) -> str | None:
        """
        Recover the object path from a public URL of the media bucket.

        Returns None for URLs that don't point into the bucket.
        """
        prefix = f"{PUBLIC_URL_MARKER}{settings.MEDIA_BUCKET}/"
        if prefix not in file_url:
            return None
        path = file_url.split(prefix, 1)[1]
        return path.split("?", 1)[0] or None

    @staticmethod
    def delete_media(file_url: str) -> bool:
        """
        Remove the stored object behind a media URL.

        Best effort: a failure is logged and reported as False, the
        database row is the source of truth.
        """
        path = StorageService.path_from_url(file_url)
        if not path:
            return False

        client = SupabaseClient.get_client()

        try:
            client.storage.from_(settings.MEDIA_BUCKET).remove([path])
            logger.info(f"Deleted media from storage: {path}")
            return True

        except Exception as e:
            logger.error(f"Failed to delete media file {path}: {e}")
            return False

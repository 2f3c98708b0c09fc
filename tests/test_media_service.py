# =============================================================================
# tests/test_media_service.py - Media & Storage Service Tests
# =============================================================================
# Tests use mocked Supabase responses to avoid database calls.
# =============================================================================

from unittest.mock import MagicMock, patch

import pytest

from app.exceptions import (
    FileTooLargeError,
    InvalidFileTypeError,
    InvalidTagsError,
    MediaNotFoundError,
    MissingFieldError,
    PersistenceError,
    StorageUploadError,
)
from core.models.media import MediaType
from core.services.media_service import MediaService
from core.services.storage_service import StorageService
from lib.supabase_client import SupabaseClientError

from tests.conftest import MEDIA_ID, STORAGE_URL, USER_ID

MAX_BYTES = 50 * 1024 * 1024


# =============================================================================
# Validation
# =============================================================================

class TestValidateFile:
    """Test MIME type and size checks."""

    @pytest.mark.parametrize("content_type,media_type", [
        ("video/mp4", MediaType.VIDEO),
        ("video/mov", MediaType.VIDEO),
        ("video/avi", MediaType.VIDEO),
        ("image/jpeg", MediaType.IMAGE),
        ("image/png", MediaType.IMAGE),
        ("image/gif", MediaType.IMAGE),
    ])
    def test_allowed_types(self, content_type, media_type):
        assert MediaService.validate_file(content_type, 1024) is media_type

    @pytest.mark.parametrize("content_type", [
        "application/pdf",
        "video/webm",
        "image/webp",
        "text/plain",
        None,
        "",
    ])
    def test_rejected_types(self, content_type):
        with pytest.raises(InvalidFileTypeError) as exc_info:
            MediaService.validate_file(content_type, 1024)

        assert exc_info.value.status_code == 400
        assert exc_info.value.to_dict() == {"error": "Invalid file type"}

    def test_exactly_max_size_is_allowed(self):
        assert MediaService.validate_file("video/mp4", MAX_BYTES) is MediaType.VIDEO

    def test_over_max_size(self):
        with pytest.raises(FileTooLargeError) as exc_info:
            MediaService.validate_file("video/mp4", MAX_BYTES + 1)

        assert exc_info.value.status_code == 400
        assert exc_info.value.to_dict() == {"error": "File too large"}


class TestParseTags:
    """Test the tags form field."""

    def test_empty(self):
        assert MediaService.parse_tags(None) is None
        assert MediaService.parse_tags("") is None
        assert MediaService.parse_tags("[]") is None

    def test_trim_and_dedupe(self):
        raw = '[" training ", "speed", "training", ""]'
        assert MediaService.parse_tags(raw) == ["training", "speed"]

    def test_five_tags_allowed(self):
        raw = '["a", "b", "c", "d", "e"]'
        assert MediaService.parse_tags(raw) == ["a", "b", "c", "d", "e"]

    def test_too_many_tags(self):
        with pytest.raises(InvalidTagsError):
            MediaService.parse_tags('["a", "b", "c", "d", "e", "f"]')

    @pytest.mark.parametrize("raw", ["not json", '{"a": 1}', "[1, 2]", '"training"'])
    def test_malformed(self, raw):
        with pytest.raises(InvalidTagsError):
            MediaService.parse_tags(raw)


# =============================================================================
# Upload
# =============================================================================

class TestCreateUpload:
    """Test the upload flow with storage and database mocked."""

    @pytest.fixture
    def mock_storage(self):
        with patch.object(StorageService, "upload_media") as upload, \
                patch.object(StorageService, "delete_media") as delete:
            upload.return_value = (
                f"{USER_ID}/1705312800000.mp4",
                f"{STORAGE_URL}/{USER_ID}/1705312800000.mp4",
            )
            yield {"upload": upload, "delete": delete}

    def test_no_file(self, mock_db, mock_storage):
        with pytest.raises(MissingFieldError) as exc_info:
            MediaService.create_upload(USER_ID, None, None, b"")

        assert exc_info.value.message == "No file provided"
        mock_storage["upload"].assert_not_called()

    def test_invalid_type_stores_nothing(self, mock_db, mock_storage):
        with pytest.raises(InvalidFileTypeError):
            MediaService.create_upload(USER_ID, "notes.pdf", "application/pdf", b"%PDF")

        mock_storage["upload"].assert_not_called()
        mock_db["insert_media"].assert_not_called()

    def test_success(self, mock_db, mock_storage, sample_video_row):
        mock_db["insert_media"].return_value = sample_video_row

        media = MediaService.create_upload(
            USER_ID,
            "sprint.mp4",
            "video/mp4",
            b"\x00" * 100,
            description="  Sprint drill ",
            tags='["training"]',
        )

        assert media == sample_video_row
        inserted = mock_db["insert_media"].call_args.args[0]
        assert inserted["user_id"] == USER_ID
        assert inserted["file_type"] == "video"
        assert inserted["file_size"] == 100
        assert inserted["description"] == "Sprint drill"
        assert inserted["tags"] == ["training"]
        assert inserted["file_url"].endswith("/1705312800000.mp4")

    def test_db_failure_removes_stored_file(self, mock_db, mock_storage):
        mock_db["insert_media"].side_effect = SupabaseClientError("insert failed")

        with pytest.raises(PersistenceError) as exc_info:
            MediaService.create_upload(USER_ID, "sprint.mp4", "video/mp4", b"\x00")

        assert exc_info.value.status_code == 500
        assert exc_info.value.to_dict() == {"error": "Failed to save file metadata"}
        mock_storage["delete"].assert_called_once()


# =============================================================================
# Reads
# =============================================================================

class TestGetMedia:
    def test_owned(self, mock_db, sample_video_row):
        mock_db["fetch_media"].return_value = sample_video_row

        assert MediaService.get_media(MEDIA_ID, USER_ID) == sample_video_row
        mock_db["fetch_media"].assert_called_once_with(MEDIA_ID, user_id=USER_ID)

    def test_not_owned_is_not_found(self, mock_db):
        mock_db["fetch_media"].return_value = None

        with pytest.raises(MediaNotFoundError):
            MediaService.get_media(MEDIA_ID, USER_ID)

    def test_malformed_id_skips_query(self, mock_db):
        with pytest.raises(MediaNotFoundError):
            MediaService.get_media("not-a-uuid", USER_ID)

        mock_db["fetch_media"].assert_not_called()

    def test_delete(self, mock_db, sample_video_row):
        mock_db["fetch_media"].return_value = sample_video_row

        with patch.object(StorageService, "delete_media") as delete_file:
            MediaService.delete_media(MEDIA_ID, USER_ID)

        mock_db["delete_media"].assert_called_once_with(MEDIA_ID, user_id=USER_ID)
        delete_file.assert_called_once_with(sample_video_row["file_url"])


# =============================================================================
# Storage
# =============================================================================

class TestStorageService:
    """Test storage paths and the Supabase Storage calls."""

    def test_build_path(self):
        assert StorageService.build_path(USER_ID, "Sprint.MP4", 1700000000000) == f"{USER_ID}/1700000000000.mp4"
        assert StorageService.build_path(USER_ID, "noext", 1) == f"{USER_ID}/1.bin"

    def test_path_from_url(self):
        url = f"{STORAGE_URL}/{USER_ID}/1700000000000.mp4?download=1"

        assert StorageService.path_from_url(url) == f"{USER_ID}/1700000000000.mp4"
        assert StorageService.path_from_url("https://elsewhere.com/a.mp4") is None

    def test_upload(self, mock_db):
        bucket = MagicMock()
        bucket.get_public_url.return_value = "https://public/url.mp4"
        mock_db["get_client"].return_value.storage.from_.return_value = bucket

        path, url = StorageService.upload_media(USER_ID, b"abc", "a.mp4", "video/mp4")

        assert path.startswith(f"{USER_ID}/") and path.endswith(".mp4")
        assert url == "https://public/url.mp4"
        mock_db["get_client"].return_value.storage.from_.assert_called_with("media")
        assert bucket.upload.call_args.kwargs["file_options"]["content-type"] == "video/mp4"

    def test_upload_failure(self, mock_db):
        bucket = mock_db["get_client"].return_value.storage.from_.return_value
        bucket.upload.side_effect = RuntimeError("bucket missing")

        with pytest.raises(StorageUploadError):
            StorageService.upload_media(USER_ID, b"abc", "a.mp4", "video/mp4")

    def test_upload_retries_taken_path(self, mock_db):
        bucket = mock_db["get_client"].return_value.storage.from_.return_value
        bucket.upload.side_effect = [Exception("The resource already exists"), None]
        bucket.get_public_url.return_value = "https://public/url.mp4"

        with patch("core.services.storage_service.time.time", return_value=1700000000.0):
            path, url = StorageService.upload_media(USER_ID, b"abc", "a.mp4", "video/mp4")

        attempted = [c.kwargs["path"] for c in bucket.upload.call_args_list]
        assert attempted == [f"{USER_ID}/1700000000000.mp4", f"{USER_ID}/1700000000001.mp4"]
        assert path == attempted[1]
        bucket.get_public_url.assert_called_once_with(path)

    def test_upload_gives_up_after_second_collision(self, mock_db):
        bucket = mock_db["get_client"].return_value.storage.from_.return_value
        bucket.upload.side_effect = Exception("Duplicate")

        with pytest.raises(StorageUploadError):
            StorageService.upload_media(USER_ID, b"abc", "a.mp4", "video/mp4")

        assert bucket.upload.call_count == 2

    def test_upload_failure_is_not_retried(self, mock_db):
        bucket = mock_db["get_client"].return_value.storage.from_.return_value
        bucket.upload.side_effect = RuntimeError("bucket missing")

        with pytest.raises(StorageUploadError):
            StorageService.upload_media(USER_ID, b"abc", "a.mp4", "video/mp4")

        assert bucket.upload.call_count == 1

    def test_delete_is_best_effort(self, mock_db):
        bucket = mock_db["get_client"].return_value.storage.from_.return_value
        bucket.remove.side_effect = RuntimeError("gone")

        assert StorageService.delete_media(f"{STORAGE_URL}/{USER_ID}/1.mp4") is False

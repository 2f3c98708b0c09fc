# =============================================================================
# core/models/media.py - Media Upload Schemas
# =============================================================================
# - MediaType: video or image (derived from the upload's MIME type)
# - MediaUpload: a row of the media_uploads table
# - MediaDetail: an upload with its assessment history
# - UploadResult / UploadResponse: what POST /api/upload returns
# =============================================================================

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .assessment import Assessment


class MediaType(str, Enum):
    """Kind of uploaded file. Only videos can be analyzed."""
    VIDEO = "video"
    IMAGE = "image"

    @classmethod
    def from_content_type(cls, content_type: str) -> "MediaType":
        return cls.VIDEO if content_type.startswith("video") else cls.IMAGE


def format_file_size(size_bytes: int | None) -> str:
    """Human readable size, e.g. 1536 -> "1.5 KB"."""
    if not size_bytes:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    value = float(size_bytes)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    return f"{round(value, 2):g} {units[index]}"


class MediaUpload(BaseModel):
    """A row of the media_uploads table."""
    id: UUID
    user_id: UUID
    file_name: str
    file_url: str
    file_type: MediaType
    file_size: int | None = None
    upload_date: datetime | None = None
    description: str | None = None
    tags: list[str] | None = None

    @computed_field
    @property
    def can_analyze(self) -> bool:
        return self.file_type is MediaType.VIDEO

    @computed_field
    @property
    def file_size_label(self) -> str:
        return format_file_size(self.file_size)


class MediaList(BaseModel):
    media: list[MediaUpload]
    total: int


class MediaDetail(MediaUpload):
    """An upload with its assessments, newest first."""
    assessments: list[Assessment] = Field(default_factory=list)


class UploadResult(BaseModel):
    """Camel-cased summary of a stored upload."""
    id: str
    file_name: str = Field(..., alias="fileName")
    file_url: str = Field(..., alias="fileUrl")
    file_type: MediaType = Field(..., alias="fileType")

    model_config = ConfigDict(populate_by_name=True)


class UploadResponse(BaseModel):
    """Response of POST /api/upload."""
    success: bool = True
    data: UploadResult

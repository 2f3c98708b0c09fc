# =============================================================================
# core/models/assessment.py - Assessment Schemas
# =============================================================================
# An assessment is the persisted result of one analysis run against a video.
# It is written once by POST /api/analyze and never modified.
# =============================================================================

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, computed_field

from core.scoring import ScoreBand, score_band


class AnalyzeRequest(BaseModel):
    """
    Body of POST /api/analyze.

    mediaId is optional at the schema level so a missing value is reported
    as a plain 400 by the service instead of a schema error.

    Example:
        {"mediaId": "550e8400-e29b-41d4-a716-446655440000", "analysisType": "comprehensive"}
    """
    media_id: str | None = Field(default=None, alias="mediaId")
    analysis_type: str | None = Field(default=None, alias="analysisType", max_length=64)

    model_config = ConfigDict(populate_by_name=True)


class Assessment(BaseModel):
    """A row of the assessments table."""
    id: UUID
    user_id: UUID
    media_id: UUID
    assessment_type: str
    results: dict[str, Any] = Field(default_factory=dict)
    score: int | None = None
    recommendations: list[str] = Field(default_factory=list)
    created_at: datetime | None = None

    @computed_field
    @property
    def band(self) -> ScoreBand:
        return score_band(self.score)


class AnalyzeResponse(BaseModel):
    """Response of POST /api/analyze."""
    success: bool = True
    assessment: Assessment

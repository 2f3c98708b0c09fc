# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    Authenticated user extracted from Supabase JWT.

    This is the minimal user info available from the token itself,
    without querying the database.
    """
    id: UUID
    email: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class UserResponse(BaseModel):
    """
    Current user with the display fields of their profile.
    """
    id: UUID
    email: Optional[str] = None
    full_name: Optional[str] = None
    sport: Optional[str] = None
    profile_image_url: Optional[str] = None
    initials: str = ""
    has_profile: bool = False

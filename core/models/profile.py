# =============================================================================
# core/models/profile.py - Athlete Profile Schemas
# =============================================================================
# These models define the API contract for profile operations:
# - Profile: a row of the profiles table (one per user)
# - ProfileUpdate: what the client sends when saving the profile form
# - ProfileStats: counters shown next to the profile
#
# The sports catalog below is the closed list the profile form offers.
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator


SPORTS_POSITIONS: dict[str, list[str]] = {
    "Basketball": ["Point Guard", "Shooting Guard", "Small Forward", "Power Forward", "Center"],
    "Soccer": ["Goalkeeper", "Defender", "Midfielder", "Forward", "Winger"],
    "Track and Field": ["Sprinter", "Distance Runner", "Jumper", "Thrower", "Hurdler"],
    "Tennis": ["Singles Player", "Doubles Player"],
    "Baseball": ["Pitcher", "Catcher", "Infielder", "Outfielder"],
    "Volleyball": ["Setter", "Outside Hitter", "Middle Blocker", "Libero", "Opposite"],
    "Swimming": ["Freestyle", "Backstroke", "Breaststroke", "Butterfly", "Individual Medley"],
    "Wrestling": ["Lightweight", "Middleweight", "Heavyweight"],
    "Cross Country": ["Distance Runner"],
    "Other": ["Athlete"],
}

MIN_AGE = 13
MAX_AGE = 30


class Profile(BaseModel):
    """
    A row of the profiles table.

    `id` equals the Supabase auth user id.
    """
    id: UUID
    email: str | None = None
    full_name: str | None = None
    sport: str | None = None
    position: str | None = None
    age: int | None = None
    location: str | None = None
    bio: str | None = None
    profile_image_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def initials(self) -> str:
        """Avatar fallback: initials of the full name, else first email letter."""
        if self.full_name:
            return "".join(part[0] for part in self.full_name.split() if part).upper()
        if self.email:
            return self.email[0].upper()
        return ""


class ProfileUpdate(BaseModel):
    """
    Schema for saving the profile form.

    Example:
        {
            "full_name": "Jordan Lee",
            "sport": "Basketball",
            "position": "Point Guard",
            "age": 17,
            "location": "Austin, TX",
            "bio": "Varsity guard working on my jump shot."
        }
    """

    full_name: str = Field(..., min_length=1, max_length=120)
    sport: str | None = Field(default=None, description="One of the sports catalog entries")
    position: str | None = Field(default=None, description="A position valid for the chosen sport")
    age: int | None = Field(default=None, ge=MIN_AGE, le=MAX_AGE)
    location: str | None = Field(default=None, max_length=120)
    bio: str | None = Field(default=None, max_length=2000)

    @field_validator("full_name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("full_name must not be blank")
        return value

    @field_validator("sport", "position", "location", "bio", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        # The form submits "" for untouched fields
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def check_sport_position(self) -> "ProfileUpdate":
        if self.sport is not None and self.sport not in SPORTS_POSITIONS:
            raise ValueError(f"Unknown sport: {self.sport}")
        if self.position is not None:
            if self.sport is None:
                raise ValueError("position requires a sport")
            if self.position not in SPORTS_POSITIONS[self.sport]:
                raise ValueError(f"{self.position} is not a {self.sport} position")
        return self


class ProfileStats(BaseModel):
    """Counters shown on the profile page."""
    media_count: int = 0
    completed_challenges: int = 0
    assessment_count: int = 0
    member_since: datetime | None = None


class SportOption(BaseModel):
    """One sport with its positions, for populating the profile form."""
    sport: str
    positions: list[str]

# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Sample database rows for every table
# - A patched SupabaseClient so no test talks to a real project
# - A TestClient with authentication overridden
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-with-enough-length-for-hs256")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("ANALYSIS_DELAY_SECONDS", "0")

from unittest.mock import DEFAULT, MagicMock, patch
from uuid import UUID

import pytest


USER_ID = "11111111-1111-4111-8111-111111111111"
OTHER_USER_ID = "22222222-2222-4222-8222-222222222222"
MEDIA_ID = "33333333-3333-4333-8333-333333333333"
ASSESSMENT_ID = "44444444-4444-4444-8444-444444444444"
CHALLENGE_ID = "55555555-5555-4555-8555-555555555555"
MEMBERSHIP_ID = "66666666-6666-4666-8666-666666666666"

STORAGE_URL = "https://test-project.supabase.co/storage/v1/object/public/media"

# Every data-access method the services call
DB_METHODS = (
    "count_rows",
    "fetch_profile",
    "upsert_profile",
    "fetch_media",
    "fetch_media_list",
    "insert_media",
    "delete_media",
    "fetch_assessments",
    "fetch_media_assessments",
    "insert_assessment",
    "fetch_open_challenges",
    "fetch_challenge",
    "fetch_joined_challenge_ids",
    "fetch_user_challenge",
    "fetch_user_challenges",
    "insert_user_challenge",
    "update_user_challenge",
)


# =============================================================================
# Sample Rows
# =============================================================================

@pytest.fixture
def sample_profile_row():
    """A saved profile."""
    return {
        "id": USER_ID,
        "email": "jordan@example.com",
        "full_name": "Jordan Lee",
        "sport": "Basketball",
        "position": "Point Guard",
        "age": 17,
        "location": "Austin, TX",
        "bio": "Varsity guard.",
        "profile_image_url": None,
        "created_at": "2024-01-10T09:00:00+00:00",
        "updated_at": "2024-01-12T09:00:00+00:00",
    }


@pytest.fixture
def sample_video_row():
    """A video upload owned by USER_ID."""
    return {
        "id": MEDIA_ID,
        "user_id": USER_ID,
        "file_name": "sprint.mp4",
        "file_url": f"{STORAGE_URL}/{USER_ID}/1705312800000.mp4",
        "file_type": "video",
        "file_size": 5 * 1024 * 1024,
        "upload_date": "2024-01-15T10:00:00+00:00",
        "description": "Sprint drill",
        "tags": ["training", "speed"],
    }


@pytest.fixture
def sample_image_row(sample_video_row):
    """An image upload owned by USER_ID."""
    return {
        **sample_video_row,
        "file_name": "stance.png",
        "file_url": f"{STORAGE_URL}/{USER_ID}/1705312800001.png",
        "file_type": "image",
        "file_size": 2048,
        "description": None,
        "tags": None,
    }


@pytest.fixture
def sample_assessment_row():
    """A stored comprehensive assessment."""
    return {
        "id": ASSESSMENT_ID,
        "user_id": USER_ID,
        "media_id": MEDIA_ID,
        "assessment_type": "comprehensive",
        "results": {
            "posture": {"score": 86, "keyPoints": [], "recommendations": []},
            "technique": {"score": 80, "keyPoints": [], "recommendations": []},
            "performance": {"score": 84, "metrics": [], "insights": []},
        },
        "score": 83,
        "recommendations": [
            "Focus on hip alignment and core engagement",
            "Increase range of motion through targeted stretching",
            "Practice balance and coordination exercises",
        ],
        "created_at": "2024-01-15T10:05:00+00:00",
    }


@pytest.fixture
def sample_challenge_row():
    """An open challenge."""
    return {
        "id": CHALLENGE_ID,
        "title": "30-Day Sprint Challenge",
        "description": "Improve your 40-yard dash time.",
        "sport": "Track and Field",
        "difficulty_level": "intermediate",
        "requirements": ["Record a timed 40-yard dash", "Submit weekly"],
        "reward_points": 150,
        "created_at": "2024-01-01T00:00:00+00:00",
        "expires_at": "2099-01-01T00:00:00+00:00",
    }


@pytest.fixture
def sample_membership_row():
    """USER_ID's active membership in the sample challenge."""
    return {
        "id": MEMBERSHIP_ID,
        "user_id": USER_ID,
        "challenge_id": CHALLENGE_ID,
        "status": "active",
        "submission_media_id": None,
        "completed_at": None,
        "points_earned": 0,
        "created_at": "2024-01-16T08:00:00+00:00",
    }


# =============================================================================
# Patched Data Access
# =============================================================================

@pytest.fixture
def mock_db():
    """
    Replace every SupabaseClient data-access method with a MagicMock.

    Yields a dict of method name -> mock. get_client is replaced too, and
    its mock is available as mock_db["get_client"].
    """
    from lib.supabase_client import SupabaseClient

    with patch.multiple(
        SupabaseClient,
        get_client=DEFAULT,
        **{name: DEFAULT for name in DB_METHODS},
    ) as mocks:
        mocks["get_client"].return_value = MagicMock()
        mocks["fetch_joined_challenge_ids"].return_value = set()
        mocks["fetch_media_assessments"].return_value = []
        mocks["fetch_assessments"].return_value = []
        mocks["fetch_media_list"].return_value = []
        mocks["count_rows"].return_value = 0
        yield mocks


# =============================================================================
# API Client
# =============================================================================

@pytest.fixture
def auth_user():
    from app.auth.models import AuthUser

    return AuthUser(id=UUID(USER_ID), email="jordan@example.com")


@pytest.fixture
def client(auth_user):
    """TestClient whose requests are authenticated as USER_ID."""
    from fastapi.testclient import TestClient

    from app.auth.dependencies import get_current_user
    from app.main import app

    app.dependency_overrides[get_current_user] = lambda: auth_user
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client():
    """TestClient with the real authentication dependency."""
    from fastapi.testclient import TestClient

    from app.main import app

    app.dependency_overrides.clear()
    with TestClient(app) as test_client:
        yield test_client

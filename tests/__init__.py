# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the SportsHub API:
# - test_scoring.py / test_analysis.py: pure scoring and mock analysis
# - test_models.py: Pydantic validation and the membership state machine
# - test_media_service.py: upload validation and storage
# - test_supabase_client.py: query construction
# - test_auth.py: JWT verification
# - test_api.py: endpoints through TestClient
#
# Run tests with: pytest
# =============================================================================

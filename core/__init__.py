# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic:
# - models/: Pydantic schemas for data validation
# - scoring.py: pure score aggregation and banding
# - analysis.py: mock video analysis generator
# - services/: Supabase-backed operations used by the routers
#
# Code in this package should NOT import from FastAPI routers.
# This keeps the logic testable and reusable.
# =============================================================================

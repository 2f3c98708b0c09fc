# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - upload.py: Media upload endpoint
# - analyze.py: Video analysis endpoint
# - media.py: Media library endpoints
# - profile.py: Athlete profile endpoints
# - dashboard.py: Dashboard aggregates
# - challenges.py: Challenge listing, joining and entries
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import upload
from . import analyze
from . import media
from . import profile
from . import dashboard
from . import challenges

__all__ = [
    "health",
    "upload",
    "analyze",
    "media",
    "profile",
    "dashboard",
    "challenges",
]

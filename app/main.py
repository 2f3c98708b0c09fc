# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the SportsHub API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    SportsHubException,
    sportshub_exception_handler,
    validation_exception_handler,
)
from app.routers import health, upload, analyze, media, profile, dashboard, challenges
from app.routers.health import API_VERSION
from app.auth import routes as auth_routes

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    The Supabase client is created lazily on first use, so there is nothing
    to open or close here beyond logging.
    """
    logger.info(f"Starting SportsHub API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    yield

    logger.info("Shutting down SportsHub API")


# Create FastAPI application
app = FastAPI(
    title="SportsHub API",
    description="""
## Athlete Media & Assessment API

SportsHub lets athletes upload training videos and photos, get an AI
assessment of their form, track progress on a dashboard, and join challenges.

### How It Works

1. **Sign in** with Supabase Auth and send the access token as `Authorization: Bearer <token>`
2. **Upload** a video or image (`POST /api/upload`)
3. **Analyze** a video (`POST /api/analyze`) to get posture, technique and performance scores
4. **Track** progress on the dashboard and join challenges

### Scores

| Band | Range |
|------|-------|
| **good** | 85 and above |
| **warning** | 70 - 84 |
| **critical** | below 70 |

Errors are always returned as `{"error": "<message>"}`.
""",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Verify tokens and read the current user",
        },
        {
            "name": "Upload",
            "description": "Upload videos and images",
        },
        {
            "name": "Analyze",
            "description": "Run the AI assessment on a video",
        },
        {
            "name": "Media",
            "description": "Browse and delete uploads",
        },
        {
            "name": "Profile",
            "description": "Athlete profile",
        },
        {
            "name": "Dashboard",
            "description": "Stats, recent activity and insights",
        },
        {
            "name": "Challenges",
            "description": "Browse, join and submit to challenges",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(SportsHubException)
async def handle_sportshub_exception(request: Request, exc: SportsHubException):
    """Handle custom SportsHub exceptions."""
    return await sportshub_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    """Malformed bodies and params are plain 400s."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix="/api/auth",
    tags=["Auth"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api",
    tags=["Health"]
)

# Media upload endpoint
app.include_router(
    upload.router,
    prefix="/api",
    tags=["Upload"]
)

# Video analysis endpoint
app.include_router(
    analyze.router,
    prefix="/api",
    tags=["Analyze"]
)

# Media library endpoints
app.include_router(
    media.router,
    prefix="/api/media",
    tags=["Media"]
)

# Profile endpoints
app.include_router(
    profile.router,
    prefix="/api/profile",
    tags=["Profile"]
)

# Dashboard endpoints
app.include_router(
    dashboard.router,
    prefix="/api/dashboard",
    tags=["Dashboard"]
)

# Challenge endpoints
app.include_router(
    challenges.router,
    prefix="/api/challenges",
    tags=["Challenges"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "SportsHub API",
        "version": API_VERSION,
        "docs": "/docs",
        "health": "/api/health",
    }

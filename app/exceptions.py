# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
#
# Every error leaves the API as {"error": "<message>"} with one of:
#   401 Unauthorized, 400 invalid request, 404 not found, 500 server error.
# Machine codes stay server-side (logs only).
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class SportsHubException(Exception):
    """
    Base exception for the SportsHub API.

    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "SPORTSHUB_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return {"error": self.message}


# =============================================================================
# Authentication
# =============================================================================

class UnauthorizedError(SportsHubException):
    """Raised when the request carries no valid Supabase session."""

    def __init__(self, reason: str | None = None):
        super().__init__(
            message="Unauthorized",
            code="UNAUTHORIZED",
            status_code=401,
            details={"reason": reason} if reason else None,
        )


# =============================================================================
# Validation (400)
# =============================================================================

class InvalidRequestError(SportsHubException):
    """Raised when a request is missing data or carries disallowed values."""

    def __init__(self, message: str, code: str = "INVALID_REQUEST", details: dict[str, Any] | None = None):
        super().__init__(message=message, code=code, status_code=400, details=details)


class MissingFieldError(InvalidRequestError):
    """Raised when a required request field is absent."""

    def __init__(self, message: str, field: str):
        super().__init__(message, code="MISSING_FIELD", details={"field": field})


class InvalidFileTypeError(InvalidRequestError):
    """Raised when uploaded file MIME type is not allowed."""

    def __init__(self, content_type: str | None, allowed: list[str]):
        super().__init__(
            "Invalid file type",
            code="INVALID_FILE_TYPE",
            details={"content_type": content_type, "allowed_types": allowed},
        )


class FileTooLargeError(InvalidRequestError):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, size_bytes: int, max_bytes: int):
        super().__init__(
            "File too large",
            code="FILE_TOO_LARGE",
            details={"size_bytes": size_bytes, "max_bytes": max_bytes},
        )


class InvalidTagsError(InvalidRequestError):
    """Raised when the tags field is malformed or has too many entries."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_TAGS")


class MediaNotAnalyzableError(InvalidRequestError):
    """Raised when analysis is requested for a non-video upload."""

    def __init__(self, media_id: str):
        super().__init__(
            "Only video files can be analyzed",
            code="MEDIA_NOT_ANALYZABLE",
            details={"media_id": media_id},
        )


class ChallengeAlreadyJoinedError(InvalidRequestError):
    """Raised when a user joins a challenge they are already a member of."""

    def __init__(self, challenge_id: str):
        super().__init__(
            "Challenge already joined",
            code="CHALLENGE_ALREADY_JOINED",
            details={"challenge_id": challenge_id},
        )


class ChallengeExpiredError(InvalidRequestError):
    """Raised when joining a challenge past its expiry."""

    def __init__(self, challenge_id: str):
        super().__init__(
            "Challenge has expired",
            code="CHALLENGE_EXPIRED",
            details={"challenge_id": challenge_id},
        )


class InvalidChallengeTransitionError(InvalidRequestError):
    """Raised when a membership status change is not allowed."""

    def __init__(self, current: str, target: str):
        super().__init__(
            f"Cannot move challenge from {current} to {target}",
            code="INVALID_CHALLENGE_TRANSITION",
            details={"current": current, "target": target},
        )


# =============================================================================
# Not Found (404)
# =============================================================================

class MediaNotFoundError(SportsHubException):
    """Raised when a media upload doesn't exist or belongs to someone else."""

    def __init__(self, media_id: str):
        super().__init__(
            message="Media file not found",
            code="MEDIA_NOT_FOUND",
            status_code=404,
            details={"media_id": media_id},
        )


class ChallengeNotFoundError(SportsHubException):
    """Raised when a challenge ID doesn't exist."""

    def __init__(self, challenge_id: str):
        super().__init__(
            message="Challenge not found",
            code="CHALLENGE_NOT_FOUND",
            status_code=404,
            details={"challenge_id": challenge_id},
        )


class MembershipNotFoundError(SportsHubException):
    """Raised when the user has not joined the challenge."""

    def __init__(self, challenge_id: str):
        super().__init__(
            message="You have not joined this challenge",
            code="MEMBERSHIP_NOT_FOUND",
            status_code=404,
            details={"challenge_id": challenge_id},
        )


# =============================================================================
# Persistence (500)
# =============================================================================

class PersistenceError(SportsHubException):
    """
    Raised when Supabase rejects a write or read.

    The message is generic; the underlying cause only goes to the log.
    """

    def __init__(self, message: str, cause: str | None = None):
        super().__init__(
            message=message,
            code="PERSISTENCE_ERROR",
            status_code=500,
            details={"cause": cause} if cause else None,
        )


class StorageUploadError(PersistenceError):
    """Raised when file upload to storage fails."""

    def __init__(self, cause: str):
        super().__init__("Failed to upload file", cause=cause)


# =============================================================================
# Exception Handlers
# =============================================================================

def format_validation_errors(errors) -> str:
    """Describe the first validation error, e.g. "Invalid request: age Input should be ..."."""
    message = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        detail = " ".join(part for part in (location, first.get("msg", "")) if part)
        message = f"Invalid request: {detail}" if detail else message
    return message


async def sportshub_exception_handler(
    request: Request,
    exc: SportsHubException
) -> JSONResponse:
    """Convert SportsHubException to a JSON {"error"} response."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.url.path}: {exc.message} {exc.details}")
    else:
        logger.info(f"{exc.code} on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    Reports the first offending field as a plain 400 message.
    """
    message = format_validation_errors(exc.errors())
    logger.info(f"VALIDATION_ERROR on {request.url.path}: {message}")
    return JSONResponse(
        status_code=400,
        content={"error": message}
    )

# =============================================================================
# app/dependencies.py - Shared Route Helpers
# =============================================================================
# JSON bodies of authenticated POST routes are read inside the handler, after
# Depends(get_current_user) has run. A body declared as a route parameter is
# parsed by FastAPI before dependencies, so a malformed body from an
# unauthenticated caller would surface as 400 instead of 401.
#
# Usage:
#   @router.post("/analyze")
#   async def analyze(request: Request, user: AuthUser = Depends(get_current_user)):
#       body = await read_json_body(request, AnalyzeRequest)
# =============================================================================

from typing import TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from app.exceptions import InvalidRequestError, format_validation_errors

ModelT = TypeVar("ModelT", bound=BaseModel)


async def read_json_body(request: Request, model: type[ModelT]) -> ModelT:
    """
    Parse the request body into `model`.

    An empty body yields `model()` so missing fields are reported by the
    service with its own message.

    Raises:
        InvalidRequestError: body is not valid JSON or doesn't fit the model
    """
    raw = await request.body()
    if not raw.strip():
        return model()

    try:
        return model.model_validate_json(raw)
    except ValidationError as e:
        raise InvalidRequestError(format_validation_errors(e.errors()))


def json_body_schema(model: type[BaseModel]) -> dict:
    """openapi_extra documenting a body that is read by read_json_body."""
    return {
        "requestBody": {
            "content": {
                "application/json": {"schema": model.model_json_schema(by_alias=True)},
            },
        },
    }

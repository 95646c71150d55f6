from __future__ import annotations

from fastapi.responses import JSONResponse

from recipe_proxy.models import ErrorResponse

NO_CONTENT_MESSAGE = "No prompt or image data provided."
UPSTREAM_FAILURE_MESSAGE = "Failed to generate content. Check server logs."
MALFORMED_BODY_MESSAGE = "Malformed request body."
BODY_TOO_LARGE_MESSAGE = "Request body too large."
NOT_FOUND_MESSAGE = "Not found."


def error_response(status_code: int, message: str) -> JSONResponse:
    """Wrap *message* in the ``{"error": {"message": ...}}`` envelope."""

    return JSONResponse(status_code=status_code, content=ErrorResponse.of(message).model_dump())

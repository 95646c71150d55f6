"""Request body size cap.

Inline images arrive base64-encoded inside the JSON body, so the cap is
generous (50 MB by default) but still bounded. Requests announcing a larger
``Content-Length`` are refused before the body is read; bodies sent without
the header are counted while they stream in.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from .responses import BODY_TOO_LARGE_MESSAGE, MALFORMED_BODY_MESSAGE, error_response

logger = logging.getLogger(__name__)


class BodyLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, *, max_body_bytes: int) -> None:
        super().__init__(app)
        self.max_body_bytes = max_body_bytes

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint):
        declared = request.headers.get("content-length")
        if declared is not None:
            try:
                length = int(declared)
            except ValueError:
                logger.warning("Bad Content-Length header on %s: %r", request.url.path, declared)
                return error_response(400, MALFORMED_BODY_MESSAGE)
            if length > self.max_body_bytes:
                logger.warning(
                    "Rejected %s %s: body of %d bytes exceeds limit of %d",
                    request.method,
                    request.url.path,
                    length,
                    self.max_body_bytes,
                )
                return error_response(413, BODY_TOO_LARGE_MESSAGE)
        return await call_next(request)


async def read_limited_body(request: Request, max_body_bytes: int) -> Optional[bytes]:
    """Read the request body chunk by chunk.

    Returns None as soon as more than *max_body_bytes* have arrived, leaving
    the rest of the stream unread.
    """

    received = bytearray()
    async for chunk in request.stream():
        received.extend(chunk)
        if len(received) > max_body_bytes:
            logger.warning(
                "Rejected %s %s: streamed body exceeds limit of %d",
                request.method,
                request.url.path,
                max_body_bytes,
            )
            return None
    return bytes(received)

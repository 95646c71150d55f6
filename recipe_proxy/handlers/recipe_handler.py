"""Proxy endpoint forwarding prompts and images to the generation API."""
from __future__ import annotations

import json
import logging
import re
from typing import Any
from urllib.parse import parse_qsl

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from recipe_proxy.models import RecipeRequest
from recipe_proxy.services.genai import GenerationProvider
from recipe_proxy.utils.body_limit import read_limited_body
from recipe_proxy.utils.responses import (
    BODY_TOO_LARGE_MESSAGE,
    MALFORMED_BODY_MESSAGE,
    NO_CONTENT_MESSAGE,
    UPSTREAM_FAILURE_MESSAGE,
    error_response,
)

router = APIRouter()
logger = logging.getLogger(__name__)

_FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
_NESTED_KEY = re.compile(r"^(\w+)\[(\w+)\]$")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def get_generation_provider(request: Request) -> GenerationProvider:
    return request.app.state.provider


def parse_form_body(raw: bytes) -> dict[str, Any]:
    """Decode a urlencoded body, expanding ``image[data]`` style keys."""

    payload: dict[str, Any] = {}
    for key, value in parse_qsl(raw.decode("utf-8"), keep_blank_values=True):
        match = _NESTED_KEY.match(key)
        if match:
            outer, inner = match.groups()
            nested = payload.setdefault(outer, {})
            if isinstance(nested, dict):
                nested[inner] = value
        else:
            payload[key] = value
    return payload


def parse_body(raw: bytes, content_type: str) -> RecipeRequest:
    """Parse *raw* into a RecipeRequest.

    Raises ValueError (JSON, unicode and pydantic errors all derive from it)
    when the body is not a usable object.
    """

    if content_type.startswith(_FORM_CONTENT_TYPE):
        payload: Any = parse_form_body(raw)
    elif raw.strip():
        payload = json.loads(raw)
    else:
        payload = {}
    return RecipeRequest.model_validate(payload)


# ---------------------------------------------------------------------------
# POST /api/generateRecipe
# ---------------------------------------------------------------------------


@router.post("/api/generateRecipe")
async def generate_recipe(
    request: Request,
    provider: GenerationProvider = Depends(get_generation_provider),
):
    raw_body = await read_limited_body(request, request.app.state.settings.max_body_bytes)
    if raw_body is None:
        return error_response(413, BODY_TOO_LARGE_MESSAGE)

    try:
        body = parse_body(raw_body, request.headers.get("content-type", ""))
    except ValueError as exc:
        logger.info("Malformed request body: %s", exc)
        return error_response(400, MALFORMED_BODY_MESSAGE)

    parts = body.to_parts()
    if not parts:
        return error_response(400, NO_CONTENT_MESSAGE)

    try:
        result = await provider.generate(parts)
    except Exception as exc:
        logger.exception("Generation API error: %s", exc)
        return error_response(500, UPSTREAM_FAILURE_MESSAGE)

    logger.info("Generated content from %d part(s)", len(parts))
    return JSONResponse(content=result)

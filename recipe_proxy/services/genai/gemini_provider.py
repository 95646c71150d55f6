from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, Optional, Sequence

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from recipe_proxy.config import Settings
from recipe_proxy.models import InlineDataPart, Part, TextPart

from .base import GenerationError, GenerationProvider, MissingCredentialError

logger = logging.getLogger(__name__)


class GeminiProvider(GenerationProvider):
    """Google Gemini via the ``google-genai`` async client."""

    name = "gemini"

    # SDK bookkeeping that is not part of the REST response body
    _SDK_ONLY_FIELDS = {"sdk_http_response", "automatic_function_calling_history", "parsed"}

    def __init__(self, *, api_key: Optional[str], model: str, client: Optional[genai.Client] = None) -> None:
        self._model = model
        if client is not None:
            self._client = client
        elif api_key:
            self._client = genai.Client(api_key=api_key)
        else:
            logger.warning("GEMINI_API_KEY not found. API calls will fail.")
            self._client = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiProvider":
        return cls(api_key=settings.gemini_api_key, model=settings.gemini_model)

    @property
    def model(self) -> str:
        return self._model

    async def generate(self, parts: Sequence[Part]) -> dict[str, Any]:
        if self._client is None:
            raise MissingCredentialError("No Gemini API key configured")

        contents = [self._to_sdk_part(part) for part in parts]
        logger.debug("generate_content model=%s parts=%d", self._model, len(contents))
        try:
            response = await self._client.aio.models.generate_content(model=self._model, contents=contents)
        except genai_errors.APIError as exc:
            raise GenerationError(f"Gemini API error {exc.code}: {exc.message}", status=exc.code) from exc
        except httpx.HTTPError as exc:
            raise GenerationError(f"Gemini transport error: {exc}") from exc

        return response.model_dump(mode="json", by_alias=True, exclude_none=True, exclude=self._SDK_ONLY_FIELDS)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _to_sdk_part(part: Part) -> types.Part:
        if isinstance(part, TextPart):
            return types.Part(text=part.text)
        if isinstance(part, InlineDataPart):
            raw = _decode_base64(part.inline_data.data)
            return types.Part(inline_data=types.Blob(mime_type=part.inline_data.mime_type, data=raw))
        raise GenerationError(f"Unsupported part type: {type(part).__name__}")


def _decode_base64(data: str) -> bytes:
    """Decode browser-supplied base64: line breaks, missing padding and the URL-safe alphabet are accepted."""

    cleaned = "".join(data.split())
    missing_padding = len(cleaned) % 4
    if missing_padding:
        cleaned += "=" * (4 - missing_padding)
    try:
        return base64.b64decode(cleaned, validate=True)
    except binascii.Error:
        try:
            return base64.urlsafe_b64decode(cleaned)
        except (binascii.Error, ValueError) as exc:
            raise GenerationError("Inline data is not valid base64") from exc

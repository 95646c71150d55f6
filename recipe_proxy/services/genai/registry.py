from __future__ import annotations

from recipe_proxy.config import Settings

from .base import GenerationProvider
from .gemini_provider import GeminiProvider

_PROVIDERS: dict[str, type[GenerationProvider]] = {
    "gemini": GeminiProvider,
}


def get_provider(settings: Settings) -> GenerationProvider:
    provider_key = settings.genai_provider.lower()
    if provider_key not in _PROVIDERS:
        raise ValueError(f"Unsupported generation provider: {provider_key}")
    return _PROVIDERS[provider_key].from_settings(settings)

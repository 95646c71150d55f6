from .base import GenerationError, GenerationProvider, MissingCredentialError
from .gemini_provider import GeminiProvider
from .registry import get_provider

__all__ = [
    "GenerationError",
    "GenerationProvider",
    "MissingCredentialError",
    "GeminiProvider",
    "get_provider",
]

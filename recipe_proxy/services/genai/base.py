from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from recipe_proxy.config import Settings
from recipe_proxy.models import Part


class GenerationError(Exception):
    """Raised when the upstream generation API call fails for any reason."""

    def __init__(self, message: str, *, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class MissingCredentialError(GenerationError):
    """Raised at call time when no API key was configured."""


class GenerationProvider(ABC):
    """Abstract interface for an upstream content-generation API."""

    name: str = "abstract"

    @classmethod
    @abstractmethod
    def from_settings(cls, settings: Settings) -> "GenerationProvider":
        """Build the provider from application settings."""

    @abstractmethod
    async def generate(self, parts: Sequence[Part]) -> dict[str, Any]:
        """Send *parts* as a single user turn and return the raw response.

        Returns
        -------
        dict[str, Any]
            The upstream response as a JSON-compatible mapping, unmodified.

        Raises
        ------
        GenerationError
            On any upstream, transport or credential failure.
        """

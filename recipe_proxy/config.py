from __future__ import annotations

import logging
from enum import Enum
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MAX_BODY_BYTES = 50 * 1024 * 1024  # 50 MB, room for base64 images


class DeploymentMode(str, Enum):
    """How the process is hosted.

    ``local`` reads a ``.env`` file, requires a credential and binds a port.
    ``hosted`` only exposes the ASGI app and tolerates a missing credential.
    """

    LOCAL = "local"
    HOSTED = "hosted"


class ConfigurationError(RuntimeError):
    """Raised when local mode is started without an upstream API key."""


class Settings(BaseSettings):
    """Application configuration loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    deployment_mode: DeploymentMode = Field(DeploymentMode.LOCAL, description="local or hosted")

    # Upstream generation API
    gemini_api_key: Optional[str] = Field(default=None, description="Server-held Gemini credential")
    gemini_model: str = Field("gemini-2.5-flash")
    genai_provider: str = Field("gemini")

    # Local listener
    host: str = Field("0.0.0.0")
    port: int = Field(3000, ge=1, le=65535)

    # HTTP surface
    static_dir: str = Field(".", description="Directory holding index.html and static assets.")
    max_body_bytes: int = Field(DEFAULT_MAX_BODY_BYTES, ge=1)

    log_level: str = Field("INFO")

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def has_credential(self) -> bool:
        return bool(self.gemini_api_key)


def load_settings(mode: DeploymentMode, *, env_file: str | None = ".env", **overrides) -> Settings:
    """Build a Settings instance for the given deployment mode.

    Local mode loads *env_file* into the process environment first (so the
    upstream SDK sees the same values). Hosted mode never touches local files.
    """

    if mode is DeploymentMode.LOCAL and env_file:
        load_dotenv(env_file)
        return Settings(_env_file=env_file, deployment_mode=mode, **overrides)
    return Settings(_env_file=None, deployment_mode=mode, **overrides)


def require_credential(settings: Settings) -> None:
    """Refuse to continue when local mode has no API key."""

    if settings.deployment_mode is DeploymentMode.LOCAL and not settings.has_credential:
        raise ConfigurationError("GEMINI_API_KEY not found. Set it in the environment or the .env file.")


@lru_cache()
def get_settings() -> Settings:  # pragma: no cover
    """Return cached hosted-mode settings for the module-level ASGI app."""

    return load_settings(DeploymentMode.HOSTED)

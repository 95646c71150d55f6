from __future__ import annotations

from typing import Any, Optional, Sequence

import pytest
from fastapi.testclient import TestClient

from recipe_proxy.config import DeploymentMode, Settings
from recipe_proxy.main import create_app
from recipe_proxy.models import Part
from recipe_proxy.services.genai import GenerationProvider

UPSTREAM_RESPONSE = {
    "candidates": [
        {
            "content": {"parts": [{"text": "Shakshuka: eggs poached in tomato sauce."}], "role": "model"},
            "finishReason": "STOP",
            "index": 0,
        }
    ],
    "modelVersion": "gemini-2.5-flash",
    "usageMetadata": {"promptTokenCount": 6, "candidatesTokenCount": 9, "totalTokenCount": 15},
}


class FakeProvider(GenerationProvider):
    """Records every call and returns a canned response or raises."""

    name = "fake"

    def __init__(self, result: Optional[dict[str, Any]] = None, error: Optional[Exception] = None) -> None:
        self.result = UPSTREAM_RESPONSE if result is None else result
        self.error = error
        self.calls: list[list[Part]] = []

    @classmethod
    def from_settings(cls, settings: Settings) -> "FakeProvider":
        return cls()

    async def generate(self, parts: Sequence[Part]) -> dict[str, Any]:
        self.calls.append(list(parts))
        if self.error is not None:
            raise self.error
        return self.result


def make_settings(**overrides) -> Settings:
    values = {"deployment_mode": DeploymentMode.HOSTED, "gemini_api_key": "test-key"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return make_settings(static_dir=str(tmp_path))


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def client(settings, fake_provider) -> TestClient:
    return TestClient(create_app(settings, fake_provider))

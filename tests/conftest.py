"""Shared pytest fixtures: fake vision providers, no network."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest

from core.config import Settings
from domain.entities import AnalysisRequest
from services.vision.openai_vision import VisionClientState


PNG_DATA_URI = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mP8/x8AAwMCAO7+fJ8AAAAASUVORK5CYII="
)

ACME_REPLY = '```json\n[{"brandOrManufacturer":"Acme","costToReplace":"12.50"}]\n```'


class FakeVisionAdapter:
    def __init__(self, reply: str = "[]", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[AnalysisRequest] = []

    async def complete(self, request: AnalysisRequest) -> str:
        self.calls.append(request)
        if self.error is not None:
            raise self.error
        return self.reply


class FakeCompletions:
    def __init__(
        self, content: str | None = "[]", error: Exception | None = None, no_choices: bool = False
    ) -> None:
        self.content = content
        self.error = error
        self.no_choices = no_choices
        self.calls: list[dict[str, Any]] = []

    async def create(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        if self.no_choices:
            return SimpleNamespace(choices=[])
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_openai_client(completions: FakeCompletions) -> Any:
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def vision_state(adapter: FakeVisionAdapter) -> VisionClientState:
    return VisionClientState(adapter=adapter, credential_present=True)  # type: ignore[arg-type]


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "APP_ENV": "development",
        "LOG_LEVEL": "INFO",
        "OPENAI_API_KEY": "sk-test",
        "AWS_LAMBDA_FUNCTION_NAME": None,
        "ALLOWED_ORIGINS": "*",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def fake_adapter() -> FakeVisionAdapter:
    return FakeVisionAdapter(reply=ACME_REPLY)


@pytest.fixture
def ready_vision(fake_adapter: FakeVisionAdapter) -> VisionClientState:
    return vision_state(fake_adapter)

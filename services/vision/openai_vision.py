from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import openai
import structlog
from openai import AsyncOpenAI

from domain.entities import AnalysisRequest
from domain.errors import (
    InvalidCredentialError,
    ModelDeprecatedError,
    QuotaExceededError,
    RateLimitedError,
    UpstreamError,
    UpstreamFailureError,
)


log = structlog.get_logger(__name__)


VISION_MODEL = "gpt-4o"
MAX_OUTPUT_TOKENS = 1000
TEMPERATURE = 0.1
IMAGE_DETAIL = "high"


class OpenAIVisionAdapter:
    """One chat completion per analysis; errors are classified, not retried."""

    def __init__(self, client: Any, model: str = VISION_MODEL) -> None:
        self.client = client
        self.model = model

    def build_messages(self, request: AnalysisRequest) -> list[dict[str, Any]]:
        return [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": request.prompt},
                    {"type": "image_url", "image_url": {"url": request.image, "detail": IMAGE_DETAIL}},
                ],
            }
        ]

    async def complete(self, request: AnalysisRequest) -> str:
        try:
            resp = await self.client.chat.completions.create(
                model=self.model,
                messages=self.build_messages(request),
                max_tokens=MAX_OUTPUT_TOKENS,
                temperature=TEMPERATURE,
            )
            content = resp.choices[0].message.content
        except Exception as e:
            err = classify_upstream_error(e, self.model)
            log.error("vision_call_failed", code=err.code, error=str(e), file_name=request.file_name)
            raise err from e
        return content or ""


def classify_upstream_error(exc: Exception, model: str = VISION_MODEL) -> UpstreamError:
    code = getattr(exc, "code", None)
    message = str(getattr(exc, "message", None) or exc)
    lowered = message.lower()

    if code == "insufficient_quota":
        return QuotaExceededError(detail=message)
    if code == "invalid_api_key" or isinstance(exc, openai.AuthenticationError):
        return InvalidCredentialError(detail=message)
    if "rate limit" in lowered or isinstance(exc, openai.RateLimitError):
        return RateLimitedError(detail=message)
    if "deprecated" in lowered:
        return ModelDeprecatedError(detail=f"The vision model has been updated to {model}")
    return UpstreamFailureError(detail=message)


@dataclass
class VisionClientState:
    adapter: OpenAIVisionAdapter | None = None
    credential_present: bool = False
    init_error: str | None = None

    @property
    def ready(self) -> bool:
        return self.adapter is not None

    @property
    def status(self) -> str:
        if not self.credential_present:
            return "missing_api_key"
        return "ready" if self.ready else "client_error"


def init_vision_client(api_key: str | None, model: str = VISION_MODEL) -> VisionClientState:
    if not api_key:
        log.warning("openai_key_missing")
        return VisionClientState()
    try:
        # retries stay off: a repeated completion is billed twice
        client = AsyncOpenAI(api_key=api_key, max_retries=0)
    except Exception as e:
        log.error("openai_client_init_failed", error=str(e))
        return VisionClientState(credential_present=True, init_error=str(e))
    log.info("openai_client_ready", model=model)
    return VisionClientState(adapter=OpenAIVisionAdapter(client, model=model), credential_present=True)

from __future__ import annotations

from typing import Any, Optional

import structlog

from domain.entities import AnalysisRequest
from domain.errors import (
    MissingImageError,
    MissingPromptError,
    ModelMisconfiguredError,
    ModelUnavailableError,
)
from services.vision.openai_vision import VisionClientState


log = structlog.get_logger(__name__)


def validate_request(
    image: Optional[Any],
    prompt: Optional[Any],
    file_name: Optional[Any],
    vision: VisionClientState,
) -> AnalysisRequest:
    """Fail fast before any upstream call; checks run in a fixed order."""
    if not image:
        log.warning("analyze_rejected", reason=MissingImageError.code)
        raise MissingImageError()
    if not prompt:
        log.warning("analyze_rejected", reason=MissingPromptError.code)
        raise MissingPromptError()
    if not vision.credential_present:
        raise ModelUnavailableError()
    if not vision.ready:
        raise ModelMisconfiguredError(detail=vision.init_error)
    return AnalysisRequest(image=str(image), prompt=str(prompt), file_name=str(file_name or ""))

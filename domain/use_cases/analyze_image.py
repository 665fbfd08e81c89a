from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import structlog

from domain.entities import HIDDEN_REPLY, AnalysisResult
from domain.errors import ModelMisconfiguredError
from domain.use_cases.normalize_items import normalize_items
from domain.use_cases.validate_request import validate_request
from services.vision.openai_vision import VisionClientState
from services.vision.reply_decoder import Fallback, candidates_of, decode_reply


log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PipelineConfig:
    verbose: bool = False
    environment: str = "development"


class AnalysisPipeline:
    """Validate, call the vision model once, decode and normalize its reply.

    Holds no per-request state; one instance serves every request.
    """

    def __init__(self, vision: VisionClientState, config: PipelineConfig | None = None) -> None:
        self.vision = vision
        self.config = config or PipelineConfig()

    async def analyze(
        self,
        image: Optional[Any],
        prompt: Optional[Any],
        file_name: Optional[Any] = None,
    ) -> AnalysisResult:
        request = validate_request(image, prompt, file_name, self.vision)
        log.info(
            "vision_analysis_started",
            file_name=request.file_name,
            image_len=len(request.image),
            prompt_len=len(request.prompt),
        )

        adapter = self.vision.adapter
        if adapter is None:
            raise ModelMisconfiguredError(detail=self.vision.init_error)
        raw = await adapter.complete(request)
        if self.config.verbose:
            log.debug("vision_raw_reply", file_name=request.file_name, reply=raw)

        decoded = decode_reply(raw, request.label)
        items = normalize_items(candidates_of(decoded), request.label)
        log.info(
            "vision_analysis_done",
            file_name=request.file_name,
            extracted_count=len(items),
            fallback=isinstance(decoded, Fallback),
        )
        return AnalysisResult(
            items=items,
            file_name=request.file_name,
            original_response=raw if self.config.verbose else HIDDEN_REPLY,
            environment=self.config.environment,
            used_fallback=isinstance(decoded, Fallback),
        )

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, List, Union

import structlog

from domain.use_cases.normalize_items import DEFAULT_REPLACEMENT_COST


log = structlog.get_logger(__name__)


FALLBACK_BRAND = "AI Analysis"
FALLBACK_DESCRIPTION_CHARS = 200

_FENCE_OPEN = re.compile(r"^\s*```[\w+-]*[ \t]*\n?")
_FENCE_CLOSE = re.compile(r"\n?```\s*$")


@dataclass(frozen=True)
class Structured:
    candidates: List[Any]


@dataclass(frozen=True)
class Fallback:
    candidate: dict[str, Any]


DecodeResult = Union[Structured, Fallback]


def strip_code_fence(text: str) -> str:
    cleaned = _FENCE_OPEN.sub("", text, count=1)
    cleaned = _FENCE_CLOSE.sub("", cleaned, count=1)
    return cleaned.strip()


def fallback_candidate(raw: str, file_label: str) -> dict[str, Any]:
    return {
        "brandOrManufacturer": FALLBACK_BRAND,
        "modelNumber": "",
        "itemDescription": f"Items visible in {file_label}",
        "costToReplace": DEFAULT_REPLACEMENT_COST,
        "totalCost": DEFAULT_REPLACEMENT_COST,
        "brand": "",
        "description": raw[:FALLBACK_DESCRIPTION_CHARS],
    }


def decode_reply(raw: str, file_label: str = "unknown") -> DecodeResult:
    """Parse the model reply as JSON, or fall back to a single synthetic item.

    A lone object becomes a one-element list; ``[]`` is a valid empty result.
    """
    try:
        data = json.loads(strip_code_fence(raw))
    except (ValueError, RecursionError):
        log.info("vision_reply_not_json", file_name=file_label, reply_len=len(raw))
        return Fallback(fallback_candidate(raw, file_label))
    if not isinstance(data, list):
        data = [data]
    return Structured(data)


def candidates_of(result: DecodeResult) -> List[Any]:
    if isinstance(result, Fallback):
        return [result.candidate]
    return list(result.candidates)

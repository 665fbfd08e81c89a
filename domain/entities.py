from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List


HIDDEN_REPLY = "[Hidden in production]"


@dataclass(frozen=True)
class AnalysisRequest:
    image: str
    prompt: str
    file_name: str = ""

    @property
    def label(self) -> str:
        # used inside synthesized descriptions
        return self.file_name or "unknown"


@dataclass(frozen=True)
class ExtractedItem:
    brand_or_manufacturer: str
    model_number: str
    item_description: str
    cost_to_replace: float
    total_cost: float
    brand: str
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "brandOrManufacturer": self.brand_or_manufacturer,
            "modelNumber": self.model_number,
            "itemDescription": self.item_description,
            "costToReplace": self.cost_to_replace,
            "totalCost": self.total_cost,
            "brand": self.brand,
            "description": self.description,
        }


@dataclass(frozen=True)
class AnalysisResult:
    items: List[ExtractedItem]
    file_name: str
    original_response: str = HIDDEN_REPLY
    environment: str = "development"
    used_fallback: bool = False
    success: bool = True
    processing_time: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    @property
    def extracted_count(self) -> int:
        return len(self.items)

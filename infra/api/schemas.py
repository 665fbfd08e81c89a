from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from domain.entities import AnalysisResult, ExtractedItem


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalyzeImageInput(CamelModel):
    # Optional on purpose: missing values map to E_MISSING_* rather than a 422
    image: str | None = Field(None, examples=["data:image/jpeg;base64,/9j/4AAQ..."])
    prompt: str | None = Field(None, examples=["List every item with brand, model and replacement cost as JSON"])
    file_name: str | None = Field(None, examples=["living-room.jpg"])

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class ExtractedItemSchema(CamelModel):
    brand_or_manufacturer: str = Field(..., min_length=1)
    model_number: str
    item_description: str = Field(..., min_length=1)
    cost_to_replace: float = Field(..., ge=0)
    total_cost: float = Field(..., ge=0)
    brand: str
    description: str

    @classmethod
    def from_item(cls, item: ExtractedItem) -> "ExtractedItemSchema":
        return cls(**item.to_dict())


class AnalyzeImageResponse(CamelModel):
    success: bool = True
    items: list[ExtractedItemSchema]
    file_name: str
    extracted_count: int
    original_response: str
    processing_time: str
    environment: str

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "AnalyzeImageResponse":
        return cls(
            success=result.success,
            items=[ExtractedItemSchema.from_item(i) for i in result.items],
            file_name=result.file_name,
            extracted_count=result.extracted_count,
            original_response=result.original_response,
            processing_time=result.processing_time,
            environment=result.environment,
        )


class ErrorResponse(CamelModel):
    success: bool = False
    error: str
    code: str
    message: str | None = None


class VisionStatusResponse(CamelModel):
    ai_vision_enabled: bool
    openai_client_ready: bool
    status: str
    message: str
    timestamp: str
    supported_formats: list[str] = ["JPEG", "PNG", "GIF", "WebP"]
    vision_model: str
    environment: str

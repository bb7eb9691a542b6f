"""
Pydantic DTOs for the waste detection endpoint.

Request:  ``{"input": <description or image URL>, "type": "text" | "image"}``
Response: ``{"jenis": "Organik" | "Anorganik" | "B3", "penjelasan": str, "tips": str}``
"""

from __future__ import annotations

from typing import Any, Dict, Literal

from pydantic import BaseModel, field_validator

from ..models import DetectionResult, WasteType

DetectionKind = Literal["text", "image"]


class DetectionRequestDTO(BaseModel):
    """Validated detection request body."""

    input: str
    type: DetectionKind

    @field_validator("input")
    @classmethod
    def _non_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("input must be non-empty")
        return value

    def to_body(self) -> Dict[str, Any]:
        return self.model_dump()


class DetectionResultDTO(BaseModel):
    """Validated detection response body."""

    jenis: WasteType
    penjelasan: str
    tips: str

    def to_domain(self) -> DetectionResult:
        return DetectionResult(waste_type=self.jenis, explanation=self.penjelasan, tips=self.tips)


__all__ = ["DetectionKind", "DetectionRequestDTO", "DetectionResultDTO"]

"""
Waste detection result model.

The detection endpoint answers with Indonesian field names (``jenis``,
``penjelasan``, ``tips``); this model exposes them under English attribute
names and converts back with :meth:`DetectionResult.to_dict`.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class WasteType(str, Enum):
    """Waste categories known to the classifier."""

    ORGANIK = "Organik"
    ANORGANIK = "Anorganik"
    B3 = "B3"


@dataclass(frozen=True)
class DetectionResult:
    """Classification of one waste item.

    Attributes:
        waste_type: Detected category.
        explanation: Short explanation of the category (``penjelasan``).
        tips: Handling or recycling advice.
    """

    waste_type: WasteType
    explanation: str
    tips: str

    @property
    def hazardous(self) -> bool:
        return self.waste_type is WasteType.B3

    def to_dict(self) -> Dict[str, Any]:
        return {
            "jenis": self.waste_type.value,
            "penjelasan": self.explanation,
            "tips": self.tips,
        }


__all__ = ["DetectionResult", "WasteType"]

"""The three waste categories used by the classifier.

Descriptions are the short texts shown next to each category in the app.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple, Union

from ..base.models import WasteType


@dataclass(frozen=True)
class WasteCategory:
    waste_type: WasteType
    title: str
    description: str
    hazardous: bool = False

    def to_dict(self) -> Dict[str, object]:
        return {
            "jenis": self.waste_type.value,
            "title": self.title,
            "description": self.description,
            "hazardous": self.hazardous,
        }


CATEGORIES: Tuple[WasteCategory, ...] = (
    WasteCategory(
        waste_type=WasteType.ORGANIK,
        title="Organik",
        description="Sisa makanan, daun, dan bahan alami yang bisa dikompos",
    ),
    WasteCategory(
        waste_type=WasteType.ANORGANIK,
        title="Anorganik",
        description="Plastik, kertas, dan logam yang bisa didaur ulang",
    ),
    WasteCategory(
        waste_type=WasteType.B3,
        title="B3",
        description="Bahan berbahaya yang perlu penanganan khusus",
        hazardous=True,
    ),
)

_BY_KEY: Dict[str, WasteCategory] = {c.waste_type.value.lower(): c for c in CATEGORIES}


def category_for(jenis: Union[str, WasteType]) -> WasteCategory:
    """Look up a category by ``jenis`` (case-insensitive).

    Raises:
        ValueError: ``jenis`` is not one of Organik, Anorganik, B3.
    """
    key = jenis.value if isinstance(jenis, WasteType) else str(jenis)
    try:
        return _BY_KEY[key.strip().lower()]
    except KeyError:
        raise ValueError(f"unknown waste category: {jenis!r}") from None


__all__ = ["WasteCategory", "CATEGORIES", "category_for"]

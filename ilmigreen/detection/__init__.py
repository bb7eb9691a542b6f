"""Waste classification: client, categories and image helpers."""

from .categories import CATEGORIES, WasteCategory, category_for
from .client import WasteDetectionClient
from .images import image_file_to_data_url

__all__ = [
    "WasteDetectionClient",
    "WasteCategory",
    "CATEGORIES",
    "category_for",
    "image_file_to_data_url",
]

"""Domain models shared across the client.

Re-exports the one-class-per-file implementations under ``models_parts``.
"""

from .models_parts.message import Message, Role, Transcript
from .models_parts.detection_result import DetectionResult, WasteType

__all__ = [
    "Message",
    "Role",
    "Transcript",
    "DetectionResult",
    "WasteType",
]

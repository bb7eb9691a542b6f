"""Streaming metrics data structures."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass
class StreamMetrics:
    """Counters collected over one chat stream.

    ``emitted`` counts published fragments, ``pushbacks`` counts lines
    re-buffered for a second parse attempt and ``malformed`` counts lines
    finally discarded.
    """

    emitted: int = 0
    time_to_first_delta_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    bytes_received: int = 0
    pushbacks: int = 0
    malformed: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["StreamMetrics"]

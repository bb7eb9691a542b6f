"""
ilmigreen base package

Transport-independent building blocks shared by the chat and detection
clients:
- Models: transcript messages and detection results
- DTOs: pydantic validation at the HTTP edge
- Errors: normalized error codes and service exceptions
- Streaming: frame decoder, payload extractor, accumulator and consumer loop
- Infrastructure: logging, timeouts, cancellation, pooled HTTP clients

Nothing here imports from ``ilmigreen.chat``, ``ilmigreen.detection`` or
``ilmigreen.cli``.
"""

from .models import DetectionResult, Message, Transcript, WasteType
from .errors import ErrorCode, MalformedFrameError, ServiceError, TransportError
from .timeouts import TimeoutConfig, get_timeout_config
from .cancellation import CancellationToken, CancelledError
from .streaming import (
    ChatStreamConsumer,
    ChatStreamEvent,
    StreamController,
    StreamMetrics,
    StreamState,
    accumulate_events,
)

__all__ = [
    # Models
    "Message",
    "Transcript",
    "DetectionResult",
    "WasteType",
    # Errors
    "ErrorCode",
    "ServiceError",
    "TransportError",
    "MalformedFrameError",
    # Infrastructure
    "TimeoutConfig",
    "get_timeout_config",
    "CancellationToken",
    "CancelledError",
    # Streaming
    "ChatStreamConsumer",
    "ChatStreamEvent",
    "StreamController",
    "StreamMetrics",
    "StreamState",
    "accumulate_events",
]

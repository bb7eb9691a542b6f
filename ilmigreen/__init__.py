"""ilmigreen package

Client library for the IlmiGreen waste assistant.

Purpose:
    Classify waste items through the remote detection endpoint and hold a
    streamed conversation with the assistant. The streaming consumer turns the
    chat endpoint's ``data:`` event stream into a sequence of transcript
    snapshots that a UI (or the bundled CLI) renders as they arrive.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ServiceError`, :class:`TransportError`,
      :class:`ErrorCode`
    - Chat: :class:`ChatClient`, :class:`ChatStreamEvent`, :class:`StreamState`
    - Detection: :class:`WasteDetectionClient`, :class:`DetectionResult`
    - Messages: :class:`Message`
"""

from .base.errors import ErrorCode, ServiceError, TransportError
from .base.models import DetectionResult, Message
from .base.streaming import ChatStreamEvent, StreamState
from .chat import ChatClient
from .detection import WasteDetectionClient

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ErrorCode",
    "ServiceError",
    "TransportError",
    "Message",
    "DetectionResult",
    "ChatStreamEvent",
    "StreamState",
    "ChatClient",
    "WasteDetectionClient",
]

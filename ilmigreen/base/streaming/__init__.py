"""Streaming package for the chat exchange.

Exposes the frame decoder, payload extractor, accumulator, consumer loop and
controller under a single namespace.
"""

from .streaming import ChatStreamEvent, StreamState, accumulate_events
from .streaming_metrics import StreamMetrics
from .frame_decoder import BufferOverflowError, FrameDecoder, feed
from .payload_extractor import (
    DeltaKind,
    EventRecord,
    RecordKind,
    StreamDelta,
    classify_line,
    interpret_payload,
)
from .accumulator import TranscriptAccumulator, publish_assistant_content
from .stream_consumer import ChatStreamConsumer
from .stream_controller import StreamController

__all__ = [
    "ChatStreamEvent",
    "StreamState",
    "accumulate_events",
    "StreamMetrics",
    "BufferOverflowError",
    "FrameDecoder",
    "feed",
    "DeltaKind",
    "EventRecord",
    "RecordKind",
    "StreamDelta",
    "classify_line",
    "interpret_payload",
    "TranscriptAccumulator",
    "publish_assistant_content",
    "ChatStreamConsumer",
    "StreamController",
]

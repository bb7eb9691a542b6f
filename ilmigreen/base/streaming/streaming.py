"""Streaming primitives for the chat exchange.

Kept apart from the decoder and consumer so renderers can depend on the event
type alone.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from ..models import Transcript


class StreamState(str, Enum):
    IDLE = "idle"
    STREAMING = "streaming"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (StreamState.COMPLETED, StreamState.FAILED, StreamState.CANCELLED)


@dataclass(frozen=True)
class ChatStreamEvent:
    """One published step of a chat stream.

    Fields:
      transcript: full transcript snapshot after this step
      delta: text fragment that produced the snapshot (``None`` for terminal events)
      finish: True on the terminal event, exactly once per stream
      state: stream state after this step
      error: human readable failure message (terminal FAILED/CANCELLED only)
      error_code: ``ErrorCode`` value matching ``error``
    """

    transcript: Transcript
    delta: str | None = None
    finish: bool = False
    state: StreamState = StreamState.STREAMING
    error: str | None = None
    error_code: str | None = None

    def is_error(self) -> bool:
        return self.error is not None

    @property
    def assistant_content(self) -> str | None:
        """Content of the trailing assistant entry, if any."""
        if self.transcript and self.transcript[-1].is_assistant:
            return self.transcript[-1].content
        return None


def accumulate_events(events: Iterable[ChatStreamEvent]) -> Transcript:
    """Drain ``events`` and return the last published transcript.

    Returns an empty tuple when there were no events.
    """
    last: Transcript = ()
    for evt in events:
        last = evt.transcript
    return last


__all__ = [
    "StreamState",
    "ChatStreamEvent",
    "accumulate_events",
]

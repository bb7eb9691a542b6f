"""Incremental assistant message accumulator.

Folds text fragments into the assistant reply of one exchange and produces
transcript snapshots. A snapshot only ever differs from the transcript it was
built from in its trailing assistant entry; earlier entries are untouched.
"""
from __future__ import annotations

from typing import Sequence

from ..models import Message, Transcript
from .payload_extractor import DeltaKind, StreamDelta


def publish_assistant_content(transcript: Sequence[Message], content: str) -> Transcript:
    """Return ``transcript`` with its assistant reply set to ``content``.

    A trailing assistant entry is replaced; otherwise a new assistant entry is
    appended. Publishing the same content twice yields equal snapshots.
    """
    entries = tuple(transcript)
    reply = Message(role="assistant", content=content)
    if entries and entries[-1].is_assistant:
        return entries[:-1] + (reply,)
    return entries + (reply,)


class TranscriptAccumulator:
    """Per-exchange accumulator.

    ``base`` is the transcript sent with the request (ending with the user
    message). Nothing is published until the first fragment arrives, so a
    stream without fragments leaves the transcript as it was.
    """

    def __init__(self, base: Sequence[Message]) -> None:
        self._base: Transcript = tuple(base)
        self._content = ""
        self._snapshot: Transcript = self._base

    @property
    def assistant_content(self) -> str:
        return self._content

    @property
    def snapshot(self) -> Transcript:
        return self._snapshot

    @property
    def published(self) -> bool:
        return self._snapshot is not self._base

    def apply(self, delta: StreamDelta) -> Transcript | None:
        """Fold ``delta`` in; return the new snapshot, or ``None`` for no-ops."""
        if delta.kind is not DeltaKind.FRAGMENT:
            return None
        self._content += delta.text
        self._snapshot = publish_assistant_content(self._base, self._content)
        return self._snapshot


__all__ = ["publish_assistant_content", "TranscriptAccumulator"]

"""Event payload extraction for chat stream lines.

A decoded line is first classified (:func:`classify_line`); only data records
carry a payload. The payload is then interpreted (:func:`interpret_payload`)
into a :class:`StreamDelta`: the end sentinel, a text fragment, or an empty
no-op.

Notes:
- Both functions are pure and perform no I/O.
- Unlike the tolerant translators used elsewhere, ``interpret_payload``
  raises :class:`MalformedFrameError` on unparsable JSON so the consumer can
  tell "nothing to say" apart from "not yet parsable" and retry the line.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from ...config.defaults import STREAM_DATA_PREFIX, STREAM_DONE_SENTINEL
from ..errors import MalformedFrameError


class RecordKind(str, Enum):
    COMMENT = "comment"
    BLANK = "blank"
    DATA = "data"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class EventRecord:
    """One classified line; ``payload`` is set for data records only."""

    kind: RecordKind
    payload: Optional[str] = None

    @property
    def is_data(self) -> bool:
        return self.kind is RecordKind.DATA


class DeltaKind(str, Enum):
    DONE = "done"
    FRAGMENT = "fragment"
    EMPTY = "empty"


@dataclass(frozen=True)
class StreamDelta:
    kind: DeltaKind
    text: str = ""


DONE = StreamDelta(DeltaKind.DONE)
EMPTY = StreamDelta(DeltaKind.EMPTY)


def classify_line(line: str) -> EventRecord:
    """Classify a decoded line.

    Priority: comment (``:`` prefix), blank, data (``data: `` prefix, payload
    trimmed), anything else unknown.
    """
    if line.startswith(":"):
        return EventRecord(RecordKind.COMMENT)
    if line.strip() == "":
        return EventRecord(RecordKind.BLANK)
    if line.startswith(STREAM_DATA_PREFIX):
        return EventRecord(RecordKind.DATA, line[len(STREAM_DATA_PREFIX):].strip())
    return EventRecord(RecordKind.UNKNOWN)


def _delta_content(data: Any) -> Any:
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    delta = first.get("delta")
    if not isinstance(delta, dict):
        return None
    return delta.get("content")


def interpret_payload(payload: str) -> StreamDelta:
    """Turn a data payload into a :class:`StreamDelta`.

    The sentinel is recognized before any parsing. Valid JSON without a
    non-empty string at ``choices[0].delta.content`` is an empty delta.

    Raises:
        MalformedFrameError: ``payload`` is not valid JSON.
    """
    if payload == STREAM_DONE_SENTINEL:
        return DONE
    try:
        data = json.loads(payload)
    except ValueError as exc:
        raise MalformedFrameError(payload, str(exc)) from exc
    content = _delta_content(data)
    if isinstance(content, str) and content:
        return StreamDelta(DeltaKind.FRAGMENT, content)
    return EMPTY


__all__ = [
    "RecordKind",
    "EventRecord",
    "DeltaKind",
    "StreamDelta",
    "DONE",
    "EMPTY",
    "classify_line",
    "interpret_payload",
]

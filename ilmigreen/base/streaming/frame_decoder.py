"""Stream frame decoder.

Turns raw chunks from the transport into complete lines. Chunk boundaries
carry no meaning: a chunk may hold zero, one or many lines, and may end in
the middle of a line or, for byte input, in the middle of a UTF-8 sequence.
Whatever has not been terminated yet stays in the pending buffer until the
next chunk arrives.

Two surfaces are provided:

* :func:`feed`: a pure ``(buffer, chunk) -> (lines, buffer)`` step on text.
* :class:`FrameDecoder`: the stateful per-stream decoder used by the
  consumer. It hands out lines lazily so the consumer can stop mid-buffer
  (sentinel reached, or a line pushed back for a retry) without losing the
  lines behind it.
"""
from __future__ import annotations

import codecs
from typing import Iterator, List, Optional, Tuple, Union

from ...config.defaults import STREAM_LINE_TERMINATOR, STREAM_MAX_PENDING_CHARS

RawChunk = Union[bytes, bytearray, memoryview, str]


class BufferOverflowError(ValueError):
    """The unterminated tail of a stream grew beyond the configured bound."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"pending stream buffer of {size} chars exceeds limit {limit}")
        self.size = size
        self.limit = limit


def _normalize(line: str) -> str:
    return line[:-1] if line.endswith("\r") else line


def feed(buffer: str, chunk: str) -> Tuple[List[str], str]:
    """Append ``chunk`` to ``buffer`` and split off every complete line.

    Returns the complete lines in order (a single trailing ``\\r`` stripped
    from each) and the unterminated remainder, which becomes the buffer for
    the next call.
    """
    pending = buffer + chunk
    lines: List[str] = []
    start = 0
    while True:
        idx = pending.find(STREAM_LINE_TERMINATOR, start)
        if idx == -1:
            break
        lines.append(_normalize(pending[start:idx]))
        start = idx + 1
    return lines, pending[start:]


class FrameDecoder:
    """Per-stream line decoder owning the pending buffer.

    Byte chunks go through an incremental UTF-8 decoder, so a multi-byte
    character split across chunks is held back until it is complete. Invalid
    byte sequences are replaced rather than raised.

    Parameters:
        max_pending_chars: Bound for the unterminated tail. ``None`` or ``0``
            disables the check.
        encoding: Encoding of byte chunks.
    """

    def __init__(
        self,
        *,
        max_pending_chars: Optional[int] = STREAM_MAX_PENDING_CHARS,
        encoding: str = "utf-8",
    ) -> None:
        self._max_pending = max_pending_chars or None
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._pending = ""

    @property
    def pending(self) -> str:
        """Text received but not yet handed out as a line."""
        return self._pending

    def append(self, chunk: RawChunk) -> None:
        """Add a raw chunk to the pending buffer."""
        if isinstance(chunk, str):
            text = chunk
        else:
            text = self._decoder.decode(bytes(chunk))
        self._pending += text
        self._check_bound()

    def lines(self) -> Iterator[str]:
        """Yield complete lines from the pending buffer, one at a time.

        Each line is removed from the buffer right before it is yielded, so
        abandoning the iterator leaves exactly the unread lines (and any
        pushed-back line) in place.
        """
        while True:
            idx = self._pending.find(STREAM_LINE_TERMINATOR)
            if idx == -1:
                return
            line = self._pending[:idx]
            self._pending = self._pending[idx + 1:]
            yield _normalize(line)

    def feed(self, chunk: RawChunk) -> List[str]:
        """Append ``chunk`` and return every line it completed."""
        self.append(chunk)
        return list(self.lines())

    def push_back(self, line: str) -> None:
        """Put ``line`` back at the front of the buffer, terminator restored."""
        self._pending = line + STREAM_LINE_TERMINATOR + self._pending

    def flush(self) -> List[str]:
        """End of input: return remaining lines plus the unterminated tail.

        Any incomplete multi-byte sequence is decoded with replacement
        characters. The buffer is empty afterwards.
        """
        self._pending += self._decoder.decode(b"", final=True)
        out = list(self.lines())
        if self._pending:
            out.append(_normalize(self._pending))
        self._pending = ""
        return out

    def reset(self) -> None:
        """Discard everything buffered (cancellation, error)."""
        self._pending = ""
        self._decoder.reset()

    def _check_bound(self) -> None:
        if self._max_pending is None:
            return
        tail = self._pending.rfind(STREAM_LINE_TERMINATOR)
        size = len(self._pending) - (tail + 1)
        if size > self._max_pending:
            raise BufferOverflowError(size, self._max_pending)


__all__ = ["RawChunk", "BufferOverflowError", "FrameDecoder", "feed"]

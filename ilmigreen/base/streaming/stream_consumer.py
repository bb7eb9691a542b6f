"""Chat stream consumer: the reader loop of one exchange.

``ChatStreamConsumer.consume`` pulls raw chunks from an iterable (typically
``httpx.Response.iter_bytes()``), runs them through the frame decoder and the
payload extractor, folds fragments into the transcript and yields a
:class:`ChatStreamEvent` for every published snapshot followed by exactly one
terminal event.

Termination:
  * ``[DONE]`` sentinel: COMPLETED; lines buffered behind it are dropped.
  * clean end of input: the unterminated tail is processed, then COMPLETED.
  * exception while reading: FAILED, partial transcript kept.
  * pending buffer over its bound: FAILED with ``protocol``.
  * cancellation token set: CANCELLED, buffer discarded.

Malformed data payloads are retried once: the line is pushed back to the
front of the buffer and processing waits for the next chunk. A line that
fails again, or fails after end of input, is logged and skipped.
"""
from __future__ import annotations

import logging
import time
from contextlib import ExitStack, suppress
from typing import Iterable, Iterator, Optional, Sequence

from ...config.defaults import STREAM_MAX_PENDING_CHARS
from ..cancellation import CancellationToken, CancelledError
from ..errors import ErrorCode, MalformedFrameError, classify_exception
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import Message, Transcript
from .accumulator import TranscriptAccumulator
from .frame_decoder import BufferOverflowError, FrameDecoder, RawChunk
from .payload_extractor import DeltaKind, classify_line, interpret_payload
from .streaming import ChatStreamEvent, StreamState
from .streaming_metrics import StreamMetrics

# Outcomes of handling one line besides publishing a snapshot.
_CONTINUE = "continue"
_PUSHED_BACK = "pushed_back"
_DONE = "done"


def _chunk_size(chunk: RawChunk) -> int:
    if isinstance(chunk, str):
        return len(chunk.encode("utf-8"))
    return len(chunk)


def _register_stream_cleanup(chunks: Iterable[RawChunk], stack: ExitStack) -> None:
    close_fn = getattr(chunks, "close", None)
    if callable(close_fn):
        def _safe_close() -> None:
            with suppress(Exception):
                close_fn()
        stack.callback(_safe_close)


class ChatStreamConsumer:
    """Consume one chat stream into transcript snapshots.

    Parameters:
        transcript: Transcript sent with the request, ending with the user
            message being answered.
        token: Optional cancellation token polled between chunks.
        max_pending_chars: Bound for the decoder's unterminated tail.
        logger: Logger for stream events (defaults to ``ilmigreen.stream``).
        ctx: Correlation context added to every log event.

    A consumer instance serves a single exchange; create a new one per send.
    """

    def __init__(
        self,
        transcript: Sequence[Message],
        *,
        token: Optional[CancellationToken] = None,
        max_pending_chars: Optional[int] = STREAM_MAX_PENDING_CHARS,
        logger: Optional[logging.Logger] = None,
        ctx: Optional[LogContext] = None,
    ) -> None:
        self._accumulator = TranscriptAccumulator(transcript)
        self._decoder = FrameDecoder(max_pending_chars=max_pending_chars)
        self._token = token
        self._logger = logger or get_logger("ilmigreen.stream")
        self._ctx = ctx or LogContext()
        self._retry_line: Optional[str] = None
        self._t0 = 0.0
        self.metrics = StreamMetrics()
        self.state = StreamState.IDLE

    @property
    def transcript(self) -> Transcript:
        """Latest published snapshot (the request transcript before any fragment)."""
        return self._accumulator.snapshot

    def consume(self, chunks: Iterable[RawChunk]) -> Iterator[ChatStreamEvent]:
        """Yield snapshot events for ``chunks`` followed by one terminal event."""
        if self.state is not StreamState.IDLE:
            raise RuntimeError("ChatStreamConsumer instances are single-use")
        self._t0 = time.perf_counter()
        normalized_log_event(self._logger, "stream.start", self._ctx, phase="start", attempt=1, emitted=False)
        with ExitStack() as stack:
            _register_stream_cleanup(chunks, stack)
            try:
                self._check_cancelled()
                done = False
                for chunk in chunks:
                    self._check_cancelled()
                    if self.state is StreamState.IDLE:
                        self.state = StreamState.STREAMING
                    self.metrics.bytes_received += _chunk_size(chunk)
                    self._decoder.append(chunk)
                    for outcome in self._drain(self._decoder.lines(), final=False):
                        if isinstance(outcome, ChatStreamEvent):
                            yield outcome
                        elif outcome == _DONE:
                            done = True
                            break
                        elif outcome == _PUSHED_BACK:
                            break
                    if done:
                        break
                if not done:
                    self._check_cancelled()
                    for outcome in self._drain(iter(self._decoder.flush()), final=True):
                        if isinstance(outcome, ChatStreamEvent):
                            yield outcome
                        elif outcome == _DONE:
                            break
            except CancelledError as exc:
                yield self._finish(StreamState.CANCELLED, error=str(exc), code=ErrorCode.CANCELLED)
                return
            except BufferOverflowError as exc:
                yield self._finish(StreamState.FAILED, error=str(exc), code=ErrorCode.PROTOCOL)
                return
            except Exception as exc:
                code = classify_exception(exc)
                yield self._finish(StreamState.FAILED, error=str(exc) or exc.__class__.__name__, code=code)
                return
            finally:
                self._decoder.reset()
                self._retry_line = None
            yield self._finish(StreamState.COMPLETED)

    # Internal ------------------------------------------------------------
    def _check_cancelled(self) -> None:
        if self._token is not None:
            self._token.raise_if_cancelled()

    def _drain(self, lines: Iterator[str], *, final: bool) -> Iterator[object]:
        for line in lines:
            outcome = self._handle_line(line, final=final)
            yield outcome
            if outcome in (_DONE, _PUSHED_BACK):
                return

    def _handle_line(self, line: str, *, final: bool) -> object:
        record = classify_line(line)
        if not record.is_data:
            return _CONTINUE
        try:
            delta = interpret_payload(record.payload or "")
        except MalformedFrameError as exc:
            return self._on_malformed(line, exc, final=final)
        if self._retry_line == line:
            self._retry_line = None
        if delta.kind is DeltaKind.DONE:
            normalized_log_event(
                self._logger,
                "stream.done",
                self._ctx,
                phase="stream",
                attempt=1,
                emitted=self.metrics.emitted > 0,
                level=logging.DEBUG,
            )
            return _DONE
        snapshot = self._accumulator.apply(delta)
        if snapshot is None:
            return _CONTINUE
        if self.metrics.time_to_first_delta_ms is None:
            self.metrics.time_to_first_delta_ms = (time.perf_counter() - self._t0) * 1000.0
        self.metrics.emitted += 1
        return ChatStreamEvent(transcript=snapshot, delta=delta.text, state=StreamState.STREAMING)

    def _on_malformed(self, line: str, exc: MalformedFrameError, *, final: bool) -> str:
        if not final and self._retry_line != line:
            self._retry_line = line
            self._decoder.push_back(line)
            self.metrics.pushbacks += 1
            normalized_log_event(
                self._logger,
                "stream.pushback",
                self._ctx,
                phase="stream",
                attempt=1,
                emitted=self.metrics.emitted > 0,
                level=logging.DEBUG,
                reason=exc.reason,
            )
            return _PUSHED_BACK
        self._retry_line = None
        self.metrics.malformed += 1
        normalized_log_event(
            self._logger,
            "stream.malformed_frame",
            self._ctx,
            phase="stream",
            attempt=1,
            error_code=ErrorCode.MALFORMED_FRAME.value,
            emitted=self.metrics.emitted > 0,
            level=logging.WARNING,
            reason=exc.reason,
            payload=exc.payload[:200],
        )
        return _CONTINUE

    def _finish(
        self,
        state: StreamState,
        *,
        error: Optional[str] = None,
        code: Optional[ErrorCode] = None,
    ) -> ChatStreamEvent:
        """Record the terminal state, log it and build the terminal event."""
        self.state = state
        self.metrics.total_duration_ms = (time.perf_counter() - self._t0) * 1000.0
        event = {
            StreamState.COMPLETED: "stream.end",
            StreamState.FAILED: "stream.error",
            StreamState.CANCELLED: "stream.cancelled",
        }[state]
        normalized_log_event(
            self._logger,
            event,
            self._ctx,
            phase="finalize",
            attempt=1,
            error_code=code.value if code is not None else None,
            emitted=self.metrics.emitted > 0,
            level=logging.ERROR if state is StreamState.FAILED else logging.INFO,
            state=state.value,
            emitted_count=self.metrics.emitted,
            time_to_first_delta_ms=self.metrics.time_to_first_delta_ms,
            total_duration_ms=self.metrics.total_duration_ms,
            bytes_received=self.metrics.bytes_received,
            pushbacks=self.metrics.pushbacks,
            malformed=self.metrics.malformed,
            error=error,
        )
        return ChatStreamEvent(
            transcript=self._accumulator.snapshot,
            delta=None,
            finish=True,
            state=state,
            error=error,
            error_code=code.value if code is not None else None,
        )


__all__ = ["ChatStreamConsumer"]

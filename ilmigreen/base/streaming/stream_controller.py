"""StreamController: cancellable iterator façade over one chat stream.

Wraps the event iterator produced by the chat client so a caller (a UI loop,
the CLI) can iterate events, cancel from another thread and inspect the
outcome afterwards without holding on to the consumer itself.
"""
from __future__ import annotations

from typing import Callable, Iterator, Optional

from ..cancellation import CancellationToken
from ..models import Transcript
from .streaming import ChatStreamEvent, StreamState


class StreamController:
    """Iterate ``ChatStreamEvent`` objects of a single exchange.

    Responsibilities:
      * Iterate over events (single pass).
      * Expose ``cancel(reason)`` for cooperative cancellation.
      * Track the latest transcript and the terminal event.
    """

    def __init__(
        self,
        run: Callable[[CancellationToken], Iterator[ChatStreamEvent]],
        token: CancellationToken | None = None,
    ) -> None:
        self._token = token or CancellationToken()
        self._events = run(self._token)
        self._finished = False
        self._terminal_event: ChatStreamEvent | None = None
        self._transcript: Optional[Transcript] = None

    def __iter__(self) -> Iterator[ChatStreamEvent]:
        for evt in self._events:
            self._transcript = evt.transcript
            if evt.state.is_terminal:
                self._finished = True
                self._terminal_event = evt
            yield evt

    # API -----------------------------------------------------------------
    def cancel(self, reason: str | None = None) -> None:
        """Request cooperative cancellation.

        Takes effect before the next chunk is processed. Safe to invoke
        multiple times or after completion.
        """
        self._token.cancel(reason)

    def close(self) -> None:
        """Stop immediately, releasing the HTTP response.

        No terminal event is produced for a stream closed this way.
        """
        self._token.cancel("closed")
        close_fn = getattr(self._events, "close", None)
        if callable(close_fn):
            close_fn()

    def run_to_end(self) -> Optional[Transcript]:
        """Drain the remaining events and return the final transcript."""
        for _ in self:
            pass
        return self._transcript

    @property
    def token(self) -> CancellationToken:
        return self._token

    @property
    def finished(self) -> bool:
        """Whether the stream has emitted its terminal event."""
        return self._finished

    @property
    def terminal_event(self) -> ChatStreamEvent | None:
        return self._terminal_event

    @property
    def state(self) -> StreamState:
        if self._terminal_event is not None:
            return self._terminal_event.state
        return StreamState.STREAMING if self._transcript is not None else StreamState.IDLE

    @property
    def error(self) -> str | None:
        """Error message from the terminal event (if any)."""
        return self._terminal_event.error if self._terminal_event else None

    @property
    def transcript(self) -> Optional[Transcript]:
        """Latest transcript seen during iteration (``None`` before the first event)."""
        return self._transcript


__all__ = ["StreamController"]

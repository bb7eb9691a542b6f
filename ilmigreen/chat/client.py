"""Chat client for the IlmiGreen assistant.

Summary:
- Posts the full transcript to the chat function and consumes the streamed
  reply through :class:`ChatStreamConsumer`.
- Every exchange ends with exactly one terminal ``ChatStreamEvent``. A
  request that fails before streaming starts produces a single FAILED event
  carrying the unchanged transcript; no stream parsing happens then.

Errors & Observability:
- Failed responses are turned into :class:`TransportError` (429 maps to
  ``rate_limit``, 402 to ``quota``) and logged as ``chat.http_error``.
- Stream progress is logged by the consumer (``stream.*`` events) under the
  same :class:`LogContext`.

This module orchestrates I/O only; decoding and accumulation live in
``ilmigreen.base.streaming``.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Iterator, Optional, Sequence, Tuple

import httpx

from ..base.cancellation import CancellationToken
from ..base.constants import MISSING_API_KEY_ERROR, MISSING_BASE_URL_ERROR
from ..base.dto import ChatExchangeDTO
from ..base.errors import ErrorCode, ServiceError, TransportError
from ..base.http import (
    TRANSPORT_EXCEPTIONS,
    build_headers,
    get_httpx_client,
    transport_error_from_exception,
    transport_error_from_response,
)
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import Message, Transcript
from ..base.streaming import ChatStreamConsumer, ChatStreamEvent, StreamController, StreamState
from ..config import get_service_config


class ChatClient:
    """Streaming chat against ``{base_url}{chat_path}``.

    Parameters:
        base_url: Functions host; resolved from config when omitted.
        api_key: Publishable key sent as bearer token; resolved from config
            when omitted.
        chat_path: Path of the chat function (default ``/functions/v1/chat``).
        http_client: Explicit ``httpx.Client`` (tests inject one backed by
            ``httpx.MockTransport``); the shared pool is used otherwise.
        max_pending_chars: Bound for the unterminated stream tail.
        logger: Logger for chat and stream events.

    Side effects:
        - Reads configuration via ``get_service_config``.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        chat_path: Optional[str] = None,
        *,
        http_client: Optional[httpx.Client] = None,
        max_pending_chars: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        cfg = get_service_config(
            {
                "base_url": base_url,
                "api_key": api_key,
                "chat_path": chat_path,
                "max_pending_chars": max_pending_chars,
            }
        )
        self._base_url: str = cfg["base_url"] or ""
        self._api_key: Optional[str] = cfg.get("api_key")
        self._chat_path: str = cfg["chat_path"]
        self._max_pending_chars: int = cfg["max_pending_chars"]
        self._greeting: str = cfg["greeting"]
        self._http_client = http_client
        self._logger = logger or get_logger("ilmigreen.chat")

    @property
    def url(self) -> str:
        return f"{self._base_url}{self._chat_path}"

    def initial_transcript(self, greeting: Optional[str] = None) -> Transcript:
        """Return a new conversation opened by the assistant's greeting."""
        return (Message(role="assistant", content=greeting or self._greeting),)

    def stream_chat(
        self,
        transcript: Sequence[Message],
        token: Optional[CancellationToken] = None,
    ) -> Iterator[ChatStreamEvent]:
        """Send ``transcript`` and iterate the reply as transcript snapshots.

        Parameters:
            transcript: Full conversation including the new user message,
                which must be the last entry.
            token: Optional cancellation token polled between chunks.

        Returns:
            A lazy iterator of ``ChatStreamEvent``; the request is sent when
            iteration starts. Calling again starts a fresh exchange.

        Raises:
            pydantic.ValidationError: ``transcript`` is empty, has blank
                content or does not end with a user message. Raised here,
                before any request.
        """
        base: Transcript = tuple(transcript)
        body = ChatExchangeDTO.from_transcript(base).to_body()
        return self._run(base, body, token)

    def start_stream(
        self,
        transcript: Sequence[Message],
        token: Optional[CancellationToken] = None,
    ) -> StreamController:
        """Like :meth:`stream_chat` but wrapped in a cancellable controller."""
        return StreamController(lambda tok: self.stream_chat(transcript, token=tok), token)

    def send_message(
        self,
        transcript: Sequence[Message],
        text: str,
        token: Optional[CancellationToken] = None,
    ) -> Tuple[Transcript, StreamController]:
        """Append a user message and start streaming the reply.

        Returns the transcript including the new user message (render it right
        away) and the controller for the reply.

        Raises:
            ValueError: ``text`` is blank.
        """
        text = (text or "").strip()
        if not text:
            raise ValueError("message must be non-empty")
        with_user = tuple(transcript) + (Message(role="user", content=text),)
        return with_user, self.start_stream(with_user, token)

    # ---- Internal helpers ----
    def _client(self) -> httpx.Client:
        return self._http_client or get_httpx_client(self._base_url, "chat.stream")

    def _run(
        self,
        transcript: Transcript,
        body: Dict[str, Any],
        token: Optional[CancellationToken],
    ) -> Iterator[ChatStreamEvent]:
        ctx = LogContext(endpoint=self._chat_path, request_id=uuid.uuid4().hex)
        if not self._base_url:
            yield self._stream_fail(transcript, ServiceError(ErrorCode.VALIDATION, MISSING_BASE_URL_ERROR, self._chat_path), ctx)
            return
        if not self._api_key:
            yield self._stream_fail(transcript, ServiceError(ErrorCode.AUTH, MISSING_API_KEY_ERROR, self._chat_path), ctx)
            return

        terminal_sent = False
        try:
            with self._client().stream("POST", self.url, json=body, headers=build_headers(self._api_key)) as resp:
                if not resp.is_success:
                    resp.read()
                    terminal_sent = True
                    yield self._stream_fail(transcript, transport_error_from_response(resp, self._chat_path), ctx)
                    return
                consumer = ChatStreamConsumer(
                    transcript,
                    token=token,
                    max_pending_chars=self._max_pending_chars,
                    logger=self._logger,
                    ctx=ctx,
                )
                for evt in consumer.consume(resp.iter_bytes()):
                    terminal_sent = terminal_sent or evt.finish
                    yield evt
        except TRANSPORT_EXCEPTIONS as exc:
            if not terminal_sent:
                yield self._stream_fail(transcript, transport_error_from_exception(exc, self._chat_path), ctx)

    def _stream_fail(self, transcript: Transcript, err: ServiceError, ctx: LogContext) -> ChatStreamEvent:
        """Log ``err`` and build the single FAILED terminal event for it."""
        normalized_log_event(
            self._logger,
            "chat.http_error",
            ctx,
            phase="start",
            attempt=1,
            error_code=err.code.value,
            emitted=False,
            level=logging.ERROR,
            status_code=err.status_code,
            transport=isinstance(err, TransportError),
            error=err.message,
        )
        return ChatStreamEvent(
            transcript=transcript,
            delta=None,
            finish=True,
            state=StreamState.FAILED,
            error=err.message,
            error_code=err.code.value,
        )


__all__ = ["ChatClient"]

"""
Pydantic DTOs for the chat exchange request.

Purpose
-------
Validate the transcript before it is sent to the chat endpoint so that a
malformed conversation fails locally with a ``ValidationError`` instead of a
server-side 4xx after a round trip.

Rules
-----
- Roles are limited to ``user`` and ``assistant``.
- User content must be a non-blank string. Assistant content is sent as
  published by the stream, whitespace-only replies included.
- The transcript must be non-empty and end with a user message: the
  streamed reply extends the last entry only when it is an assistant message,
  so a trailing assistant entry would be overwritten by the new reply.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field, model_validator

from ..models import Message


class MessageDTO(BaseModel):
    """A single transcript entry on the wire."""

    role: Literal["user", "assistant"]
    content: str

    @model_validator(mode="after")
    def _user_content_non_blank(self) -> "MessageDTO":
        if self.role == "user" and not self.content.strip():
            raise ValueError("user content must be non-empty")
        return self

    @classmethod
    def from_message(cls, message: Message) -> "MessageDTO":
        return cls(role=message.role, content=message.content)


class ChatExchangeDTO(BaseModel):
    """Body of ``POST /functions/v1/chat``: ``{"messages": [...]}``."""

    messages: List[MessageDTO] = Field(..., min_length=1)

    @model_validator(mode="after")
    def _ends_with_user(self) -> "ChatExchangeDTO":
        if self.messages[-1].role != "user":
            raise ValueError("last message must be from 'user'")
        return self

    @classmethod
    def from_transcript(cls, transcript) -> "ChatExchangeDTO":
        return cls(messages=[MessageDTO.from_message(m) for m in transcript])

    def to_body(self) -> Dict[str, Any]:
        return self.model_dump()


__all__ = ["MessageDTO", "ChatExchangeDTO"]

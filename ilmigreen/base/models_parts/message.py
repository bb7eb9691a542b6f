"""
Chat message model.

``Message`` is immutable: the stream consumer publishes transcript snapshots
as tuples of messages, and a snapshot handed to a renderer must never change
underneath it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Tuple

Role = Literal["user", "assistant"]


@dataclass(frozen=True)
class Message:
    """One transcript entry.

    Attributes:
        role: ``"user"`` or ``"assistant"``.
        content: Plain text of the message.
    """

    role: Role
    content: str

    @property
    def is_assistant(self) -> bool:
        return self.role == "assistant"

    def to_dict(self) -> Dict[str, Any]:
        return {"role": self.role, "content": self.content}


# Ordered conversation history as published to renderers.
Transcript = Tuple[Message, ...]


__all__ = ["Message", "Role", "Transcript"]

"""
Structured service exceptions.

``ServiceError`` wraps any failure talking to the IlmiGreen functions host
with a normalized :class:`ErrorCode`. ``TransportError`` is the subclass used
for connection failures and non-success HTTP statuses; it aborts a stream and
is surfaced to the caller exactly once.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ServiceError(Exception):
    """A failure with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode`.
        message: Human-readable message (server-provided when available).
        endpoint: Path of the endpoint involved (e.g. ``/functions/v1/chat``).
        status_code: HTTP status when the failure came from a response.
        retryable: Hint for callers deciding whether to repeat the exchange.
        raw: Original exception, for diagnostics.
    """

    code: ErrorCode
    message: str
    endpoint: Optional[str] = None
    status_code: Optional[int] = None
    retryable: bool = False
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        status = f" [{self.status_code}]" if self.status_code is not None else ""
        return f"{self.endpoint or '-'}{status} {self.code.value}: {self.message}"


@dataclass
class TransportError(ServiceError):
    """Connection failure or non-success status while talking to the service."""


__all__ = ["ServiceError", "TransportError"]

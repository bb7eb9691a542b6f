"""Cooperative cancellation primitives (public surface).

A :class:`CancellationToken` is handed to a stream consumer; the consumer
polls it between chunks and stops with a terminal ``cancelled`` event once it
is set. Cancelling a parent token cascades to its children, so one UI action
can abort several exchanges.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]

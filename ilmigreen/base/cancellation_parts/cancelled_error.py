"""Cancellation error type."""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation observes a cancellation request.

    Kept separate from transport failures so callers can tell a user abort
    from a broken connection.
    """


__all__ = ["CancelledError"]

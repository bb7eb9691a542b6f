"""
Malformed stream frame error.

Raised by the payload extractor when a ``data:`` payload is not valid JSON.
The stream consumer absorbs it: the line is retried once after more input
arrives and then skipped. It never aborts a stream.
"""
from __future__ import annotations


class MalformedFrameError(ValueError):
    """A data payload that could not be parsed as a JSON object."""

    def __init__(self, payload: str, reason: str) -> None:
        super().__init__(f"malformed data payload: {reason}")
        self.payload = payload
        self.reason = reason


__all__ = ["MalformedFrameError"]

"""Helpers shared by the service clients for building requests and reading
failed responses.

Both edge functions answer failures with a JSON body of the form
``{"error": "<message>"}``; the message is surfaced to the user as is.
"""

from __future__ import annotations

import json
from typing import Dict, Optional

import httpx

from ..constants import GENERIC_HTTP_ERROR, JSON_CONTENT_TYPE
from ..errors import RETRYABLE_CODES, ErrorCode, TransportError, classify_exception, classify_status

# Failures raised by httpx while sending a request or reading its body.
# ``InvalidURL`` and ``StreamError`` sit outside the ``HTTPError`` tree.
TRANSPORT_EXCEPTIONS = (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError)


def build_headers(api_key: str) -> Dict[str, str]:
    """Return the JSON + bearer headers expected by the functions host."""
    return {
        "Content-Type": JSON_CONTENT_TYPE,
        "Authorization": f"Bearer {api_key}",
    }


def error_message_from_body(body: str | bytes | None) -> Optional[str]:
    """Extract the ``error`` field from a JSON error body, if present."""
    if not body:
        return None
    try:
        data = json.loads(body)
    except ValueError:
        return None
    if isinstance(data, dict):
        err = data.get("error")
        if isinstance(err, str) and err.strip():
            return err.strip()
    return None


def transport_error_from_response(response: httpx.Response, endpoint: str) -> TransportError:
    """Build the :class:`TransportError` describing a non-success response.

    The response body must already be read.
    """
    code = classify_status(response.status_code)
    message = error_message_from_body(response.content) or f"{GENERIC_HTTP_ERROR} ({response.status_code})"
    return TransportError(
        code=code,
        message=message,
        endpoint=endpoint,
        status_code=response.status_code,
        retryable=code in RETRYABLE_CODES,
    )


def transport_error_from_exception(exc: Exception, endpoint: str) -> TransportError:
    """Wrap a connection-level failure (``httpx.HTTPError`` and friends).

    An unparseable URL (``httpx.InvalidURL``) is a configuration problem and
    maps to ``validation``; anything unclassified becomes ``transient``.
    """
    if isinstance(exc, httpx.InvalidURL):
        code = ErrorCode.VALIDATION
    else:
        code = classify_exception(exc)
    if code is ErrorCode.UNKNOWN:
        code = ErrorCode.TRANSIENT
    return TransportError(
        code=code,
        message=str(exc) or exc.__class__.__name__,
        endpoint=endpoint,
        retryable=code in RETRYABLE_CODES,
        raw=exc,
    )


__all__ = [
    "TRANSPORT_EXCEPTIONS",
    "build_headers",
    "error_message_from_body",
    "transport_error_from_response",
    "transport_error_from_exception",
]

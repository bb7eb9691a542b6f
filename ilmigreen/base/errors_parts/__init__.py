"""Errors parts package.

Prefer importing from :mod:`ilmigreen.base.errors`.
"""

from .error_code import ErrorCode
from .service_error import ServiceError, TransportError
from .malformed_frame import MalformedFrameError
from .classification import RETRYABLE_CODES, classify_exception, classify_status

__all__ = [
    "ErrorCode",
    "ServiceError",
    "TransportError",
    "MalformedFrameError",
    "classify_exception",
    "classify_status",
    "RETRYABLE_CODES",
]

"""Error taxonomy public surface.

Re-exports the one-class-per-file implementations under
``ilmigreen.base.errors_parts`` so callers have a single stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.service_error import ServiceError, TransportError
from .errors_parts.malformed_frame import MalformedFrameError
from .errors_parts.classification import RETRYABLE_CODES, classify_exception, classify_status

__all__ = [
    "ErrorCode",
    "ServiceError",
    "TransportError",
    "MalformedFrameError",
    "classify_exception",
    "classify_status",
    "RETRYABLE_CODES",
]

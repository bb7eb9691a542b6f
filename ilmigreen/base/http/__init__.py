"""Shared HTTP client pool and response helpers."""

from .client import close_all_clients, get_httpx_client
from .responses import (
    TRANSPORT_EXCEPTIONS,
    build_headers,
    error_message_from_body,
    transport_error_from_exception,
    transport_error_from_response,
)

__all__ = [
    "get_httpx_client",
    "close_all_clients",
    "TRANSPORT_EXCEPTIONS",
    "build_headers",
    "error_message_from_body",
    "transport_error_from_exception",
    "transport_error_from_response",
]

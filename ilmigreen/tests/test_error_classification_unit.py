"""Unit tests for error classification."""
from __future__ import annotations

import httpx
import pytest

from ilmigreen.base.errors import (
    RETRYABLE_CODES,
    ErrorCode,
    ServiceError,
    TransportError,
    classify_exception,
    classify_status,
)
from ilmigreen.base.http import error_message_from_body, transport_error_from_exception


@pytest.mark.parametrize(
    "status,code",
    [
        (400, ErrorCode.VALIDATION),
        (401, ErrorCode.AUTH),
        (402, ErrorCode.QUOTA),
        (404, ErrorCode.NOT_FOUND),
        (429, ErrorCode.RATE_LIMIT),
        (500, ErrorCode.SERVER_ERROR),
        (503, ErrorCode.UNAVAILABLE),
        (599, ErrorCode.SERVER_ERROR),
        (418, ErrorCode.UNKNOWN),
    ],
)
def test_classify_status(status, code):
    assert classify_status(status) is code  # nosec B101


def test_service_error_passthrough():
    err = TransportError(ErrorCode.QUOTA, "Kredit habis")
    assert classify_exception(err) is ErrorCode.QUOTA  # nosec B101
    assert isinstance(err, ServiceError)  # nosec B101


def test_timeouts_and_transport_failures():
    assert classify_exception(TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(httpx.ReadTimeout("slow")) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(httpx.ConnectError("refused")) is ErrorCode.TRANSIENT  # nosec B101


def test_status_attribute_on_foreign_exception():
    class _Err(Exception):
        status_code = 429

    assert classify_exception(_Err("x")) is ErrorCode.RATE_LIMIT  # nosec B101


def test_http_status_error_uses_response_status():
    request = httpx.Request("POST", "https://ilmigreen.test/functions/v1/chat")
    response = httpx.Response(402, request=request)
    exc = httpx.HTTPStatusError("payment required", request=request, response=response)
    assert classify_exception(exc) is ErrorCode.QUOTA  # nosec B101


def test_message_heuristics_and_fallback():
    assert classify_exception(RuntimeError("Rate limit reached")) is ErrorCode.RATE_LIMIT  # nosec B101
    assert classify_exception(RuntimeError("Unauthorized")) is ErrorCode.AUTH  # nosec B101
    assert classify_exception(RuntimeError("something odd")) is ErrorCode.UNKNOWN  # nosec B101


def test_retryable_codes():
    assert ErrorCode.RATE_LIMIT in RETRYABLE_CODES  # nosec B101
    assert ErrorCode.QUOTA not in RETRYABLE_CODES  # nosec B101


def test_error_message_from_body():
    assert error_message_from_body(b'{"error": " Kredit habis "}') == "Kredit habis"  # nosec B101
    assert error_message_from_body(b'{"error": 5}') is None  # nosec B101
    assert error_message_from_body(b"not json") is None  # nosec B101
    assert error_message_from_body(None) is None  # nosec B101


def test_unknown_connection_failure_is_transient():
    err = transport_error_from_exception(OSError("broken pipe"), "/functions/v1/chat")
    assert err.code is ErrorCode.TRANSIENT  # nosec B101
    assert err.retryable  # nosec B101
    assert err.endpoint == "/functions/v1/chat"  # nosec B101

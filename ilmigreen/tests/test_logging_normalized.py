"""Focused tests for ilmigreen.base.logging.

Covers:
- _parse_level string parsing
- normalized_log_event emits the required keys
- JsonFormatter hoists structured messages
- configure_logger file handler management
"""
from __future__ import annotations

import json
import logging

from ilmigreen.base.log_support import JsonFormatter, LogContext
from ilmigreen.base.logging import (
    REQUIRED_NORMALIZED_KEYS,
    _parse_level,  # type: ignore[attr-defined]
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


def _capturing_logger(name: str) -> tuple[logging.Logger, _ListHandler]:
    logger = get_logger(name)
    handler = _ListHandler()
    logger.handlers[:] = [handler]
    logger.propagate = False
    return logger, handler


def test_parse_level_variants():
    assert _parse_level(None) == logging.INFO  # nosec B101
    assert _parse_level("debug") == logging.DEBUG  # nosec B101
    assert _parse_level("WARN") == logging.WARNING  # nosec B101
    assert _parse_level("unknown", default=logging.ERROR) == logging.ERROR  # nosec B101


def test_normalized_log_event_emits_required_keys():
    logger, handler = _capturing_logger("ilmigreen.test.normalized")
    ctx = LogContext(endpoint="/functions/v1/chat", request_id="r1")
    normalized_log_event(
        logger,
        "stream.error",
        ctx,
        phase="finalize",
        attempt=1,
        error_code="rate_limit",
        emitted=False,
        state="failed",
    )
    payload = json.loads(handler.messages[-1])
    for key in REQUIRED_NORMALIZED_KEYS:
        assert key in payload  # nosec B101
    assert payload["event"] == "stream.error"  # nosec B101
    assert payload["endpoint"] == "/functions/v1/chat"  # nosec B101
    assert payload["request_id"] == "r1"  # nosec B101
    assert payload["state"] == "failed"  # nosec B101


def test_normalized_extra_fields_do_not_override_set_keys():
    logger, handler = _capturing_logger("ilmigreen.test.normalized2")
    normalized_log_event(logger, "x", None, phase="stream", attempt=2, emitted=None, **{"attempt_extra": 1})
    payload = json.loads(handler.messages[-1])
    assert payload["attempt"] == 2  # nosec B101
    assert payload["emitted"] is None  # nosec B101
    assert "error_code" not in payload  # nosec B101


def test_log_event_drops_none_fields():
    logger, handler = _capturing_logger("ilmigreen.test.plain")
    log_event(logger, "detect.start", LogContext(extra={"kind": "text", "skip": None}), a=None, b=1)
    payload = json.loads(handler.messages[-1])
    assert payload == {"event": "detect.start", "kind": "text", "b": 1}  # nosec B101


def test_json_formatter_hoists_message_keys():
    record = logging.LogRecord("ilmigreen.x", logging.INFO, __file__, 1, json.dumps({"event": "e", "n": 1}), None, None)
    out = json.loads(JsonFormatter().format(record))
    assert out["event"] == "e"  # nosec B101
    assert out["n"] == 1  # nosec B101
    assert out["level"] == "INFO"  # nosec B101
    assert "msg" not in out  # nosec B101


def test_configure_logger_attaches_and_removes_file_handler(tmp_path):
    path = tmp_path / "logs" / "ilmigreen.log"
    logger = configure_logger(level="DEBUG", file_path=str(path))
    try:
        assert any(getattr(h, "baseFilename", None) == str(path) for h in logger.handlers)  # nosec B101
        assert logger.level == logging.DEBUG  # nosec B101
    finally:
        configure_logger(level=logging.INFO, file_path=None)
    assert not any(getattr(h, "baseFilename", None) == str(path) for h in logger.handlers)  # nosec B101

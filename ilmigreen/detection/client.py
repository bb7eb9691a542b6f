"""Waste detection client.

Sends a description or an image to the ``detect-waste`` function and returns
the classification as a :class:`DetectionResult`.

Failure modes:
- blank text or missing image: ``ValueError`` before any request;
- connection failure, non-success status or an ``{"error": ...}`` body:
  :class:`TransportError` (429 ``rate_limit``, 402 ``quota``);
- a success body that is not a valid classification: :class:`ServiceError`
  with code ``validation``.
"""

from __future__ import annotations

import logging
import time
import uuid
from pathlib import Path
from typing import Any, Optional, Union

import httpx
from pydantic import ValidationError

from ..base.constants import MISSING_API_KEY_ERROR, MISSING_BASE_URL_ERROR
from ..base.dto import DetectionRequestDTO, DetectionResultDTO
from ..base.dto.detection import DetectionKind
from ..base.errors import ErrorCode, ServiceError, TransportError
from ..base.http import (
    TRANSPORT_EXCEPTIONS,
    build_headers,
    error_message_from_body,
    get_httpx_client,
    transport_error_from_exception,
    transport_error_from_response,
)
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import DetectionResult
from ..config import get_service_config
from .images import image_file_to_data_url


class WasteDetectionClient:
    """Classify waste items through ``{base_url}{detect_path}``.

    Parameters mirror :class:`ilmigreen.chat.ChatClient`; values left as
    ``None`` come from ``get_service_config``.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        detect_path: Optional[str] = None,
        *,
        http_client: Optional[httpx.Client] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        cfg = get_service_config({"base_url": base_url, "api_key": api_key, "detect_path": detect_path})
        self._base_url: str = cfg["base_url"] or ""
        self._api_key: Optional[str] = cfg.get("api_key")
        self._detect_path: str = cfg["detect_path"]
        self._http_client = http_client
        self._logger = logger or get_logger("ilmigreen.detection")

    @property
    def url(self) -> str:
        return f"{self._base_url}{self._detect_path}"

    def detect_text(self, text: str) -> DetectionResult:
        """Classify a free-text description of a waste item."""
        return self.detect(text, "text")

    def detect_image(self, image_url: str) -> DetectionResult:
        """Classify an image given as an http(s) or ``data:`` URL."""
        return self.detect(image_url, "image")

    def detect_image_file(self, path: Union[str, Path]) -> DetectionResult:
        """Classify a local PNG/JPEG file (sent inline as a data URL)."""
        return self.detect(image_file_to_data_url(path), "image")

    def detect(self, input: Optional[str], kind: DetectionKind = "text") -> DetectionResult:
        """Send one detection request.

        Parameters:
            input: Description (``kind="text"``) or image URL (``kind="image"``).
            kind: ``"text"`` or ``"image"``.

        Returns:
            The validated :class:`DetectionResult`.

        Raises:
            ValueError: blank ``input`` or unknown ``kind`` (a pydantic
                ``ValidationError``).
            TransportError: connection failure or error response.
            ServiceError: missing configuration, or an invalid success body.
        """
        body = DetectionRequestDTO(input=input or "", type=kind).to_body()
        ctx = LogContext(endpoint=self._detect_path, request_id=uuid.uuid4().hex, extra={"kind": kind})
        if not self._base_url:
            raise self._fail(ServiceError(ErrorCode.VALIDATION, MISSING_BASE_URL_ERROR, self._detect_path), ctx)
        if not self._api_key:
            raise self._fail(ServiceError(ErrorCode.AUTH, MISSING_API_KEY_ERROR, self._detect_path), ctx)

        normalized_log_event(self._logger, "detect.start", ctx, phase="start", attempt=1, emitted=False)
        t0 = time.perf_counter()
        try:
            client = self._http_client or get_httpx_client(self._base_url, "detect")
            resp = client.post(self.url, json=body, headers=build_headers(self._api_key))
        except TRANSPORT_EXCEPTIONS as exc:
            raise self._fail(transport_error_from_exception(exc, self._detect_path), ctx) from exc
        if not resp.is_success:
            raise self._fail(transport_error_from_response(resp, self._detect_path), ctx)

        result = self._parse(resp, ctx)
        normalized_log_event(
            self._logger,
            "detect.end",
            ctx,
            phase="finalize",
            attempt=1,
            emitted=True,
            jenis=result.waste_type.value,
            latency_ms=round((time.perf_counter() - t0) * 1000.0, 2),
        )
        return result

    def _parse(self, resp: httpx.Response, ctx: LogContext) -> DetectionResult:
        try:
            data: Any = resp.json()
        except ValueError as exc:
            raise self._fail(
                ServiceError(ErrorCode.VALIDATION, "response is not JSON", self._detect_path, resp.status_code, raw=exc),
                ctx,
            ) from exc
        if isinstance(data, dict) and "error" in data:
            message = error_message_from_body(resp.content) or str(data["error"])
            raise self._fail(
                TransportError(ErrorCode.SERVER_ERROR, message, self._detect_path, resp.status_code), ctx
            )
        try:
            return DetectionResultDTO.model_validate(data).to_domain()
        except ValidationError as exc:
            raise self._fail(
                ServiceError(ErrorCode.VALIDATION, "invalid detection result", self._detect_path, resp.status_code, raw=exc),
                ctx,
            ) from exc

    def _fail(self, err: ServiceError, ctx: LogContext) -> ServiceError:
        normalized_log_event(
            self._logger,
            "detect.error",
            ctx,
            phase="finalize",
            attempt=1,
            error_code=err.code.value,
            emitted=False,
            level=logging.ERROR,
            status_code=err.status_code,
            error=err.message,
        )
        return err


__all__ = ["WasteDetectionClient"]

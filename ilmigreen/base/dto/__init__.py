"""Pydantic DTOs validating request and response bodies at the HTTP edge."""

from .chat import ChatExchangeDTO, MessageDTO
from .detection import DetectionRequestDTO, DetectionResultDTO

__all__ = [
    "MessageDTO",
    "ChatExchangeDTO",
    "DetectionRequestDTO",
    "DetectionResultDTO",
]

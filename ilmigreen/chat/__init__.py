"""Streaming chat with the IlmiGreen assistant."""

from .client import ChatClient

__all__ = ["ChatClient"]

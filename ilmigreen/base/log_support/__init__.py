"""Formatter and context helpers used by :mod:`ilmigreen.base.logging`."""

from .json_formatter import JsonFormatter, ISO
from .logging_context import LogContext

__all__ = ["JsonFormatter", "ISO", "LogContext"]

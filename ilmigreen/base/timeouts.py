"""Timeout configuration for HTTP calls.

All network timeouts used by the client come from :func:`get_timeout_config`;
no other module hard-codes a timeout value.

Environment variables (all optional, positive floats):
    ILMIGREEN_TIMEOUT_CONNECT_SECONDS
    ILMIGREEN_TIMEOUT_READ_SECONDS    (idle wait for the next stream chunk)
    ILMIGREEN_TIMEOUT_WRITE_SECONDS
    ILMIGREEN_TIMEOUT_POOL_SECONDS

The parsed configuration is cached per process; when any of the variables
changes the cache is rebuilt on the next call.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx

_ENV_NAMES = (
    "ILMIGREEN_TIMEOUT_CONNECT_SECONDS",
    "ILMIGREEN_TIMEOUT_READ_SECONDS",
    "ILMIGREEN_TIMEOUT_WRITE_SECONDS",
    "ILMIGREEN_TIMEOUT_POOL_SECONDS",
)


@dataclass(frozen=True)
class TimeoutConfig:
    """Timeout values in seconds.

    Attributes:
        connect_timeout_seconds: Establishing the TCP/TLS connection.
        read_timeout_seconds: Waiting for response bytes; for a stream this is
            the longest allowed gap between two chunks.
        write_timeout_seconds: Sending the request body (image data URLs can
            be large).
        pool_timeout_seconds: Waiting for a free pooled connection.
    """

    connect_timeout_seconds: float = 10.0
    read_timeout_seconds: float = 60.0
    write_timeout_seconds: float = 30.0
    pool_timeout_seconds: float = 10.0

    def to_httpx(self) -> httpx.Timeout:
        return httpx.Timeout(
            connect=self.connect_timeout_seconds,
            read=self.read_timeout_seconds,
            write=self.write_timeout_seconds,
            pool=self.pool_timeout_seconds,
        )


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - module cache
    guard = "/".join(os.getenv(name, "") for name in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float(_ENV_NAMES[0], defaults.connect_timeout_seconds),
        read_timeout_seconds=_parse_env_float(_ENV_NAMES[1], defaults.read_timeout_seconds),
        write_timeout_seconds=_parse_env_float(_ENV_NAMES[2], defaults.write_timeout_seconds),
        pool_timeout_seconds=_parse_env_float(_ENV_NAMES[3], defaults.pool_timeout_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


def reset_timeout_config() -> None:
    """Drop the cached configuration (tests)."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603
    _CACHED = None
    _ENV_GUARD = None


__all__ = ["TimeoutConfig", "get_timeout_config", "reset_timeout_config"]

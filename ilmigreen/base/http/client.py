"""Shared HTTP client pool.

Purpose:
    Reuse ``httpx.Client`` instances across calls instead of opening a new
    connection pool per request. Clients are keyed by ``(base_url, purpose)``
    so the streaming chat connection and the detection calls do not share a
    pool.

Timeouts:
    Taken from :func:`get_timeout_config` when a client is first created and
    fixed for that client afterwards.

Lifecycle:
    All pooled clients are closed at interpreter exit; tests may call
    :func:`close_all_clients` directly.
"""

from __future__ import annotations

import atexit
import threading
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config

_CLIENTS: Dict[Tuple[Optional[str], str], httpx.Client] = {}
_LOCK = threading.RLock()


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.Client:
    """Return the pooled client for ``base_url`` and ``purpose``.

    Parameters:
        base_url: Functions host URL. Set on the client so callers can use
            relative paths; ``None`` groups clients under a shared key.
        purpose: Short pool discriminator such as ``"chat.stream"`` or
            ``"detect"``.

    Thread-safety:
        Creation is guarded by a re-entrant lock.
    """
    key = (base_url, purpose)
    client = _CLIENTS.get(key)
    if client is not None:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None:
            return client
        timeout = get_timeout_config().to_httpx()
        client = httpx.Client(base_url=base_url, timeout=timeout) if base_url else httpx.Client(timeout=timeout)
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and forget every pooled client."""
    with _LOCK:
        for c in _CLIENTS.values():
            c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]

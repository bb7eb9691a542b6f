"""Unit tests for the shared httpx client pool.

Covers:
- Same key (base_url, purpose) returns the same instance.
- Different purpose or base_url yields different instances.
- Timeouts come from the timeout configuration.
"""
from __future__ import annotations

from ilmigreen.base.http import build_headers, close_all_clients, get_httpx_client


def test_same_key_returns_same_instance():
    c1 = get_httpx_client("https://ilmigreen.test", purpose="chat.stream")
    c2 = get_httpx_client("https://ilmigreen.test", purpose="chat.stream")
    assert c1 is c2, "Expected pooled client instances to be identical for same key"  # nosec B101


def test_different_purpose_or_base_url_returns_different_instances():
    c1 = get_httpx_client("https://ilmigreen.test", purpose="chat.stream")
    c2 = get_httpx_client("https://ilmigreen.test", purpose="detect")
    c3 = get_httpx_client("https://other.test", purpose="detect")
    assert c1 is not c2  # nosec B101
    assert c2 is not c3  # nosec B101


def test_timeouts_follow_config(monkeypatch):
    monkeypatch.setenv("ILMIGREEN_TIMEOUT_READ_SECONDS", "7")
    client = get_httpx_client("https://ilmigreen.test", purpose="timeouts")
    assert client.timeout.read == 7.0  # nosec B101


def test_close_all_clients_forgets_instances():
    c1 = get_httpx_client("https://ilmigreen.test", purpose="chat.stream")
    close_all_clients()
    assert c1.is_closed  # nosec B101
    assert get_httpx_client("https://ilmigreen.test", purpose="chat.stream") is not c1  # nosec B101


def test_build_headers():
    assert build_headers("k") == {"Content-Type": "application/json", "Authorization": "Bearer k"}  # nosec B101

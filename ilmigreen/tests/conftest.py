"""Pytest configuration for the ilmigreen test suite.

Every test runs with the service environment variables cleared, no dotenv
file and fresh config/timeout caches, so results do not depend on the
developer's shell. Pooled HTTP clients are closed afterwards.
"""

from __future__ import annotations

import json
import logging
from typing import Callable, Iterator, List

import pytest

from ilmigreen.base.http import close_all_clients
from ilmigreen.base.logging import BASE_LOGGER_NAME, get_logger
from ilmigreen.base.timeouts import reset_timeout_config
from ilmigreen.config import reset_config_cache
from ilmigreen.config.env import ENV_ALIASES

_EXTRA_ENV = (
    "ILMIGREEN_CONFIG_FILE",
    "ILMIGREEN_LOG_LEVEL",
    "ILMIGREEN_TIMEOUT_CONNECT_SECONDS",
    "ILMIGREEN_TIMEOUT_READ_SECONDS",
    "ILMIGREEN_TIMEOUT_WRITE_SECONDS",
    "ILMIGREEN_TIMEOUT_POOL_SECONDS",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    for names in ENV_ALIASES.values():
        for name in names:
            monkeypatch.delenv(name, raising=False)
    for name in _EXTRA_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "absent.env"))
    reset_config_cache()
    reset_timeout_config()
    yield
    reset_config_cache()
    reset_timeout_config()
    close_all_clients()


class _ListHandler(logging.Handler):
    """Capture formatted messages of the shared logger."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    def events(self) -> List[dict]:
        out = []
        for r in self.records:
            try:
                out.append(json.loads(r.getMessage()))
            except ValueError:
                continue
        return out

    def names(self) -> List[str]:
        return [e.get("event") for e in self.events()]


@pytest.fixture()
def log_capture(monkeypatch: pytest.MonkeyPatch) -> Iterator[_ListHandler]:
    """Collect structured events logged under the ``ilmigreen`` namespace."""
    monkeypatch.setenv("ILMIGREEN_LOG_LEVEL", "DEBUG")
    base = get_logger(BASE_LOGGER_NAME)
    handler = _ListHandler()
    base.addHandler(handler)
    try:
        yield handler
    finally:
        base.removeHandler(handler)


@pytest.fixture()
def frame() -> Callable[..., str]:
    """Build one ``data:`` line carrying ``choices[0].delta.content``."""

    def _frame(content: str | None = None, *, raw: str | None = None) -> str:
        if raw is not None:
            return f"data: {raw}\n"
        payload = {"choices": [{"delta": {} if content is None else {"content": content}}]}
        return f"data: {json.dumps(payload)}\n"

    return _frame

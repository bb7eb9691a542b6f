"""Unified configuration layer for the ilmigreen client.

Goals
-----
* Centralize defaults (endpoint paths, stream limits, greeting).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) named by
       ``ILMIGREEN_CONFIG_FILE``; only its ``service`` section is read
    3. Environment variables (see :mod:`ilmigreen.config.env`)
    4. In-code overrides passed to :func:`get_service_config`
* Load a ``.env`` file once before reading the environment.

External Config File (Optional)
-------------------------------
```
service:
  base_url: https://xyzcompany.supabase.co
  api_key: ${SUPABASE_PUBLISHABLE_KEY}
  max_pending_chars: 262144
```

Public API
----------
* get_service_config(overrides: dict | None = None) -> dict
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    CHAT_DEFAULT_GREETING,
    SERVICE_CHAT_PATH,
    SERVICE_DEFAULT_BASE_URL,
    SERVICE_DETECT_PATH,
    STREAM_MAX_PENDING_CHARS,
)
from .env import ENV_ALIASES, is_placeholder, resolve_env


DEFAULTS: Dict[str, Any] = {
    "base_url": SERVICE_DEFAULT_BASE_URL,
    "api_key": None,
    "chat_path": SERVICE_CHAT_PATH,
    "detect_path": SERVICE_DETECT_PATH,
    "max_pending_chars": STREAM_MAX_PENDING_CHARS,
    "greeting": CHAT_DEFAULT_GREETING,
}

_INT_FIELDS = ("max_pending_chars",)

_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Parse ``KEY=VALUE`` lines from the dotenv file into ``os.environ``.

    Existing variables win unless their value is a placeholder. Comments and
    malformed lines are skipped. Safe to call repeatedly.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _load_external_config() -> Dict[str, Any]:
    """Return the ``service`` section of the external config file (cached)."""
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv("ILMIGREEN_CONFIG_FILE")
    if not path or not Path(path).exists():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        data = yaml.safe_load(text) or {}
    section = data.get("service") if isinstance(data, dict) else None
    _FILE_CACHE = section if isinstance(section, dict) else {}
    return _FILE_CACHE


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field in ENV_ALIASES:
        val, _ = resolve_env(field)
        if val is not None:
            out[field] = val
    return out


def _coerce(cfg: Dict[str, Any]) -> Dict[str, Any]:
    for field in _INT_FIELDS:
        try:
            cfg[field] = int(cfg[field])
        except (TypeError, ValueError):
            cfg[field] = DEFAULTS[field]
    if isinstance(cfg.get("base_url"), str):
        cfg["base_url"] = cfg["base_url"].rstrip("/")
    return cfg


def get_service_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged service configuration.

    Merge order (later wins): defaults -> external file -> env vars -> overrides.
    ``None`` values in ``overrides`` are ignored so callers can pass optional
    keyword arguments straight through.
    """
    _load_dotenv_once()
    cfg: Dict[str, Any] = dict(DEFAULTS)
    cfg |= _load_external_config()
    cfg |= _env_overrides()
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return _coerce(cfg)


def reset_config_cache() -> None:
    """Forget the cached external file and dotenv state (used by tests)."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


__all__ = [
    "DEFAULTS",
    "get_service_config",
    "reset_config_cache",
]

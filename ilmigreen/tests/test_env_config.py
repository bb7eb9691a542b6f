"""Configuration merge tests: defaults, file, env aliases, dotenv, overrides."""
from __future__ import annotations

import json

from ilmigreen.base.timeouts import get_timeout_config
from ilmigreen.config import DEFAULTS, get_service_config, reset_config_cache
from ilmigreen.config.env import is_placeholder, resolve_env


def test_defaults_when_nothing_configured():
    cfg = get_service_config()
    assert cfg["base_url"] == ""  # nosec B101
    assert cfg["api_key"] is None  # nosec B101
    assert cfg["chat_path"] == "/functions/v1/chat"  # nosec B101
    assert cfg["detect_path"] == "/functions/v1/detect-waste"  # nosec B101
    assert cfg["max_pending_chars"] == DEFAULTS["max_pending_chars"]  # nosec B101


def test_canonical_env_name_wins_over_aliases(monkeypatch):
    monkeypatch.setenv("VITE_SUPABASE_URL", "https://vite.supabase.test")
    monkeypatch.setenv("ILMIGREEN_BASE_URL", "https://canonical.test/")
    value, name = resolve_env("base_url")
    assert (value, name) == ("https://canonical.test/", "ILMIGREEN_BASE_URL")  # nosec B101
    assert get_service_config()["base_url"] == "https://canonical.test"  # nosec B101


def test_placeholder_values_are_ignored(monkeypatch):
    monkeypatch.setenv("ILMIGREEN_API_KEY", "changeme")
    monkeypatch.setenv("SUPABASE_PUBLISHABLE_KEY", "real-key")
    assert get_service_config()["api_key"] == "real-key"  # nosec B101
    assert is_placeholder("YOUR_PLACEHOLDER")  # nosec B101
    assert is_placeholder("test_abc")  # nosec B101
    assert not is_placeholder("sb_publishable_123")  # nosec B101


def test_config_file_yaml_then_env_then_overrides(monkeypatch, tmp_path):
    cfg_file = tmp_path / "ilmigreen.yaml"
    cfg_file.write_text(
        "service:\n"
        "  base_url: https://file.test\n"
        "  chat_path: /functions/v1/chat-beta\n"
        "  max_pending_chars: 2048\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("ILMIGREEN_CONFIG_FILE", str(cfg_file))
    reset_config_cache()

    cfg = get_service_config()
    assert cfg["base_url"] == "https://file.test"  # nosec B101
    assert cfg["chat_path"] == "/functions/v1/chat-beta"  # nosec B101
    assert cfg["max_pending_chars"] == 2048  # nosec B101

    monkeypatch.setenv("ILMIGREEN_CHAT_PATH", "/functions/v1/chat-env")
    assert get_service_config()["chat_path"] == "/functions/v1/chat-env"  # nosec B101

    cfg = get_service_config({"chat_path": "/x", "base_url": None})
    assert cfg["chat_path"] == "/x"  # nosec B101
    assert cfg["base_url"] == "https://file.test"  # nosec B101


def test_config_file_json(monkeypatch, tmp_path):
    cfg_file = tmp_path / "ilmigreen.json"
    cfg_file.write_text(json.dumps({"service": {"detect_path": "/d"}}), encoding="utf-8")
    monkeypatch.setenv("ILMIGREEN_CONFIG_FILE", str(cfg_file))
    reset_config_cache()
    assert get_service_config()["detect_path"] == "/d"  # nosec B101


def test_invalid_int_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("ILMIGREEN_MAX_PENDING_CHARS", "lots")
    assert get_service_config()["max_pending_chars"] == DEFAULTS["max_pending_chars"]  # nosec B101


def test_dotenv_fills_unset_variables_only(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\n"
        'VITE_SUPABASE_URL="https://dotenv.test"\n'
        "ILMIGREEN_API_KEY=from-dotenv\n"
        "not a pair\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("DOTENV_FILE", str(env_file))
    monkeypatch.setenv("ILMIGREEN_API_KEY", "from-shell")
    # keys set by the dotenv loader are removed again after the test
    monkeypatch.setenv("VITE_SUPABASE_URL", "")
    monkeypatch.delenv("VITE_SUPABASE_URL")
    reset_config_cache()

    cfg = get_service_config()
    assert cfg["base_url"] == "https://dotenv.test"  # nosec B101
    assert cfg["api_key"] == "from-shell"  # nosec B101


def test_timeout_config_from_env(monkeypatch):
    assert get_timeout_config().read_timeout_seconds == 60.0  # nosec B101
    monkeypatch.setenv("ILMIGREEN_TIMEOUT_READ_SECONDS", "5")
    monkeypatch.setenv("ILMIGREEN_TIMEOUT_CONNECT_SECONDS", "-1")
    cfg = get_timeout_config()
    assert cfg.read_timeout_seconds == 5.0  # nosec B101
    assert cfg.connect_timeout_seconds == 10.0  # nosec B101
    assert cfg.to_httpx().read == 5.0  # nosec B101

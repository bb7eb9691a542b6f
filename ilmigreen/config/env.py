"""ilmigreen.config.env
====================

Environment variable names for service settings and helpers to read them.

Design Notes
------------
- Each config field maps to an ordered tuple of variable names in
  ``ENV_ALIASES``; the canonical ``ILMIGREEN_*`` name comes first, followed by
  the names used by the web front-end build (``SUPABASE_*`` / ``VITE_*``) so an
  existing ``.env`` from that project works unchanged.
- Placeholder values (``changeme``, ``example`` …) are treated as unset.

Failure Modes
-------------
Helpers never raise on unknown fields or unset variables; they return
``None`` and let callers fall back to defaults.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Config field -> ordered env var names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "base_url": ("ILMIGREEN_BASE_URL", "SUPABASE_URL", "VITE_SUPABASE_URL"),
    "api_key": (  # pragma: allowlist secret - env var names, not secrets
        "ILMIGREEN_API_KEY",
        "SUPABASE_PUBLISHABLE_KEY",
        "VITE_SUPABASE_PUBLISHABLE_KEY",
    ),
    "chat_path": ("ILMIGREEN_CHAT_PATH",),
    "detect_path": ("ILMIGREEN_DETECT_PATH",),
    "max_pending_chars": ("ILMIGREEN_MAX_PENDING_CHARS",),
    "greeting": ("ILMIGREEN_GREETING",),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if ``val`` looks like a placeholder rather than a real value.

    Matches (case-insensitive) values containing ``placeholder``, ``changeme``
    or ``example``, and values starting with ``test_``.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def get_env_var_candidates(field: str) -> Iterable[str]:
    """Yield env var names for a config field in priority order."""
    yield from ENV_ALIASES.get((field or "").lower().strip(), ())


def resolve_env(field: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, env_name)`` for the first usable variable of ``field``.

    Empty and placeholder values are skipped. ``(None, None)`` when nothing
    usable is set.
    """
    for name in get_env_var_candidates(field):
        val = os.environ.get(name)
        if val is None:
            continue
        val = val.strip()
        if not val or is_placeholder(val):
            continue
        return val, name
    return None, None


__all__ = [
    "ENV_ALIASES",
    "is_placeholder",
    "get_env_var_candidates",
    "resolve_env",
]

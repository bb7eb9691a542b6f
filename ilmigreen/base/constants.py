"""Base shared constants for the service clients.

Central location to avoid scattering magic strings.

Security
--------
Only generic sentinel strings live here; no credentials or tokens.

# pragma: allowlist secret
"""
from __future__ import annotations

# Missing configuration sentinels
MISSING_API_KEY_ERROR = "missing_api_key"  # pragma: allowlist secret - generic placeholder string, not a real secret
MISSING_BASE_URL_ERROR = "missing_base_url"

# Used when a failed response carries no readable error message
GENERIC_HTTP_ERROR = "request failed"

JSON_CONTENT_TYPE = "application/json"

__all__ = [
    "MISSING_API_KEY_ERROR",
    "MISSING_BASE_URL_ERROR",
    "GENERIC_HTTP_ERROR",
    "JSON_CONTENT_TYPE",
]

"""Helpers for safe debug logging.

Tracking payloads carry visitor identifiers (cookie, IP address, email).
This module redacts them before they reach DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qsl, urlsplit

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset(
    {
        "cookie",
        "cookie_value",
        "ip",
        "ip_address",
        "email",
        "cv_email",
        "phone",
        "cv_phone",
    }
)


def _is_sensitive(key: str) -> bool:
    return key.lower() in _SENSITIVE_VALUE_KEYS


def _shorten(value: Any, max_string: int) -> Any:
    if isinstance(value, str) and len(value) > max_string:
        return f"{value[:max_string]}…<truncated>"
    return value


def redact_for_log(payload: Mapping[str, Any], *, max_string: int = 512) -> dict[str, Any]:
    """Return a copy of an option or identity mapping suitable for debug logs."""
    return {
        key: "<redacted>" if _is_sensitive(key) else _shorten(value, max_string)
        for key, value in payload.items()
    }


def redact_url(url: str) -> str:
    """Return *url* with sensitive query parameter values replaced."""
    parts = urlsplit(url)
    if not parts.query:
        return url
    pairs = [
        f"{key}={'<redacted>' if _is_sensitive(key) else value}"
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return f"{parts.scheme}://{parts.netloc}{parts.path}?{'&'.join(pairs)}"

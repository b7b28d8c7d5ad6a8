"""Tracker options: immutable defaults, per-client current values, pending deltas.

The browser agent keeps its own copy of the options, so script emission
only re-sends what changed since the last flush (the *pending* deltas),
while the direct transport reads the merged *current* values.
"""

from __future__ import annotations

import logging
import secrets
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pywoopra._constants import COOKIE_ALPHABET, COOKIE_LENGTH, COOKIE_NAME
from pywoopra.exceptions import WoopraOptionError
from pywoopra.models.context import RequestContext

_logger = logging.getLogger(__name__)

DEFAULT_OPTIONS: Mapping[str, str | bool | int] = MappingProxyType(
    {
        "domain": "",
        "cookie_name": COOKIE_NAME,
        "cookie_domain": "",
        "cookie_path": "/",
        "ping": True,
        "ping_interval": 12000,
        "idle_timeout": 300000,
        "download_tracking": True,
        "outgoing_tracking": True,
        "download_pause": 200,
        "outgoing_pause": 400,
        "ignore_query_url": True,
        "hide_campaign": False,
        "ip_address": "",
        "cookie_value": "",
    }
)
"""Option name -> default value. The default's type is the accepted type."""


def generate_cookie_value() -> str:
    """Return a fresh visitor identity: 12 characters from ``[0-9A-Z]``."""
    return "".join(secrets.choice(COOKIE_ALPHABET) for _ in range(COOKIE_LENGTH))


@dataclass(slots=True)
class ApplyResult:
    """Outcome of :meth:`ConfigStore.apply`."""

    accepted: dict[str, Any] = field(default_factory=dict)
    rejected: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.rejected


class ConfigStore:
    """Current tracker options plus the deltas not yet sent to the browser."""

    def __init__(self) -> None:
        self._current: dict[str, Any] = dict(DEFAULT_OPTIONS)
        self._pending: dict[str, Any] = {}

    @classmethod
    def initialize(cls, context: RequestContext, *, cookie_name: str = COOKIE_NAME) -> ConfigStore:
        """Create a store seeded from the inbound request.

        ``ip_address`` comes from the remote address; ``cookie_value``
        from the inbound identity cookie, or a generated one when the
        visitor has none.
        """
        store = cls()
        store._current["ip_address"] = context.remote_addr
        store._current["cookie_value"] = context.cookies.get(cookie_name) or generate_cookie_value()
        return store

    @property
    def current(self) -> Mapping[str, Any]:
        """Read-only view of the merged options."""
        return MappingProxyType(self._current)

    @property
    def pending(self) -> Mapping[str, Any]:
        """Read-only view of the options changed since the last drain."""
        return MappingProxyType(self._pending)

    def get(self, key: str) -> Any:
        return self._current[key]

    @staticmethod
    def validate(key: str, value: Any) -> None:
        """Raise :class:`WoopraOptionError` unless *value* is acceptable for *key*."""
        if key not in DEFAULT_OPTIONS:
            raise WoopraOptionError(f"unknown option {key!r}", option=key, value=value)
        expected = type(DEFAULT_OPTIONS[key])
        # Exact match: bool is an int subclass and must not pass for int options.
        if type(value) is not expected:
            raise WoopraOptionError(
                f"option {key!r} expects {expected.__name__}, got {type(value).__name__}",
                option=key,
                value=value,
            )

    def apply(self, overrides: Mapping[str, Any]) -> ApplyResult:
        """Merge *overrides* key by key.

        Invalid keys are skipped and reported in the result; valid keys
        land in both the current and the pending options. Never raises.
        """
        result = ApplyResult()
        for key, value in overrides.items():
            try:
                self.validate(key, value)
            except WoopraOptionError as exc:
                _logger.warning("Ignoring tracker option: %s", exc)
                result.rejected[key] = str(exc)
                continue

            self._current[key] = value
            self._pending[key] = value
            result.accepted[key] = value

            if key == "domain" and not self._current["cookie_domain"]:
                self._current["cookie_domain"] = value
        return result

    def drain_pending(self) -> dict[str, Any]:
        """Return the pending deltas and clear them."""
        pending, self._pending = self._pending, {}
        return pending

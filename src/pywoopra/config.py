"""Client configuration for pywoopra."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pywoopra._constants import BASE_URL, COOKIE_NAME, DEFAULT_REQUEST_TIMEOUT, USER_AGENT
from pywoopra.exceptions import WoopraConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class WoopraConfig:
    """Client configuration.

    These settings describe how the client talks to the collector. The
    tracker *options* sent to the browser agent (``domain``,
    ``idle_timeout``, ...) live in :mod:`pywoopra.state.options`.

    Parameters
    ----------
    base_url : str
        Collector tracking endpoint. ``identify/`` and ``ce/`` are
        appended for direct-transport calls.
    request_timeout : float
        Total timeout in seconds for a direct-transport GET. Expiry
        drops the event.
    encode_pageview_url : bool
        Percent-encode the ``ce_url`` of a direct bare pageview. Off by
        default to stay wire-compatible with existing collectors, which
        receive ``host + path`` verbatim.
    cookie_name : str
        Name of the inbound cookie holding the visitor identity.
    user_agent : str
        ``User-Agent`` header for direct-transport requests.
    """

    base_url: str = BASE_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    encode_pageview_url: bool = False
    cookie_name: str = COOKIE_NAME
    user_agent: str = USER_AGENT

    @classmethod
    def from_env(cls, **overrides: Any) -> WoopraConfig:
        """Create configuration from ``WOOPRA_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        WoopraConfigError
            If ``WOOPRA_REQUEST_TIMEOUT`` is not a positive number.
        """
        env = os.environ

        config_kwargs: dict[str, Any] = {}
        _ENV_CONFIG_MAP = {
            "WOOPRA_BASE_URL": "base_url",
            "WOOPRA_COOKIE_NAME": "cookie_name",
            "WOOPRA_USER_AGENT": "user_agent",
        }
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        timeout_env = env.get("WOOPRA_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                timeout = float(timeout_env)
            except ValueError as exc:
                raise WoopraConfigError(f"WOOPRA_REQUEST_TIMEOUT must be a number, got {timeout_env!r}") from exc
            if timeout <= 0:
                raise WoopraConfigError(f"WOOPRA_REQUEST_TIMEOUT must be positive, got {timeout}")
            config_kwargs["request_timeout"] = timeout

        if "encode_pageview_url" not in overrides:
            config_kwargs["encode_pageview_url"] = _env_bool(
                env.get("WOOPRA_ENCODE_PAGEVIEW_URL"),
                False,
            )

        config_kwargs.update(overrides)

        base_url = str(config_kwargs.get("base_url", BASE_URL))
        if not base_url.endswith("/"):
            config_kwargs["base_url"] = base_url + "/"

        return cls(**config_kwargs)

"""Custom exception hierarchy for pywoopra."""

from __future__ import annotations

from typing import Any


class WoopraError(Exception):
    """Base exception for all pywoopra errors."""


class WoopraConfigError(WoopraError):
    """Invalid or missing client configuration."""


class WoopraOptionError(WoopraConfigError):
    """Tracker option rejected (unknown name or wrong value type).

    Raised by :meth:`pywoopra.state.options.ConfigStore.validate`.
    :meth:`~pywoopra.state.options.ConfigStore.apply` catches it per key,
    so a bad option never aborts a ``configure`` call.
    """

    def __init__(self, message: str, *, option: str, value: Any = None) -> None:
        self.option = option
        self.value = value
        super().__init__(message)


class WoopraTransportError(WoopraError):
    """HTTP-level failure talking to the collector (network, timeout, non-2xx)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)

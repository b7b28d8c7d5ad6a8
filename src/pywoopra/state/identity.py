"""Identified-user state."""

from __future__ import annotations

from collections.abc import Mapping


class IdentityState:
    """Attributes of the currently identified visitor.

    Each :meth:`set` replaces the whole identity. The identity stays
    readable after it has been emitted to the browser, since direct
    transport calls attach it as ``cv_*`` parameters on every request.
    """

    def __init__(self) -> None:
        self._user: dict[str, str] | None = None
        self._emitted = True

    def set(self, user: Mapping[str, str]) -> None:
        self._user = dict(user)
        self._emitted = False

    def get(self) -> dict[str, str] | None:
        return None if self._user is None else dict(self._user)

    @property
    def is_set(self) -> bool:
        return self._user is not None

    def take_pending(self) -> dict[str, str] | None:
        """Return the identity if it has not been emitted since the last :meth:`set`."""
        if self._emitted or self._user is None:
            return None
        self._emitted = True
        return dict(self._user)

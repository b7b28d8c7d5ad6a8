"""Ordered buffer of custom events awaiting script emission."""

from __future__ import annotations

from pywoopra.models.event import TrackedEvent


class EventQueue:
    """Append-only until drained; drained as a whole."""

    def __init__(self) -> None:
        self._events: list[TrackedEvent] = []

    def __len__(self) -> int:
        return len(self._events)

    def __bool__(self) -> bool:
        return bool(self._events)

    def enqueue(self, event: TrackedEvent) -> None:
        self._events.append(event)

    def drain(self) -> list[TrackedEvent]:
        """Return all queued events in insertion order and empty the queue."""
        events, self._events = self._events, []
        return events

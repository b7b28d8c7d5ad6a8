"""Data models for pywoopra."""

from pywoopra.models.context import RequestContext
from pywoopra.models.event import TrackedEvent

__all__ = [
    "RequestContext",
    "TrackedEvent",
]

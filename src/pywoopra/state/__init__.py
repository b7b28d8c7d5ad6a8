"""Per-client tracker state: options, identity, and the event queue."""

from pywoopra.state.identity import IdentityState
from pywoopra.state.options import DEFAULT_OPTIONS, ApplyResult, ConfigStore, generate_cookie_value
from pywoopra.state.queue import EventQueue

__all__ = [
    "DEFAULT_OPTIONS",
    "ApplyResult",
    "ConfigStore",
    "EventQueue",
    "IdentityState",
    "generate_cookie_value",
]

"""Browser script rendering for the client-side Woopra agent.

Every ``render_*`` helper returns a JavaScript statement; the caller
decides whether it is wrapped in its own ``<script>`` element or joined
into the bootstrap block.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Protocol

from pywoopra._constants import LOADER_JS
from pywoopra.models.event import TrackedEvent


class ScriptSink(Protocol):
    """Destination for emitted markup (a response body, a template buffer...)."""

    def write(self, text: str) -> None:
        ...


class ScriptBuffer:
    """In-memory :class:`ScriptSink` used when the host does not inject one."""

    def __init__(self) -> None:
        self._chunks: list[str] = []

    def write(self, text: str) -> None:
        self._chunks.append(text)

    def getvalue(self) -> str:
        return "".join(self._chunks)

    def clear(self) -> None:
        self._chunks.clear()


def js_literal(value: Any) -> str:
    """JSON-encode *value* for inline embedding.

    ``</`` is escaped so a value can never terminate the enclosing
    ``<script>`` element.
    """
    return json.dumps(value, default=str).replace("</", "<\\/")


def render_configure(options: Mapping[str, Any]) -> str:
    return f"woopra.config({js_literal(dict(options))});"


def render_identify(user: Mapping[str, str]) -> str:
    return f"woopra.identify({js_literal(dict(user))});"


def render_track(event: TrackedEvent) -> str:
    return f"woopra.track({js_literal(event.name)}, {js_literal(event.properties)});"


def render_pageview() -> str:
    return "woopra.track();"


def render_push() -> str:
    return "woopra.push();"


def wrap_script(*statements: str) -> str:
    """Wrap statements in a standalone ``<script>`` element."""
    body = "\n".join(statements)
    return f"<script>\n{body}\n</script>\n"


def render_widget(statements: list[str]) -> str:
    """Bootstrap markup: the agent loader followed by the initial flush."""
    body = "\n\n".join([LOADER_JS, *statements])
    return f"\n<!-- Woopra code starts here -->\n<script>\n{body}\n</script>\n<!-- Woopra code ends here -->\n"

"""High-level request-scoped tracking client."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import aiohttp

from pywoopra import _script
from pywoopra._script import ScriptBuffer, ScriptSink
from pywoopra._transport import HttpTransport, Transport
from pywoopra.config import WoopraConfig
from pywoopra.dispatcher import Dispatcher
from pywoopra.models.context import RequestContext
from pywoopra.models.event import TrackedEvent
from pywoopra.state.identity import IdentityState
from pywoopra.state.options import ApplyResult, ConfigStore
from pywoopra.state.queue import EventQueue

_logger = logging.getLogger(__name__)


class WoopraTracker:
    """Tracks one visitor for the lifetime of one inbound request.

    Calls made before :meth:`render_widget` are buffered and flushed into
    the bootstrap script; afterwards each call emits its own
    ``<script>`` block. Passing ``via_direct_transport=True`` bypasses
    the browser and reports straight to the collector.

    Usage::

        async with WoopraTracker(RequestContext.from_environ(environ)) as tracker:
            tracker.configure({"domain": "example.com"})
            await tracker.identify({"email": "jane@example.com"})
            tracker.render_widget()
            await tracker.track("signup", {"plan": "pro"})
            html = tracker.sink.getvalue()

    Tracking never raises into the host application: invalid options are
    skipped and collector failures are dropped, both with a log record.
    """

    def __init__(
        self,
        context: RequestContext,
        config: WoopraConfig | None = None,
        *,
        sink: ScriptSink | None = None,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config or WoopraConfig()
        self._context = context
        self._external_session = session is not None
        self._http_session = session
        self._sink: ScriptSink = sink if sink is not None else ScriptBuffer()
        self._options = ConfigStore.initialize(context, cookie_name=self._config.cookie_name)
        self._identity = IdentityState()
        self._queue = EventQueue()
        self._dispatcher = Dispatcher(
            self._config,
            context,
            self._options,
            self._identity,
            self._queue,
            self._sink,
            transport,
        )
        self._ready = False
        self.last_apply_result: ApplyResult | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> WoopraTracker:
        if self._dispatcher.transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._dispatcher.transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._dispatcher.transport = None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def is_ready(self) -> bool:
        """Whether the agent bootstrap has been rendered."""
        return self._ready

    @property
    def cookie_value(self) -> str:
        """Visitor identity; set it as the ``wooTracker`` cookie when it was generated."""
        return str(self._options.get("cookie_value"))

    @property
    def options(self) -> Mapping[str, Any]:
        return self._options.current

    @property
    def identity(self) -> dict[str, str] | None:
        return self._identity.get()

    @property
    def sink(self) -> ScriptSink:
        """Where script output goes; a :class:`ScriptBuffer` unless one was injected."""
        return self._sink

    @property
    def http_session(self) -> aiohttp.ClientSession | None:
        """The aiohttp session used for direct transport, if one is open."""
        return self._http_session

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    # ------------------------------------------------------------------
    # Tracking API
    # ------------------------------------------------------------------

    def configure(self, overrides: Mapping[str, Any], *, via_direct_transport: bool = False) -> WoopraTracker:
        """Merge tracker options.

        Unknown options and values of the wrong type are skipped; see
        :attr:`last_apply_result` for what was rejected.
        """
        self.last_apply_result = self._options.apply(overrides)
        self._dispatcher.dispatch_configuration(ready=self._ready, direct=via_direct_transport)
        return self

    async def identify(self, user: Mapping[str, str], *, via_direct_transport: bool = False) -> WoopraTracker:
        """Replace the identified visitor's attributes (``email``, ``name``, ...)."""
        self._identity.set(user)
        await self._dispatcher.dispatch_identity(ready=self._ready, direct=via_direct_transport)
        return self

    async def track(
        self,
        event_name: str | None = None,
        properties: Mapping[str, Any] | None = None,
        *,
        via_direct_transport: bool = False,
    ) -> WoopraTracker:
        """Track a custom event, or a pageview when *event_name* is empty."""
        event = TrackedEvent(name=event_name, properties=dict(properties or {})) if event_name else None
        await self._dispatcher.dispatch_event(event, ready=self._ready, direct=via_direct_transport)
        return self

    def render_widget(self) -> WoopraTracker:
        """Write the agent bootstrap and everything buffered so far.

        Only the first call has an effect.
        """
        if self._ready:
            _logger.debug("Widget already rendered; nothing to flush")
            return self
        self._ready = True
        self._sink.write(_script.render_widget(self._dispatcher.drain_statements()))
        return self

    def flush_pending(self) -> WoopraTracker:
        """Ask the browser agent to process its own queued actions."""
        self._sink.write(_script.wrap_script(_script.render_push()))
        return self

"""Buffer-or-emit decisions and the two tracking serializations.

Script mode writes ``woopra.*`` calls for the browser agent to a sink,
but only once the agent bootstrap has been rendered; until then state
stays buffered in the option store, identity and event queue. Direct
mode skips the browser and sends one GET to the collector per call.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote_plus

from pywoopra import _script
from pywoopra._constants import IDENTIFY_PATH, PAGEVIEW_EVENT, TRACK_PATH
from pywoopra._redact import redact_for_log
from pywoopra._script import ScriptSink
from pywoopra._transport import Transport
from pywoopra.config import WoopraConfig
from pywoopra.exceptions import WoopraTransportError
from pywoopra.models.context import RequestContext
from pywoopra.models.event import TrackedEvent
from pywoopra.state.identity import IdentityState
from pywoopra.state.options import ConfigStore
from pywoopra.state.queue import EventQueue

_logger = logging.getLogger(__name__)


def _query_value(value: Any) -> str:
    """Stringify a query value the way the collector's existing clients do (``True`` -> ``1``, ``False`` -> empty)."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else ""
    return str(value)


def _param(key: str, value: Any) -> str:
    return f"{quote_plus(key)}={quote_plus(_query_value(value))}"


class Dispatcher:
    """Serializes tracker state for the browser agent or the collector.

    Readiness is owned by the caller and passed on every call, so the
    same entry points serve both the buffering and the emitting phase.
    """

    def __init__(
        self,
        config: WoopraConfig,
        context: RequestContext,
        options: ConfigStore,
        identity: IdentityState,
        queue: EventQueue,
        sink: ScriptSink,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._context = context
        self._options = options
        self._identity = identity
        self._queue = queue
        self._sink = sink
        self.transport = transport

    # ------------------------------------------------------------------
    # Direct transport
    # ------------------------------------------------------------------

    def _base_params(self) -> list[str]:
        options = self._options.current
        params = [
            _param("host", options["domain"]),
            _param("cookie", options["cookie_value"]),
            _param("ip", options["ip_address"]),
            _param("timeout", options["idle_timeout"]),
        ]
        user = self._identity.get()
        if user:
            params.extend(_param(f"cv_{key}", value) for key, value in user.items())
        return params

    def build_identify_url(self) -> str:
        """Collector URL identifying the current visitor."""
        return f"{self._config.base_url}{IDENTIFY_PATH}?{'&'.join(self._base_params())}"

    def build_track_url(self, event: TrackedEvent | None = None) -> str:
        """Collector URL for a custom event, or a pageview when *event* is ``None``."""
        params = self._base_params()
        if event is not None:
            params.append(_param("ce_name", event.name))
            params.extend(_param(f"ce_{key}", value) for key, value in event.properties.items())
        else:
            params.append(_param("ce_name", PAGEVIEW_EVENT))
            # Existing collectors expect host + path verbatim.
            page_url = self._context.url
            if self._config.encode_pageview_url:
                page_url = quote_plus(page_url)
            params.append(f"ce_url={page_url}")
        return f"{self._config.base_url}{TRACK_PATH}?{'&'.join(params)}"

    async def send(self, url: str) -> bool:
        """Fire a collector request. Failures are logged and dropped."""
        if self.transport is None:
            _logger.warning("Dropping direct tracking request: no transport open (use 'async with WoopraTracker(...)')")
            return False
        try:
            await self.transport.get(url)
        except WoopraTransportError as exc:
            _logger.warning("Dropping direct tracking request: %s", exc)
            return False
        return True

    # ------------------------------------------------------------------
    # Script emission
    # ------------------------------------------------------------------

    def _emit(self, *statements: str) -> None:
        self._sink.write(_script.wrap_script(*statements))

    def drain_statements(self) -> list[str]:
        """Drain all buffered state as script statements.

        Order is fixed: pending options, then identity, then queued
        events in the order they were tracked.
        """
        statements: list[str] = []
        pending = self._options.drain_pending()
        if pending:
            statements.append(_script.render_configure(pending))
        user = self._identity.take_pending()
        if user is not None:
            statements.append(_script.render_identify(user))
        statements.extend(_script.render_track(event) for event in self._queue.drain())
        return statements

    def dispatch_configuration(self, *, ready: bool, direct: bool) -> None:
        # Options have no collector endpoint; direct calls read them from the store.
        if direct or not ready:
            return
        pending = self._options.drain_pending()
        if not pending:
            return
        _logger.debug("Emitting configuration %s", redact_for_log(pending))
        self._emit(_script.render_configure(pending))

    async def dispatch_identity(self, *, ready: bool, direct: bool) -> None:
        if direct:
            await self.send(self.build_identify_url())
            return
        if not ready:
            return
        user = self._identity.take_pending()
        if user is None:
            return
        _logger.debug("Emitting identity %s", redact_for_log(user))
        self._emit(_script.render_identify(user))

    async def dispatch_event(self, event: TrackedEvent | None, *, ready: bool, direct: bool) -> None:
        if direct:
            await self.send(self.build_track_url(event))
            return

        if event is None:
            if ready:
                self._emit(_script.render_pageview())
            else:
                _logger.debug("Skipping pageview: agent bootstrap not rendered yet")
            return

        self._queue.enqueue(event)
        if ready:
            self._emit(*(_script.render_track(queued) for queued in self._queue.drain()))

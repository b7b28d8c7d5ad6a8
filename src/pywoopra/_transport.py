"""HTTP transport for direct (server-to-server) tracking requests."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

import aiohttp
from yarl import URL

from pywoopra._redact import redact_url
from pywoopra.config import WoopraConfig
from pywoopra.exceptions import WoopraTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the dispatcher.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get(self, url: str) -> int:
        ...


class HttpTransport:
    """Issues collector GET requests over a shared aiohttp session."""

    def __init__(self, config: WoopraConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def get(self, url: str) -> int:
        """GET *url* and discard the body.

        *url* is sent exactly as built: its query string is already
        encoded and must not be re-quoted. Returns the HTTP status.

        Raises
        ------
        WoopraTransportError
            On network errors, timeouts, and non-2xx responses.
        """
        headers = {"user-agent": self._config.user_agent}
        _logger.debug("GET %s", redact_url(url))

        try:
            async with self._http.get(URL(url, encoded=True), headers=headers, timeout=self._timeout) as resp:
                await resp.read()
                if not 200 <= resp.status < 300:
                    raise WoopraTransportError(
                        f"HTTP {resp.status} from collector",
                        status_code=resp.status,
                        url=url,
                    )
                return resp.status
        except WoopraTransportError:
            raise
        except asyncio.TimeoutError as exc:
            raise WoopraTransportError(
                f"Request timed out after {self._config.request_timeout}s",
                url=url,
            ) from exc
        except aiohttp.ClientError as exc:
            raise WoopraTransportError(f"Request failed: {exc}", url=url) from exc

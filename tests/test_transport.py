from __future__ import annotations

import asyncio
from typing import Any

import aiohttp
import pytest

from pywoopra._transport import HttpTransport
from pywoopra.config import WoopraConfig
from pywoopra.exceptions import WoopraTransportError

URL_WITH_RAW_PAGE = "http://www.woopra.com/track/ce/?host=x.com&ce_name=pv&ce_url=shop.x.com/items?id=7"


class _FakeResponse:
    def __init__(self, status: int) -> None:
        self.status = status
        self.read_called = False

    async def read(self) -> bytes:
        self.read_called = True
        return b""


class _FakeRequest:
    def __init__(self, response: _FakeResponse | None, error: BaseException | None) -> None:
        self._response = response
        self._error = error

    async def __aenter__(self) -> _FakeResponse:
        if self._error is not None:
            raise self._error
        assert self._response is not None
        return self._response

    async def __aexit__(self, *exc: Any) -> bool:
        return False


class _FakeSession:
    def __init__(self, *, status: int = 200, error: BaseException | None = None) -> None:
        self.response = _FakeResponse(status)
        self.error = error
        self.calls: list[tuple[Any, dict[str, Any]]] = []

    def get(self, url: Any, **kwargs: Any) -> _FakeRequest:
        self.calls.append((url, kwargs))
        return _FakeRequest(self.response, self.error)


def _transport(session: _FakeSession, **config: Any) -> HttpTransport:
    return HttpTransport(WoopraConfig(**config), session)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_get_sends_url_unmodified_and_reads_body() -> None:
    session = _FakeSession(status=200)

    status = await _transport(session, request_timeout=2.5).get(URL_WITH_RAW_PAGE)

    assert status == 200
    assert session.response.read_called is True
    url, kwargs = session.calls[0]
    assert str(url) == URL_WITH_RAW_PAGE
    assert kwargs["timeout"].total == 2.5
    assert kwargs["headers"]["user-agent"] == "pywoopra"


@pytest.mark.asyncio
async def test_non_2xx_raises_transport_error() -> None:
    session = _FakeSession(status=502)

    with pytest.raises(WoopraTransportError) as exc_info:
        await _transport(session).get(URL_WITH_RAW_PAGE)

    assert exc_info.value.status_code == 502
    assert exc_info.value.url == URL_WITH_RAW_PAGE


@pytest.mark.asyncio
async def test_timeout_raises_transport_error() -> None:
    session = _FakeSession(error=asyncio.TimeoutError())

    with pytest.raises(WoopraTransportError, match="timed out"):
        await _transport(session).get(URL_WITH_RAW_PAGE)


@pytest.mark.asyncio
async def test_client_error_raises_transport_error() -> None:
    session = _FakeSession(error=aiohttp.ClientConnectionError("connection refused"))

    with pytest.raises(WoopraTransportError, match="connection refused") as exc_info:
        await _transport(session).get(URL_WITH_RAW_PAGE)

    assert exc_info.value.status_code is None

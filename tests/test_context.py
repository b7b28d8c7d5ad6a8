from __future__ import annotations

import pydantic
import pytest

from pywoopra.client import WoopraTracker
from pywoopra.models.context import RequestContext
from pywoopra.models.event import TrackedEvent


def test_from_environ_prefers_request_uri() -> None:
    context = RequestContext.from_environ(
        {
            "REMOTE_ADDR": "1.2.3.4",
            "HTTP_HOST": "shop.x.com",
            "REQUEST_URI": "/items?id=7",
            "PATH_INFO": "/ignored",
            "HTTP_COOKIE": "wooTracker=COOKIE1; theme=dark",
        }
    )

    assert context.remote_addr == "1.2.3.4"
    assert context.url == "shop.x.com/items?id=7"
    assert context.cookies == {"wooTracker": "COOKIE1", "theme": "dark"}


def test_from_environ_rebuilds_path_without_request_uri() -> None:
    context = RequestContext.from_environ(
        {
            "SERVER_NAME": "internal",
            "SCRIPT_NAME": "/app",
            "PATH_INFO": "/checkout",
            "QUERY_STRING": "step=2",
        }
    )

    assert context.host == "internal"
    assert context.path == "/app/checkout?step=2"
    assert context.remote_addr == ""
    assert context.cookies == {}


def test_context_is_frozen() -> None:
    context = RequestContext(host="x.com")

    with pytest.raises(pydantic.ValidationError):
        context.host = "y.com"  # type: ignore[misc]


def test_event_requires_name() -> None:
    with pytest.raises(pydantic.ValidationError):
        TrackedEvent(name="")


def test_from_environ_keeps_identity_cookie_next_to_malformed_pair() -> None:
    context = RequestContext.from_environ({"HTTP_COOKIE": "pref=dark mode; wooTracker=VISITOR00001; theme=light"})

    assert context.cookies["wooTracker"] == "VISITOR00001"
    assert context.cookies["theme"] == "light"
    assert "pref" not in context.cookies


def test_tracker_reuses_cookie_from_mixed_header() -> None:
    context = RequestContext.from_environ({"HTTP_COOKIE": "a=b c; wooTracker=VISITOR00001"})

    assert WoopraTracker(context).cookie_value == "VISITOR00001"


@pytest.mark.parametrize(
    ("path_info", "expected"),
    [
        ("/a b", "h.com/a%20b"),
        # PEP 3333 native string: UTF-8 bytes decoded as latin-1.
        ("/caf\xc3\xa9", "h.com/caf%C3%A9"),
        ("/café", "h.com/caf%C3%A9"),
        ("/100%", "h.com/100%"),
    ],
)
def test_from_environ_requotes_decoded_path_info(path_info: str, expected: str) -> None:
    context = RequestContext.from_environ({"HTTP_HOST": "h.com", "PATH_INFO": path_info, "QUERY_STRING": "q=1"})

    assert context.url == f"{expected}?q=1"


def test_from_environ_prefers_raw_uri_over_path_info() -> None:
    context = RequestContext.from_environ({"HTTP_HOST": "h.com", "RAW_URI": "/a%20b?x=1", "PATH_INFO": "/a b"})

    assert context.url == "h.com/a%20b?x=1"


@pytest.mark.asyncio
async def test_direct_pageview_from_rebuilt_path_is_a_valid_request_line() -> None:
    urls: list[str] = []

    class _Collector:
        async def get(self, url: str) -> int:
            urls.append(url)
            return 200

    context = RequestContext.from_environ({"HTTP_HOST": "h.com", "PATH_INFO": "/a b"})
    tracker = WoopraTracker(context, transport=_Collector())

    await tracker.track(via_direct_transport=True)

    assert urls[0].endswith("&ce_name=pv&ce_url=h.com/a%20b")
    assert " " not in urls[0]

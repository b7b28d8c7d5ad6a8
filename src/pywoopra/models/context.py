"""Inbound request context consumed by the tracker."""

from __future__ import annotations

from collections.abc import Mapping
from http.cookies import CookieError, SimpleCookie
from typing import Any
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

# Characters left as-is when re-quoting a decoded WSGI path.
_PATH_SAFE = "/;:@&=+$,%~"


def _parse_cookie_header(raw: str) -> dict[str, str]:
    """Parse a ``Cookie`` header pair by pair.

    ``SimpleCookie.load`` silently drops the whole header when one pair is
    malformed, so each pair is loaded on its own and only bad ones are skipped.
    """
    cookies: dict[str, str] = {}
    for pair in raw.split(";"):
        pair = pair.strip()
        if not pair:
            continue
        cookie: SimpleCookie = SimpleCookie()
        try:
            cookie.load(pair)
        except CookieError:
            continue
        cookies.update((key, morsel.value) for key, morsel in cookie.items())
    return cookies


def _quote_wsgi_path(path: str) -> str:
    """Re-encode a WSGI ``PATH_INFO`` (already URL-decoded, latin-1 native string)."""
    try:
        raw = path.encode("latin-1")
        raw.decode("utf-8")
    except (UnicodeEncodeError, UnicodeDecodeError):
        return quote(path, safe=_PATH_SAFE)
    return quote(raw, safe=_PATH_SAFE)


class RequestContext(BaseModel):
    """The parts of the current inbound request the tracker reads.

    Parameters
    ----------
    remote_addr : str
        Client IP address; becomes the ``ip_address`` option.
    host : str
        ``Host`` header; prefix of a direct bare-pageview ``ce_url``.
    path : str
        Request URI including the query string.
    cookies : dict
        Inbound cookies by name.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    remote_addr: str = ""
    host: str = ""
    path: str = "/"
    cookies: dict[str, str] = Field(default_factory=dict)

    @property
    def url(self) -> str:
        """``host`` and ``path`` joined verbatim."""
        return f"{self.host}{self.path}"

    @classmethod
    def from_environ(cls, environ: Mapping[str, Any]) -> RequestContext:
        """Build a context from a WSGI environ mapping.

        The raw request URI (``REQUEST_URI`` or gunicorn's ``RAW_URI``) is
        used when the server provides it. Otherwise the path is rebuilt from
        the decoded ``SCRIPT_NAME``/``PATH_INFO``, re-quoted, plus the raw
        ``QUERY_STRING``.
        """
        path = environ.get("REQUEST_URI") or environ.get("RAW_URI")
        if not path:
            decoded = f"{environ.get('SCRIPT_NAME', '')}{environ.get('PATH_INFO', '')}" or "/"
            path = _quote_wsgi_path(decoded)
            query = environ.get("QUERY_STRING")
            if query:
                path = f"{path}?{query}"

        host = environ.get("HTTP_HOST") or environ.get("SERVER_NAME", "")

        return cls(
            remote_addr=str(environ.get("REMOTE_ADDR", "")),
            host=str(host),
            path=str(path),
            cookies=_parse_cookie_header(str(environ.get("HTTP_COOKIE", ""))),
        )

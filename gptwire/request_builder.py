"""Assemble outgoing HTTP requests with JSON or raw bodies."""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional
from urllib.parse import urlsplit

from .marshal import marshal

_TOKEN_CHARS = frozenset("!#$%&'*+-.^_`|~" + string.ascii_letters + string.digits)


@dataclass
class HTTPRequest:
    """A request ready to be sent."""

    method: str
    url: str
    body: Optional[bytes] = None
    headers: Dict[str, Any] = field(default_factory=dict)


def _check_method(method: str) -> None:
    if not all(c in _TOKEN_CHARS for c in method):
        raise ValueError(f"invalid method {method!r}")


def _check_url(url: str) -> None:
    if any(ord(c) < 0x20 or ord(c) == 0x7F for c in url):
        raise ValueError(f"invalid control character in URL {url!r}")
    if url.startswith(":"):
        raise ValueError(f"parse {url!r}: missing protocol scheme")
    urlsplit(url)


class RequestBuilder:
    """Turn a method, URL, body and headers into an :class:`HTTPRequest`.

    Bytes and readable objects are sent as they are; any other body is
    encoded by ``marshaller``.
    """

    def __init__(self, marshaller: Optional[Callable[[Any], bytes]] = None) -> None:
        self._marshaller = marshaller if marshaller is not None else marshal

    def build(
        self,
        method: str,
        url: str,
        body: Any = None,
        headers: Optional[Mapping[str, Any]] = None,
    ) -> HTTPRequest:
        payload: Optional[bytes] = None
        if body is not None:
            if isinstance(body, (bytes, bytearray, memoryview)):
                payload = bytes(body)
            elif callable(getattr(body, "read", None)):
                data = body.read()
                payload = data.encode("utf-8") if isinstance(data, str) else bytes(data)
            else:
                payload = self._marshaller(body)

        method = method or "GET"
        _check_method(method)
        _check_url(url)
        return HTTPRequest(
            method=method,
            url=url,
            body=payload,
            headers=dict(headers) if headers is not None else {},
        )
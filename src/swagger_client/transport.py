"""Sends materialized requests over HTTP with requests."""

import logging
from collections.abc import Mapping
from typing import Any, Protocol

import requests

from swagger_client.parser.base import RequestOptions

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

URLENCODED = "application/x-www-form-urlencoded"
MULTIPART = "multipart/form-data"


class Transport(Protocol):
    """Anything that can send a URL + RequestOptions pair and return a response."""

    def fetch(self, url: str, options: RequestOptions) -> Any: ...


class RequestsTransport:
    """Transport backed by a requests.Session."""

    def __init__(self, session: requests.Session | None = None, timeout: float = DEFAULT_TIMEOUT):
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch(self, url: str, options: RequestOptions) -> requests.Response:
        """Send the request and return the response as-is (no status check)."""
        headers = _flatten_headers(options.headers)
        kwargs: dict[str, Any] = {"headers": headers, "timeout": self.timeout}

        body = options.body
        if isinstance(body, Mapping):
            if body:
                kwargs.update(_encode_mapping(headers, body))
        elif body is not None:
            kwargs["data"] = body

        logger.debug("%s %s", options.method, url)
        return self.session.request(options.method, url, **kwargs)


def _flatten_headers(headers: Mapping[str, Any]) -> dict[str, str]:
    """requests only accepts str header values; lists (e.g. accept) are comma joined."""
    flat = {}
    for name, value in headers.items():
        if isinstance(value, (list, tuple)):
            value = ", ".join(str(v) for v in value)
        flat[name] = str(value)
    return flat


def _encode_mapping(headers: dict[str, str], body: Mapping[str, Any]) -> dict[str, Any]:
    """Pick the requests argument for a mapping body based on the declared content-type.

    Form bodies drop the declared content-type so requests can set its own
    (multipart needs the boundary).
    """
    name = next((k for k in headers if k.lower() == "content-type"), None)
    content_type = headers.get(name, "") if name else ""

    if MULTIPART in content_type:
        del headers[name]
        return {"files": {k: (None, _multipart_value(v)) for k, v in body.items()}}
    if URLENCODED in content_type:
        del headers[name]
        return {"data": dict(body)}
    return {"json": dict(body)}


def _multipart_value(value: Any) -> Any:
    """Binary payloads and open files go through untouched; other scalars as text."""
    if isinstance(value, (bytes, bytearray)) or hasattr(value, "read"):
        return value
    return str(value)

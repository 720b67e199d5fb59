from __future__ import annotations

"""
Request construction: pure builders producing immutable Request values.

No I/O happens here. Parameters whose value is None are dropped before
encoding, and the client-identifying header is attached to every request.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple
from urllib.parse import urlencode
import codecs
import logging

import httpx

from .config import CLIENT_VERSION_HEADER, DEFAULT_CLIENT_VERSION

logger = logging.getLogger(__name__)

NameValuePair = Tuple[str, Optional[Any]]
Header = Tuple[str, str]

JSON_MEDIA_TYPE = "application/json"
FORM_MEDIA_TYPE = "application/x-www-form-urlencoded"


@dataclass(frozen=True)
class Request:
    method: str
    url: str
    headers: Tuple[Header, ...] = ()
    content: bytes = b""

    def header(self, name: str) -> Optional[str]:
        lname = name.lower()
        for k, v in self.headers:
            if k.lower() == lname:
                return v
        return None

    def to_httpx(self) -> httpx.Request:
        return httpx.Request(
            self.method,
            self.url,
            headers=list(self.headers),
            content=self.content or None,
        )


def strip_nulls(pairs: Iterable[NameValuePair]) -> List[NameValuePair]:
    """Keep only pairs with a value, in their original order."""
    params: List[NameValuePair] = []
    for name, value in pairs:
        if value is not None:
            logger.debug("Param: %s=%s", name, value)
            params.append((name, value))
    return params


def _encode_params(pairs: Iterable[NameValuePair], charset: str) -> str:
    try:
        codecs.lookup(charset)
        return urlencode(strip_nulls(pairs), encoding=charset)
    except (LookupError, UnicodeError) as e:
        raise ValueError("Unable to encode http parameters.") from e


def _encode_body(data: str, charset: str) -> bytes:
    try:
        codecs.lookup(charset)
        return data.encode(charset)
    except (LookupError, UnicodeError) as e:
        raise ValueError("Unable to encode http parameters.") from e


def _client_header(client_version: Optional[str]) -> Header:
    return (CLIENT_VERSION_HEADER, client_version or DEFAULT_CLIENT_VERSION)


def build_get(
    url: str,
    *params: NameValuePair,
    client_version: Optional[str] = None,
    charset: str = "utf-8",
) -> Request:
    logger.debug("creating GET for: %s", url)
    query = _encode_params(params, charset)
    request = Request("GET", f"{url}?{query}", headers=(_client_header(client_version),))
    logger.debug("Created: %s", request.url)
    return request


def build_post(
    url: str,
    *params: NameValuePair,
    client_version: Optional[str] = None,
    charset: str = "utf-8",
) -> Request:
    logger.debug("creating POST for: %s", url)
    body = _encode_params(params, charset).encode("ascii")
    request = Request(
        "POST",
        url,
        headers=(
            _client_header(client_version),
            ("Content-Type", f"{FORM_MEDIA_TYPE}; charset={charset.upper()}"),
        ),
        content=body,
    )
    logger.debug("Created: %s", request)
    return request


def build_json_post(
    url: str,
    data: str,
    *,
    client_version: Optional[str] = None,
    charset: str = "utf-8",
) -> Request:
    """JSON POST: the body is `data` as given, no parameter encoding."""
    logger.debug("creating JSON POST for: %s", url)
    request = Request(
        "POST",
        url,
        headers=(
            ("Accept", JSON_MEDIA_TYPE),
            ("Content-Type", JSON_MEDIA_TYPE),
            _client_header(client_version),
        ),
        content=_encode_body(data, charset),
    )
    logger.debug("Created: %s", request)
    return request


def build_delete(
    url: str,
    *params: NameValuePair,
    client_version: Optional[str] = None,
    charset: str = "utf-8",
) -> Request:
    logger.debug("creating DELETE for: %s", url)
    query = _encode_params(params, charset)
    request = Request("DELETE", f"{url}?{query}", headers=(_client_header(client_version),))
    logger.debug("Created: %s", request)
    return request


class RequestBuilder:
    """Binds the client-identifying header value and charset to the builders."""

    def __init__(self, client_version: Optional[str] = None, charset: str = "utf-8") -> None:
        self.client_version = client_version or DEFAULT_CLIENT_VERSION
        self.charset = charset

    def get(self, url: str, *params: NameValuePair) -> Request:
        return build_get(url, *params, client_version=self.client_version, charset=self.charset)

    def post(self, url: str, *params: NameValuePair) -> Request:
        return build_post(url, *params, client_version=self.client_version, charset=self.charset)

    def json_post(self, url: str, data: str) -> Request:
        return build_json_post(url, data, client_version=self.client_version, charset=self.charset)

    def delete(self, url: str, *params: NameValuePair) -> Request:
        return build_delete(url, *params, client_version=self.client_version, charset=self.charset)

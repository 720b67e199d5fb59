"""
HTTP API facade - request builders plus a classified executor over a shared pool.

Endpoint-specific APIs subclass HttpApi (or take one as a collaborator) and
call execute_request() / do_post() with requests built by the create_* methods.
"""

from __future__ import annotations
import logging
from typing import Optional, Protocol

import httpx

from .errors import TransportError
from .request import NameValuePair, Request, RequestBuilder
from .status import classify_post_response, classify_response
from .transport.pool import ConnectionPool


class HttpApiProtocol(Protocol):
    """Caller-facing surface of the HTTP API layer."""

    def execute_request(self, request: Request) -> str: ...

    def do_post(self, url: str, *params: NameValuePair) -> str: ...

    def create_http_get(self, url: str, *params: NameValuePair) -> Request: ...

    def create_http_post(self, url: str, *params: NameValuePair) -> Request: ...

    def create_http_json_post(self, url: str, data: str) -> Request: ...

    def create_http_delete(self, url: str, *params: NameValuePair) -> Request: ...


class HttpApi:
    """
    Builds requests, sends them through the shared ConnectionPool and turns the
    status code into a body string or an AuthError/ApiError/TransportError.

    The pool is passed in, never created here: one pool serves every HttpApi in
    the process and is safe to use from many threads at once.
    """

    def __init__(
        self,
        pool: ConnectionPool,
        client_version: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._pool = pool
        self._builder = RequestBuilder(
            client_version or pool.config.client_version,
            charset=pool.config.charset,
        )
        self._logger = logger or logging.getLogger(__name__)

    @property
    def client_version(self) -> str:
        return self._builder.client_version

    # ---------------- Executors ----------------
    def execute_request(self, request: Request) -> str:
        """Execute and classify with the generic status mapping."""
        self._logger.debug("doHttpRequest: %s", request.url)
        response = self.execute(request)
        self._logger.debug("executed HttpRequest for: %s", request.url)
        return self._classify(lambda: classify_response(response, request.url), request)

    def do_post(self, url: str, *params: NameValuePair) -> str:
        """Build a form POST, execute it and classify with the POST mapping."""
        self._logger.debug("doHttpPost: %s", url)
        request = self.create_http_post(url, *params)
        response = self.execute(request)
        self._logger.debug("executed HttpRequest for: %s", request.url)
        return self._classify(lambda: classify_post_response(response), request)

    def execute(self, request: Request) -> httpx.Response:
        """
        Send the request and return the raw, still-streaming response.

        The caller owns the returned response and must close it. On I/O failure
        httpx tears down the half-used connection before raising, so nothing
        goes back to the pool; the failure surfaces as TransportError.
        """
        self._logger.debug("executing HttpRequest for: %s", request.url)
        client = self._pool.acquire()
        try:
            self._pool.reclaim_expired()
            return client.send(request.to_httpx(), stream=True)
        except httpx.TransportError as e:
            self._logger.debug("HttpRequest failed for %s: %s", request.url, e)
            raise TransportError(f"{type(e).__name__}: {e}", request.url) from e

    def _classify(self, classify, request: Request) -> str:
        try:
            return classify()
        except httpx.TransportError as e:
            # Failure while reading or draining the body
            self._logger.debug("Reading response failed for %s: %s", request.url, e)
            raise TransportError(f"{type(e).__name__}: {e}", request.url) from e

    # ---------------- Builders ----------------
    def create_http_get(self, url: str, *params: NameValuePair) -> Request:
        return self._builder.get(url, *params)

    def create_http_post(self, url: str, *params: NameValuePair) -> Request:
        return self._builder.post(url, *params)

    def create_http_json_post(self, url: str, data: str) -> Request:
        return self._builder.json_post(url, data)

    def create_http_delete(self, url: str, *params: NameValuePair) -> Request:
        return self._builder.delete(url, *params)

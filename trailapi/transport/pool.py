from __future__ import annotations

"""
Connection pool owning the process-wide httpx.Client.

Constructed once at startup and passed explicitly to every HttpApi. The client
never follows redirects, so callers always see the original status code.
Pooled connections get no stale check of their own; the only per-request check
is the idle-socket poll inside httpcore's has_expired(), run by reclaim_expired().
"""

from typing import Dict, List, NamedTuple, Optional, Tuple
import logging
import socket

import httpx

from ..config import ClientConfig, get_config

logger = logging.getLogger(__name__)


class Scheme(NamedTuple):
    name: str
    default_port: int
    tls: bool


HTTP_PORT = 80
SSL_PORT = 443

SCHEMES: Tuple[Scheme, ...] = (
    Scheme("http", HTTP_PORT, False),
    Scheme("https", SSL_PORT, True),
)


def _socket_options(buffer_size: int) -> List[Tuple[int, int, int]]:
    return [
        (socket.SOL_SOCKET, socket.SO_RCVBUF, buffer_size),
        (socket.SOL_SOCKET, socket.SO_SNDBUF, buffer_size),
    ]


def _timeout(cfg: ClientConfig) -> httpx.Timeout:
    # Read, write and pool-wait share the socket timeout
    return httpx.Timeout(cfg.socket_timeout_s, connect=cfg.connect_timeout_s)


def _limits(cfg: ClientConfig) -> httpx.Limits:
    return httpx.Limits(
        max_connections=cfg.max_connections,
        max_keepalive_connections=cfg.max_keepalive_connections,
        keepalive_expiry=cfg.keepalive_expiry_s,
    )


def _transport_for(scheme: Scheme, cfg: ClientConfig) -> httpx.HTTPTransport:
    return httpx.HTTPTransport(
        verify=cfg.verify_tls if scheme.tls else False,
        http1=True,
        http2=False,
        limits=_limits(cfg),
        retries=0,
        socket_options=_socket_options(cfg.socket_buffer_size),
    )


class ConnectionPool:
    """
    Thread-safe transport handle shared by every request.

    Responsibilities:
      - Register the http (80) and https (443) schemes, each with its own transport
      - Apply the fixed connect/socket timeouts and socket buffer size
      - Keep redirects off so 3xx/4xx/5xx reach the status classifier untouched
      - Reclaim expired idle connections before each request
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.config = config or get_config()
        if transport is not None:
            # Injected transport (e.g. httpx.MockTransport) serves both schemes
            self._transports: Dict[str, httpx.BaseTransport] = {s.name: transport for s in SCHEMES}
        else:
            self._transports = {s.name: _transport_for(s, self.config) for s in SCHEMES}
        mounts = {f"{name}://": t for name, t in self._transports.items()}
        self._client = httpx.Client(
            timeout=_timeout(self.config),
            follow_redirects=False,
            transport=self._transports["http"],
            mounts=mounts,
        )
        logger.debug(
            "Connection pool ready: schemes=%s connect_timeout=%.1fs socket_timeout=%.1fs buffer=%d",
            ",".join(f"{s.name}:{s.default_port}" for s in SCHEMES),
            self.config.connect_timeout_s,
            self.config.socket_timeout_s,
            self.config.socket_buffer_size,
        )

    # ---------------- Public API ----------------
    def acquire(self) -> httpx.Client:
        """Return the shared client. Never construct one per request."""
        return self._client

    def reclaim_expired(self) -> int:
        """
        Close idle pooled connections whose keep-alive expiry has passed.

        httpcore's has_expired() also polls each idle socket for readability,
        so connections the server already closed are dropped here too. Only
        connections already idle are touched, so callers are never blocked on
        an in-flight transfer. Returns the number of connections closed.
        """
        closed = 0
        seen = set()
        for transport in self._transports.values():
            if id(transport) in seen:
                continue
            seen.add(id(transport))
            pool = getattr(transport, "_pool", None)
            if pool is None:
                continue
            for connection in list(getattr(pool, "connections", ())):
                if connection.has_expired():
                    connection.close()
                    closed += 1
        if closed:
            logger.debug("Reclaimed %d expired connection(s)", closed)
        return closed

    def close(self) -> None:
        self._client.close()

    @property
    def closed(self) -> bool:
        return self._client.is_closed

    def __enter__(self) -> "ConnectionPool":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

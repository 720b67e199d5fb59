"""Pytest session bootstrap for this repository.

Responsibilities:
- Ensure the project root (containing the 'trailapi' package) is importable
- Keep TRAILAPI_* variables from the developer's shell out of the tests
- Provide an in-memory transport so no test ever reaches the network
"""

import os
import sys
from typing import Callable, List, Optional

import httpx
import pytest

HERE = os.path.dirname(__file__)
ROOT = os.path.abspath(os.path.join(HERE, '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from trailapi.api import HttpApi  # noqa: E402
from trailapi.config import ClientConfig  # noqa: E402
from trailapi.transport.pool import ConnectionPool  # noqa: E402


class TrackingStream(httpx.SyncByteStream):
    """Response body that records whether it was read and closed."""

    def __init__(self, body: bytes = b"", fail_with: Optional[Exception] = None) -> None:
        self.body = body
        self.fail_with = fail_with
        self.consumed = False
        self.closed = False

    def __iter__(self):
        if self.fail_with is not None:
            raise self.fail_with
        self.consumed = True
        yield self.body

    def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def _env_isolation(tmp_path, monkeypatch):
    # ClientConfig reads .env from the working directory
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.upper().startswith('TRAILAPI_'):
            monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture
def streams() -> List[TrackingStream]:
    return []


@pytest.fixture
def respond(streams) -> Callable[..., httpx.Response]:
    """Build a response whose body stream is tracked in `streams`."""
    def _respond(status: int, body: bytes = b"", **kwargs) -> httpx.Response:
        stream = TrackingStream(body, fail_with=kwargs.pop('fail_with', None))
        streams.append(stream)
        return httpx.Response(status, stream=stream, **kwargs)
    return _respond


@pytest.fixture
def make_api():
    """Create an HttpApi over a ConnectionPool backed by httpx.MockTransport."""
    pools: List[ConnectionPool] = []

    def _make(handler, config: Optional[ClientConfig] = None, client_version: Optional[str] = None) -> HttpApi:
        pool = ConnectionPool(config or ClientConfig(), transport=httpx.MockTransport(handler))
        pools.append(pool)
        return HttpApi(pool, client_version=client_version)

    yield _make
    for pool in pools:
        pool.close()

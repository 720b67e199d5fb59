"""
trailapi - thin HTTP client facade over a shared, pooled httpx client.
"""

from .api import HttpApi, HttpApiProtocol
from .config import ClientConfig, get_config
from .errors import ApiError, AuthError, TrailApiError, TransportError
from .request import (
    Request,
    RequestBuilder,
    build_delete,
    build_get,
    build_json_post,
    build_post,
    strip_nulls,
)
from .transport import ConnectionPool

__version__ = "1.0.0"
__all__ = [
    "HttpApi",
    "HttpApiProtocol",
    "ClientConfig",
    "get_config",
    "ConnectionPool",
    "Request",
    "RequestBuilder",
    "build_get",
    "build_post",
    "build_json_post",
    "build_delete",
    "strip_nulls",
    "TrailApiError",
    "ApiError",
    "AuthError",
    "TransportError",
]

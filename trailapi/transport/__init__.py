"""
Transport layer: the shared, pooled connection handle.

This package exposes:
- pool: ConnectionPool owning the scheme registry, timeouts and the httpx.Client
"""

from .pool import ConnectionPool, Scheme, SCHEMES

__all__ = ["ConnectionPool", "Scheme", "SCHEMES", "pool"]

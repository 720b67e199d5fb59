"""
Error types raised by the HTTP API layer.

Three outcomes besides success: the remote refused our credentials (AuthError),
the remote answered with a non-success status (ApiError), or we never got a
complete answer at all (TransportError).
"""

from __future__ import annotations
from typing import Optional


class TrailApiError(Exception):
    """Base class for errors surfaced by the HTTP API layer."""

    def __init__(self, message: str, extra: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.extra = extra

    def __str__(self) -> str:
        if self.extra:
            return f"{self.message}: {self.extra}"
        return self.message


class ApiError(TrailApiError):
    """Non-success HTTP status. `extra` holds the body or request URL when known."""
    pass


class AuthError(TrailApiError):
    """HTTP 401. Carries the status line only; the response body is never kept."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class TransportError(TrailApiError):
    """Connection or I/O failure before or during the transfer."""
    pass

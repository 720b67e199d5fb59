"""
Status classification: maps an HTTP response to a body or a typed error.

Two mappings exist. The generic one (used by HttpApi.execute_request) special
cases 400, 401, 404 and 500. The POST convenience one (used by HttpApi.do_post)
only distinguishes 200 and 401 and reports everything else with the bare status
line. The POST mapping never received the 400/500 handling; both are kept as-is
so existing callers see the same errors.
"""

from __future__ import annotations
import logging

import httpx

from .errors import ApiError, AuthError
from .utils import truncate_text

logger = logging.getLogger(__name__)

HTTP_OK = 200
HTTP_BAD_REQUEST = 400
HTTP_UNAUTHORIZED = 401
HTTP_NOT_FOUND = 404
HTTP_SERVER_ERROR = 500


def status_line(response: httpx.Response) -> str:
    """Render the status line, e.g. 'HTTP/1.1 404 Not Found'."""
    return f"{response.http_version} {response.status_code} {response.reason_phrase}".rstrip()


def discard(response: httpx.Response) -> None:
    """Drain and close the body so the connection goes back to the pool."""
    try:
        response.read()
    finally:
        response.close()


def classify_response(response: httpx.Response, request_url: str) -> str:
    """Generic mapping. Returns the body text for 200, raises otherwise.

    The response is always closed before this returns or raises.
    """
    try:
        code = response.status_code
        if code == HTTP_OK:
            response.read()
            return response.text

        line = status_line(response)
        if code == HTTP_BAD_REQUEST:
            response.read()
            logger.debug("HTTP Code: 400 body=%s", truncate_text(response.text, 200))
            raise ApiError(line, response.text)

        if code == HTTP_UNAUTHORIZED:
            discard(response)
            logger.debug("HTTP Code: 401")
            raise AuthError(line)

        if code == HTTP_NOT_FOUND:
            discard(response)
            logger.debug("HTTP Code: 404")
            raise ApiError(line, request_url)

        if code == HTTP_SERVER_ERROR:
            discard(response)
            logger.debug("HTTP Code: 500")
            raise ApiError(line, request_url)

        logger.debug("Default case for status code reached: %s", line)
        discard(response)
        raise ApiError(f"Error connecting to GeoZen: {code}. Try again later.")
    finally:
        response.close()


def classify_post_response(response: httpx.Response) -> str:
    """POST convenience mapping: 200 -> body, 401 -> AuthError, else ApiError(status line)."""
    try:
        code = response.status_code
        if code == HTTP_OK:
            response.read()
            return response.text

        line = status_line(response)
        discard(response)
        if code == HTTP_UNAUTHORIZED:
            raise AuthError(line)
        # 404 and every other code alike
        raise ApiError(line)
    finally:
        response.close()

"""Error handling for dispatched requests.

Maps HTTPError exceptions and unexpected failures to structured JSON
responses of the form ``{"error": "<detail>"}``.
"""

import logging

from zing.errors import HTTPError
from zing.http.request import Request
from zing.http.response import Response, error_response

logger = logging.getLogger("zing.server")


def handle_http_error(exc: HTTPError, request: Request) -> Response:
    """Map an HTTPError to its JSON error response."""
    if exc.status == 404:
        logger.warning("%s %s - 404 Not Found", request.method, request.path)
    else:
        logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)

    detail = exc.detail or f"Error {exc.status}"
    return error_response(exc.status, detail).with_headers(exc.headers)


def handle_internal_error(exc: Exception, request: Request) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.error(
        "500 %s %s — unhandled %s",
        request.method,
        request.path,
        type(exc).__name__,
        exc_info=exc,
    )
    return error_response(500, "Internal Server Error")

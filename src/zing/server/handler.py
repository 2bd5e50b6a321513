"""ASGI handler — the request dispatcher.

The only component that touches raw ASGI directly. Per request:

1. build the ``Request`` from the scope
2. intercept the reserved docs prefix (payload or 403)
3. try the static root
4. run the middleware chain (a step may answer on its own)
5. resolve the route and invoke the handler
6. serialise the result, or map the failure to a JSON error
"""

import logging
from collections.abc import Sequence
from typing import Any

from zing._internal.asgi import Receive, Scope, Send
from zing._internal.invoke import invoke
from zing.config import AppConfig
from zing.errors import Forbidden, HTTPError
from zing.events import EventBus
from zing.http.request import Request
from zing.http.response import AnyResponse, StreamingResponse, json_response
from zing.middleware.chain import run_chain
from zing.middleware.protocol import Step
from zing.middleware.static import StaticFiles
from zing.routing.table import RouteTable
from zing.server.errors import handle_http_error, handle_internal_error
from zing.server.negotiation import negotiate
from zing.server.sender import send_response, send_streaming_response

logger = logging.getLogger("zing.server")
access_logger = logging.getLogger("zing.access")


def is_reserved(path: str, prefix: str) -> bool:
    """True if *path* is *prefix* itself or lies underneath it."""
    return path == prefix or path.startswith(prefix + "/")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    table: RouteTable,
    steps: Sequence[Step],
    config: AppConfig,
    events: EventBus,
    static: StaticFiles | None = None,
    docs: dict[str, Any] | None = None,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    access_logger.info("%s %s", request.method, request.url)

    try:
        events.emit("request", request)
        response = await _dispatch(
            request,
            table=table,
            steps=steps,
            config=config,
            static=static,
            docs=docs,
        )
    except HTTPError as exc:
        response = handle_http_error(exc, request)
    except Exception as exc:
        response = handle_internal_error(exc, request)
        _emit_error(events, request, exc)

    # Headers stamped by middleware apply to whatever the request ended with
    if request.response_headers:
        response = response.with_headers(tuple(request.response_headers))

    head = request.method == "HEAD"
    if isinstance(response, StreamingResponse):
        await send_streaming_response(response, send, head=head)
    else:
        await send_response(response, send, head=head)


async def _dispatch(
    request: Request,
    *,
    table: RouteTable,
    steps: Sequence[Step],
    config: AppConfig,
    static: StaticFiles | None,
    docs: dict[str, Any] | None,
) -> AnyResponse:
    # Reserved docs prefix: never delegated to static files or routes
    if docs is not None and is_reserved(request.path, config.docs_path):
        if request.path == config.docs_path and request.method == "GET":
            return json_response(docs)
        msg = f"Forbidden: {config.docs_path} is reserved for API documentation"
        raise Forbidden(msg)

    if static is not None and request.method == "GET":
        file_response = static.resolve(request.path)
        if file_response is not None:
            return file_response

    decision = await run_chain(steps, request)
    if decision is not None:
        return decision.response

    match = table.resolve(request.path, request.method)
    request.params = match.params
    result = await invoke(match.handler, request)
    return negotiate(result, config.default_response_type)


def _emit_error(events: EventBus, request: Request, exc: Exception) -> None:
    """Tell ``error`` listeners about a crashed request.

    A failing listener is logged; the 500 response is still sent.
    """
    try:
        events.emit("error", {"request": request, "exception": exc})
    except Exception:
        logger.exception("error listener failed while reporting %s", type(exc).__name__)

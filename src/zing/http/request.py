"""Per-request context.

Unlike the response, the request is deliberately mutable: middleware
steps fill in ``body``, the dispatcher fills in ``params``, and any step
may stamp outbound headers that the final response will carry.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qsl

from zing._internal.asgi import Receive, Scope
from zing.http.headers import Headers


def parse_query(query_string: bytes | str) -> dict[str, str]:
    """Parse a query string into a flat mapping.

    Repeated keys keep the last value, blank values are preserved.
    """
    if isinstance(query_string, bytes):
        query_string = query_string.decode("latin-1")
    return dict(parse_qsl(query_string, keep_blank_values=True))


@dataclass(slots=True)
class Request:
    """An incoming HTTP request plus the state built up while dispatching it.

    Attributes:
        method: Upper-cased HTTP method.
        path: URL path, without the query string.
        url: Path plus query string, as sent by the client.
        query: Parsed query string (last value wins for repeated keys).
        headers: Case-insensitive request headers.
        client: ``(host, port)`` of the remote peer, if known.
        params: Bracket-segment captures, set once the route is resolved.
        body: Parsed JSON body, set by the body-parsing step.
        response_headers: Headers stamped by middleware for the response.
    """

    method: str
    path: str
    url: str
    query: dict[str, str]
    headers: Headers
    client: tuple[str, int] | None = None
    params: dict[str, str] = field(default_factory=dict)
    body: Any = field(default_factory=dict)
    response_headers: list[tuple[str, str]] = field(default_factory=list)

    _receive: Receive | None = field(default=None, repr=False, compare=False)
    _raw_body: bytes | None = field(default=None, repr=False, compare=False)

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def remote_addr(self) -> str:
        """The client address used to key per-client state."""
        if self.client:
            return self.client[0]
        return "unknown"

    def add_response_header(self, name: str, value: str) -> None:
        """Stamp a header onto whatever response this request ends with."""
        self.response_headers.append((name, value))

    # -- Body access --

    async def read_body(self) -> bytes:
        """Read the full request body.

        The ASGI receive channel is consumed once; later calls return
        the cached bytes.
        """
        if self._raw_body is None:
            self._raw_body = b"".join([chunk async for chunk in self.stream()])
        return self._raw_body

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        if self._receive is None:
            return
        while True:
            message = await self._receive()
            if message["type"] == "http.disconnect":
                break
            chunk = message.get("body", b"")
            if chunk:
                yield chunk
            if not message.get("more_body", False):
                break

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        path = scope["path"]
        query_string: bytes = scope.get("query_string", b"")
        url = f"{path}?{query_string.decode('latin-1')}" if query_string else path
        client = scope.get("client")
        return cls(
            method=scope["method"].upper(),
            path=path,
            url=url,
            query=parse_query(query_string),
            headers=Headers(tuple(scope.get("headers", ()))),
            client=tuple(client) if client else None,
            _receive=receive,
        )

"""Built-in middleware: CORS.

Stamps CORS headers onto every response and answers preflight
``OPTIONS`` requests directly with ``204``.
"""

from dataclasses import dataclass

from zing.http.request import Request
from zing.http.response import Response
from zing.middleware.protocol import PROCEED, Decision, Respond


@dataclass(frozen=True, slots=True)
class CORSConfig:
    """CORS step configuration.

    The defaults are permissive (any origin, the common verbs)::

        CORSConfig(
            allow_origins=("https://example.com",),
            allow_methods=("GET", "POST"),
        )
    """

    allow_origins: tuple[str, ...] = ("*",)
    allow_methods: tuple[str, ...] = ("GET", "POST", "PUT", "DELETE", "OPTIONS")
    allow_headers: tuple[str, ...] = ("Content-Type", "Authorization")
    expose_headers: tuple[str, ...] = ()
    allow_credentials: bool = False
    max_age: int | None = None


class CORSMiddleware:
    """CORS middleware step.

    Handles:
    - Preflight ``OPTIONS`` requests (responds 204, never reaches a handler)
    - Every other request (headers stamped onto the eventual response)
    - Wildcard origins (``"*"``) when credentials are disabled; the
      request's ``Origin`` is echoed back otherwise

    Usage::

        app.use(CORSMiddleware(CORSConfig(allow_origins=("https://example.com",))))
    """

    __slots__ = ("config",)

    def __init__(self, config: CORSConfig | None = None) -> None:
        self.config = config or CORSConfig()

    def _allowed_origin(self, origin: str | None) -> str | None:
        """The value for ``Access-Control-Allow-Origin``, or None to omit it."""
        cfg = self.config
        if "*" in cfg.allow_origins:
            if cfg.allow_credentials and origin:
                return origin
            return "*"
        if origin is not None and origin in cfg.allow_origins:
            return origin
        return None

    def _headers(self, request: Request) -> list[tuple[str, str]]:
        cfg = self.config
        allow_origin = self._allowed_origin(request.headers.get("origin"))
        if allow_origin is None:
            return []

        headers = [("Access-Control-Allow-Origin", allow_origin)]
        if allow_origin != "*":
            headers.append(("Vary", "Origin"))
        headers.append(("Access-Control-Allow-Methods", ", ".join(cfg.allow_methods)))
        if cfg.allow_headers:
            headers.append(("Access-Control-Allow-Headers", ", ".join(cfg.allow_headers)))
        if cfg.expose_headers:
            headers.append(("Access-Control-Expose-Headers", ", ".join(cfg.expose_headers)))
        if cfg.allow_credentials:
            headers.append(("Access-Control-Allow-Credentials", "true"))
        return headers

    def __call__(self, request: Request) -> Decision:
        """Stamp CORS headers; answer preflight requests."""
        headers = self._headers(request)
        for name, value in headers:
            request.add_response_header(name, value)

        if request.method == "OPTIONS":
            response = Response(body="", status=204)
            if self.config.max_age is not None:
                response = response.with_header("Access-Control-Max-Age", str(self.config.max_age))
            return Respond(response)

        return PROCEED

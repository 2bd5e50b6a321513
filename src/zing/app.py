"""Zing application class.

Mutable during setup (middleware, listeners, programmatic routes).
Frozen once startup has loaded the routes directory: from then on the
route table is read-only and requests are dispatched against it.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import anyio

from zing._internal.asgi import Receive, Scope, Send
from zing.config import AppConfig
from zing.docs import build_docs
from zing.events import EventBus, Listener
from zing.middleware.body import parse_json_body
from zing.middleware.cors import CORSMiddleware
from zing.middleware.protocol import Step
from zing.middleware.rate_limit import RateLimitConfig, RateLimiter
from zing.middleware.static import StaticFiles
from zing.routing.loader import LoadResult, RouteLoader
from zing.routing.route import Handler, HttpMethod
from zing.routing.table import RouteTable
from zing.server.handler import handle_request
from zing.server.logs import configure_logging

logger = logging.getLogger("zing.server")


def _welcome(request: Any) -> dict[str, str]:
    """Default landing route."""
    return {"message": "Welcome to zing!"}


@dataclass(slots=True)
class _PendingRoute:
    """A programmatic route waiting for startup."""

    path: str
    handler: Handler
    methods: list[str]


class App:
    """The zing application.

    Usage::

        app = App(AppConfig(enable_cors=True, enable_docs=True))

        @app.on("ready")
        def announce(data):
            print(f"{data['routes']} routes loaded")

        app.run(port=3000)

    Readiness:
        Startup loads every route module before the app answers a single
        request. Under an ASGI server this happens during lifespan
        startup; without lifespan, the first request triggers it and
        every request waits for it to finish.
    """

    __slots__ = (
        "_docs",
        "_events",
        "_load_result",
        "_pending_routes",
        "_rate_limiter",
        "_ready",
        "_startup_lock",
        "_static",
        "_steps",
        "_table",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._events: EventBus = EventBus()
        self._table: RouteTable = RouteTable()
        self._pending_routes: list[_PendingRoute] = []
        self._load_result: LoadResult | None = None
        self._docs: dict[str, Any] | None = None
        self._ready: bool = False
        # Created lazily on the event loop that runs startup
        self._startup_lock: anyio.Lock | None = None

        if self.config.enable_logging:
            configure_logging(self.config.log_file, self.config.log_level)

        self._static: StaticFiles | None = (
            StaticFiles(self.config.static_dir) if self.config.serve_static else None
        )

        # Built-in steps, in fixed order; app.use() appends after them.
        self._steps: list[Step] = [parse_json_body]
        if self.config.enable_cors:
            self._steps.append(CORSMiddleware())
        self._rate_limiter: RateLimiter | None = None
        if self.config.enable_rate_limit:
            self._rate_limiter = RateLimiter(
                RateLimitConfig(
                    requests=self.config.rate_limit_requests,
                    window_seconds=self.config.rate_limit_window,
                    capacity=self.config.rate_limit_capacity,
                )
            )
            self._steps.append(self._rate_limiter)

        self._table.add("/", HttpMethod.GET, _welcome)

    # -- Middleware --

    def use(self, step: Step) -> Step:
        """Append a middleware step to the chain. Usable as a decorator."""
        self._steps.append(step)
        return step

    @property
    def steps(self) -> tuple[Step, ...]:
        """The middleware chain, in execution order."""
        return tuple(self._steps)

    # -- Events --

    def on(self, event: str, listener: Listener | None = None) -> Any:
        """Subscribe to an event. Usable directly or as a decorator."""
        if listener is None:
            return lambda fn: self._events.on(event, fn)
        return self._events.on(event, listener)

    def off(self, event: str, listener: Listener) -> None:
        """Unsubscribe *listener* from *event*."""
        self._events.off(event, listener)

    def emit(self, event: str, data: Any = None) -> int:
        """Publish *data* to every listener of *event*."""
        return self._events.emit(event, data)

    @property
    def events(self) -> EventBus:
        return self._events

    # -- Programmatic routes --

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Programmatic routes are registered after the routes directory,
        so they win over a file-based route with the same key.

        Args:
            path: URL path. ``[name]`` segments make it dynamic.
            methods: HTTP methods. Defaults to ``["GET"]``.
        """

        def decorator(func: Handler) -> Handler:
            self._check_not_ready()
            resolved = [m.upper() for m in (methods or ["GET"])]
            for method in resolved:
                if HttpMethod.parse(method) is None:
                    msg = f"Unsupported HTTP method {method!r} for route {path!r}"
                    raise ValueError(msg)
            self._pending_routes.append(_PendingRoute(path, func, resolved))
            return func

        return decorator

    # -- Introspection --

    @property
    def routes(self) -> RouteTable:
        """The route table (complete once ``ready`` is True)."""
        return self._table

    @property
    def ready(self) -> bool:
        """True once every route module has been loaded."""
        return self._ready

    @property
    def load_result(self) -> LoadResult | None:
        """What the last startup loaded and what failed to load."""
        return self._load_result

    @property
    def rate_limiter(self) -> RateLimiter | None:
        return self._rate_limiter

    # -- Startup --

    async def startup(self) -> None:
        """Load routes, freeze the table, and mark the app ready.

        Idempotent; concurrent callers wait for the first one to finish.
        """
        if self._ready:
            return
        if self._startup_lock is None:
            self._startup_lock = anyio.Lock()
        async with self._startup_lock:
            if self._ready:
                return
            await self._startup()

    async def _startup(self) -> None:
        if self._static is not None:
            self._static.ensure_directory()

        loader = RouteLoader(self.config.routes_dir, events=self._events)
        self._load_result = await loader.load()
        self._load_result.register_into(self._table)

        for pending in self._pending_routes:
            for method in pending.methods:
                self._table.add(pending.path, method, pending.handler)

        self._table.freeze()

        if self.config.enable_docs:
            self._docs = build_docs(
                self._table,
                title=self.config.docs_title,
                version=self.config.docs_version,
                description=self.config.docs_description,
            )

        self._ready = True
        logger.info(
            "Loaded %d route handlers from %s",
            len(self._table),
            Path(self.config.routes_dir),
        )
        self._events.emit("ready", {"routes": len(self._table)})

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Start serving with uvicorn.

        Args:
            host: Override bind host.
            port: Override bind port.
        """
        from zing.server.dev import run_dev_server

        _host = host or self.config.host
        _port = port or self.config.port
        logger.info("Server running at http://%s:%d", _host, _port)
        run_dev_server(self, _host, _port, log_level=self.config.log_level)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles lifespan directly, then delegates HTTP scopes to the
        dispatcher once the app is ready.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        await self.startup()

        await handle_request(
            scope,
            receive,
            send,
            table=self._table,
            steps=self.steps,
            config=self.config,
            events=self._events,
            static=self._static,
            docs=self._docs,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Loads routes at startup so the server only begins accepting
        connections once the route table is complete.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    logger.exception("startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _check_not_ready(self) -> None:
        if self._ready:
            msg = (
                "Cannot add routes after the app has loaded its routes. "
                "Register programmatic routes before the first request."
            )
            raise RuntimeError(msg)

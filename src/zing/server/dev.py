"""Development server.

Starts uvicorn with the live zing App object. Route modules are loaded
during ASGI lifespan startup, before the first connection is accepted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from zing.app import App


def run_dev_server(app: App, host: str, port: int, *, log_level: str = "info") -> None:
    """Serve *app* on ``host:port`` until interrupted.

    Args:
        app: ASGI callable (zing App instance).
        host: Bind host address.
        port: Bind port number.
        log_level: uvicorn's own log level.
    """
    import uvicorn

    config = uvicorn.Config(
        app,
        host=host,
        port=port,
        lifespan="on",
        log_level=log_level,
    )
    server = uvicorn.Server(config)
    server.run()

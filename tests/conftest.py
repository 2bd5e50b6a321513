"""Shared fixtures for zing tests.

Every app built here loads routes from a fresh ``tmp_path`` tree and
keeps logging off, so tests never touch the working directory.
"""

import textwrap
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from zing.app import App
from zing.config import AppConfig
from zing.http.request import Request


@pytest.fixture
def routes_dir(tmp_path: Path) -> Path:
    routes = tmp_path / "routes"
    routes.mkdir()
    return routes


@pytest.fixture
def write_route(routes_dir: Path) -> Callable[[str, str], Path]:
    """Write a route module under the routes directory.

    Usage::

        write_route("api/v1/sum.py", '''
            def GET(request):
                return {"ok": True}
        ''')
    """

    def write(relative: str, source: str) -> Path:
        path = routes_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        return path

    return write


@pytest.fixture
def make_app(tmp_path: Path, routes_dir: Path) -> Callable[..., App]:
    """Build an App rooted in ``tmp_path``; keyword arguments override config."""

    def factory(**overrides: Any) -> App:
        settings: dict[str, Any] = {
            "routes_dir": routes_dir,
            "static_dir": tmp_path / "public",
            "log_file": tmp_path / "logs" / "server.log",
            "enable_logging": False,
        }
        settings.update(overrides)
        return App(AppConfig(**settings))

    return factory


def build_request(
    method: str = "GET",
    path: str = "/",
    *,
    query_string: bytes = b"",
    headers: list[tuple[bytes, bytes]] | None = None,
    chunks: list[bytes] | None = None,
    client: tuple[str, int] | None = ("127.0.0.1", 5000),
) -> Request:
    """Build a Request from a synthetic ASGI scope.

    *chunks* are delivered as successive ``http.request`` messages.
    """
    pending = list(chunks or [b""])

    async def receive() -> dict[str, Any]:
        if not pending:
            return {"type": "http.disconnect"}
        chunk = pending.pop(0)
        return {"type": "http.request", "body": chunk, "more_body": bool(pending)}

    scope = {
        "type": "http",
        "method": method,
        "path": path,
        "query_string": query_string,
        "headers": headers or [],
        "client": client,
    }
    return Request.from_asgi(scope, receive)


@pytest.fixture
def make_request() -> Callable[..., Request]:
    return build_request

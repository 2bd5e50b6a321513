"""Zing exception hierarchy.

Shared across the route table, loader, middleware, and dispatcher so
every module raises and catches the same types.
"""

from dataclasses import dataclass
from pathlib import Path


class ZingError(Exception):
    """Base for all zing-specific errors."""


class ConfigurationError(ZingError):
    """Raised when app configuration is invalid.

    Surfaces at ``App()`` construction, before any route is loaded.
    """


class RouteLoadError(ZingError):
    """A single route module failed to import.

    Never fatal: the loader records it, logs it, and keeps going.
    """

    def __init__(self, file: Path, cause: BaseException) -> None:
        self.file = file
        self.cause = cause
        super().__init__(f"Failed to load route {file}: {cause}")


@dataclass(frozen=True, slots=True)
class HTTPError(ZingError):
    """An error that maps directly to an HTTP status code.

    Raised by the route table, middleware, or handlers. The dispatcher
    catches these and answers with ``{"error": detail}``.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class Forbidden(HTTPError):  # noqa: N818
    """403 — the path is reserved or escapes the static root."""

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(status=403, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — the path exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "Method Not Allowed") -> None:
        allow_value = ", ".join(sorted(allowed))
        super().__init__(
            status=405,
            detail=detail,
            headers=(("Allow", allow_value),),
        )


class TooManyRequests(HTTPError):  # noqa: N818
    """429 — the client exhausted its request quota for the current window."""

    def __init__(
        self,
        retry_after: int,
        detail: str = "Too many requests, please try again later.",
    ) -> None:
        super().__init__(
            status=429,
            detail=detail,
            headers=(("Retry-After", str(retry_after)),),
        )

"""Route entries and match results."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, TypeAlias

# Route handler: ``(request) -> value`` or ``(request) -> Awaitable[value]``
Handler: TypeAlias = Callable[..., Any]


class HttpMethod(StrEnum):
    """HTTP methods a route module may export handlers for."""

    CONNECT = "CONNECT"
    DELETE = "DELETE"
    GET = "GET"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    PATCH = "PATCH"
    POST = "POST"
    PUT = "PUT"
    TRACE = "TRACE"

    @classmethod
    def parse(cls, name: str) -> HttpMethod | None:
        """Return the member for *name* (any case), or None if unknown."""
        try:
            return cls(name.upper())
        except ValueError:
            return None


# A bracket-delimited dynamic segment: ``[id]``
BRACKET_RE = re.compile(r"\[([^\[\]/]+)\]")


def is_dynamic(path: str) -> bool:
    """True if *path* contains at least one ``[name]`` segment."""
    return BRACKET_RE.search(path) is not None


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """One exact ``(path, method)`` route."""

    path: str
    method: HttpMethod
    handler: Handler

    @property
    def key(self) -> tuple[str, HttpMethod]:
        return (self.path, self.method)


@dataclass(frozen=True, slots=True)
class DynamicRouteEntry:
    """A parameterized route pattern and the handlers of its module.

    ``param_names`` is ordered left to right, matching the capture
    groups of ``regex``.
    """

    pattern: str
    param_names: tuple[str, ...]
    regex: re.Pattern[str]
    handlers: Mapping[HttpMethod, Handler] = field(default_factory=dict)

    @property
    def methods(self) -> frozenset[str]:
        return frozenset(self.handlers)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful resolution."""

    path: str
    method: HttpMethod
    handler: Handler
    params: dict[str, str]

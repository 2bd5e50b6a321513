"""Route table: exact ``(path, method)`` lookup plus ordered bracket patterns.

Exact routes always win over parameterized ones. Among parameterized
routes, the first registered pattern that matches the whole path wins;
there is no specificity ranking.
"""

import re
from collections.abc import Mapping

from zing.errors import MethodNotAllowed, NotFound
from zing.routing.route import (
    BRACKET_RE,
    DynamicRouteEntry,
    Handler,
    HttpMethod,
    RouteEntry,
    RouteMatch,
)

# A dynamic segment captures one path segment: anything but "/"
_SEGMENT_CAPTURE = "([^/]+)"


def compile_pattern(pattern: str) -> tuple[re.Pattern[str], tuple[str, ...]]:
    """Compile a bracket pattern into a matcher and its parameter names.

    Examples::

        "/user/[id]"            -> r"/user/([^/]+)", ("id",)
        "/org/[org]/repo/[rid]" -> r"/org/([^/]+)/repo/([^/]+)", ("org", "rid")

    Literal text is escaped; the returned regex is meant for ``fullmatch``.
    """
    parts: list[str] = []
    names: list[str] = []
    pos = 0
    for match in BRACKET_RE.finditer(pattern):
        parts.append(re.escape(pattern[pos : match.start()]))
        parts.append(_SEGMENT_CAPTURE)
        names.append(match.group(1))
        pos = match.end()
    parts.append(re.escape(pattern[pos:]))
    return re.compile("".join(parts)), tuple(names)


class RouteTable:
    """Mapping from ``(path, method)`` to handler, plus dynamic patterns.

    Usage::

        table = RouteTable()
        table.register(RouteEntry("/users", HttpMethod.GET, list_users))
        table.register_dynamic("/users/[id]", {HttpMethod.GET: get_user})
        table.freeze()
        match = table.resolve("/users/42", "GET")   # params == {"id": "42"}

    Registration is last-writer-wins. After ``freeze()`` the table is
    read-only.
    """

    __slots__ = ("_dynamic", "_frozen", "_methods_by_path", "_static")

    def __init__(self) -> None:
        self._static: dict[tuple[str, HttpMethod], RouteEntry] = {}
        self._methods_by_path: dict[str, set[HttpMethod]] = {}
        self._dynamic: list[DynamicRouteEntry] = []
        self._frozen = False

    # -- Registration --

    def register(self, entry: RouteEntry) -> None:
        """Insert or overwrite an exact route."""
        self._check_not_frozen()
        self._static[entry.key] = entry
        self._methods_by_path.setdefault(entry.path, set()).add(entry.method)

    def register_dynamic(
        self,
        pattern: str,
        handlers: Mapping[HttpMethod, Handler],
    ) -> DynamicRouteEntry:
        """Register a bracket pattern with its per-method handlers.

        Re-registering an existing pattern replaces it in place, keeping
        its original position in the match order.
        """
        self._check_not_frozen()
        regex, names = compile_pattern(pattern)
        entry = DynamicRouteEntry(
            pattern=pattern,
            param_names=names,
            regex=regex,
            handlers=dict(handlers),
        )
        for i, existing in enumerate(self._dynamic):
            if existing.pattern == pattern:
                self._dynamic[i] = entry
                return entry
        self._dynamic.append(entry)
        return entry

    def add(self, path: str, method: HttpMethod | str, handler: Handler) -> None:
        """Register a single handler, picking exact or dynamic by the path shape."""
        verb = HttpMethod(method.upper()) if isinstance(method, str) else method
        if BRACKET_RE.search(path) is None:
            self.register(RouteEntry(path, verb, handler))
            return
        handlers: dict[HttpMethod, Handler] = {}
        for existing in self._dynamic:
            if existing.pattern == path:
                handlers.update(existing.handlers)
        handlers[verb] = handler
        self.register_dynamic(path, handlers)

    def freeze(self) -> None:
        """Make the table read-only."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = "Cannot register routes after the route table is frozen."
            raise RuntimeError(msg)

    # -- Introspection --

    @property
    def routes(self) -> list[RouteEntry]:
        """Exact routes in registration order."""
        return list(self._static.values())

    @property
    def dynamic_routes(self) -> tuple[DynamicRouteEntry, ...]:
        """Parameterized routes in match order."""
        return tuple(self._dynamic)

    def __len__(self) -> int:
        return len(self._static) + sum(len(d.handlers) for d in self._dynamic)

    # -- Resolution --

    def resolve(self, path: str, method: str) -> RouteMatch:
        """Resolve a request path and method to exactly one handler.

        Raises ``NotFound`` if nothing matches the path, and
        ``MethodNotAllowed`` if the path matches but not for *method*.
        """
        verb = HttpMethod.parse(method)

        if verb is not None:
            entry = self._static.get((path, verb))
            if entry is not None:
                return RouteMatch(path=path, method=verb, handler=entry.handler, params={})

        allowed: set[str] = set(self._methods_by_path.get(path, ()))

        for dynamic in self._dynamic:
            found = dynamic.regex.fullmatch(path)
            if found is None:
                continue
            if verb is not None and verb in dynamic.handlers:
                params = dict(zip(dynamic.param_names, found.groups(), strict=True))
                return RouteMatch(
                    path=path,
                    method=verb,
                    handler=dynamic.handlers[verb],
                    params=params,
                )
            # First matching pattern decides; later patterns are not consulted.
            allowed.update(dynamic.handlers)
            break

        if allowed:
            raise MethodNotAllowed(frozenset(allowed))
        raise NotFound()

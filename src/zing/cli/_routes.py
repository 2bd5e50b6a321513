"""``zing routes`` — list loaded routes.

Resolves an import string to a zing App, loads its routes directory,
and prints every route with method, path, and handler.
"""

import argparse
import sys

import anyio

from zing.cli._resolve import resolve_app
from zing.routing.table import RouteTable


def _handler_name(handler: object) -> str:
    module = getattr(handler, "__module__", "")
    name = getattr(handler, "__qualname__", None) or getattr(handler, "__name__", str(handler))
    if module and not module.startswith("_zing_route_"):
        return f"{module}.{name}"
    return name


def route_rows(table: RouteTable) -> list[tuple[str, str, str]]:
    """Build ``(method, path, handler)`` rows, exact routes first."""
    rows: list[tuple[str, str, str]] = [
        (str(entry.method), entry.path, _handler_name(entry.handler)) for entry in table.routes
    ]
    for dynamic in table.dynamic_routes:
        for method in sorted(dynamic.handlers):
            rows.append((str(method), dynamic.pattern, _handler_name(dynamic.handlers[method])))
    return rows


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of METHOD, PATH, and handler name."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    anyio.run(app.startup)

    rows = route_rows(app.routes)
    if not rows:
        print("No routes registered.")
        return

    # Column widths
    max_methods = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header

    fmt = f"{{:<{max_methods}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "HANDLER"))
    sep_len = max_methods + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for method, path, handler_name in rows:
        print(fmt.format(method, path, handler_name))

    failures = app.load_result.failures if app.load_result else []
    for failure in failures:
        print(failure, file=sys.stderr)

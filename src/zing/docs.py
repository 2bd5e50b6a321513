"""API documentation payload, built by introspecting the route table."""

import inspect
from typing import Any

from zing.routing.route import Handler
from zing.routing.table import RouteTable


def describe_handler(handler: Handler, method: str, path: str) -> str:
    """First line of the handler's docstring, or ``"<METHOD> <path>"``."""
    doc = inspect.getdoc(handler)
    if doc:
        return doc.strip().splitlines()[0]
    return f"{method} {path}"


def _operation(handler: Handler, method: str, path: str) -> dict[str, Any]:
    return {
        "description": describe_handler(handler, method, path),
        "responses": {"200": {"description": "Successful response"}},
    }


def build_docs(
    table: RouteTable,
    *,
    title: str,
    version: str,
    description: str,
) -> dict[str, Any]:
    """Build the ``GET /docs`` payload.

    Shape::

        {
          "info": {"title": ..., "version": ..., "description": ...},
          "paths": {
            "/api/v1/sum": {"get": {"description": ..., "responses": {...}}},
            "/user/[id]":  {"get": {..., "parameters": [{"name": "id", "in": "path"}]}},
          },
        }
    """
    paths: dict[str, dict[str, Any]] = {}

    for entry in sorted(table.routes, key=lambda e: (e.path, e.method)):
        paths.setdefault(entry.path, {})[entry.method.lower()] = _operation(
            entry.handler, entry.method, entry.path
        )

    for dynamic in table.dynamic_routes:
        parameters = [{"name": name, "in": "path", "required": True} for name in dynamic.param_names]
        operations = paths.setdefault(dynamic.pattern, {})
        for method in sorted(dynamic.handlers):
            operation = _operation(dynamic.handlers[method], method, dynamic.pattern)
            operation["parameters"] = parameters
            operations[method.lower()] = operation

    return {
        "info": {"title": title, "version": version, "description": description},
        "paths": paths,
    }

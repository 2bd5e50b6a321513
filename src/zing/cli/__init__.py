"""Zing CLI — dev server, route listing, and project scaffolding.

Entry point registered as ``zing`` in ``pyproject.toml``::

    [project.scripts]
    zing = "zing.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``zing`` command."""
    parser = argparse.ArgumentParser(
        prog="zing",
        description="Zing — a file-system routed HTTP framework.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- zing new ---------------------------------------------------------
    new_parser = subparsers.add_parser("new", help="Create a new project")
    new_parser.add_argument("name", help="Project directory name")

    # -- zing run ---------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the server")
    run_parser.add_argument(
        "app",
        help="Import string (e.g. myapp:app)",
    )
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")

    # -- zing routes ------------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List loaded routes")
    routes_parser.add_argument(
        "app",
        help="Import string (e.g. myapp:app)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "new":
        from zing.cli._new import create_project

        create_project(args)
    elif args.command == "run":
        from zing.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from zing.cli._routes import run_routes

        run_routes(args)

"""``zing new`` — project scaffolding command.

Creates a project directory with an ``app.py`` entry point and a
``routes/`` directory holding one starter route.
"""

import argparse
import sys
from pathlib import Path

APP_PY = '''\
"""{name} — a zing application."""

from zing import App, AppConfig

app = App(AppConfig(enable_cors=True, enable_docs=True))

if __name__ == "__main__":
    app.run()
'''

INDEX_ROUTE_PY = '''\
"""GET /index"""


def GET(request):
    """Say hello."""
    return {{"message": "Hello from {name}!"}}
'''

SUM_ROUTE_PY = '''\
"""POST /api/sum"""


def POST(request):
    """Add two numbers."""
    return {"result": request.body["a"] + request.body["b"]}
'''


def create_project(args: argparse.Namespace) -> None:
    """Generate a new zing project directory.

    Creates the project at ``./<args.name>/`` relative to cwd.
    Refuses to overwrite an existing directory.
    """
    project_dir = Path(args.name)

    if project_dir.exists():
        print(
            f"Error: directory '{args.name}' already exists",
            file=sys.stderr,
        )
        raise SystemExit(1)

    name = project_dir.name
    (project_dir / "routes" / "api").mkdir(parents=True)
    (project_dir / "public").mkdir()
    (project_dir / "app.py").write_text(APP_PY.format(name=name), encoding="utf-8")
    (project_dir / "routes" / "index.py").write_text(
        INDEX_ROUTE_PY.format(name=name), encoding="utf-8"
    )
    (project_dir / "routes" / "api" / "sum.py").write_text(SUM_ROUTE_PY, encoding="utf-8")

    print(f"Created project '{args.name}'")
    print()
    print(f"  cd {args.name} && python app.py")

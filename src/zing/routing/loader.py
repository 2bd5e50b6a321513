"""Filesystem route discovery for the routes/ directory.

Every ``.py`` file under the routes root is a handler module. Its URL
path is its relative path without the extension::

    routes/index.py          -> /index
    routes/api/v1/sum.py     -> /api/v1/sum
    routes/user/[id].py      -> /user/[id]      (dynamic, param "id")

A module exports handlers as functions named after HTTP methods
(``GET``/``get``, ``POST``/``post``, ...) or as a ``handlers`` mapping
from method name to callable. Files and directories whose names start
with ``_`` or ``.`` are skipped.

Modules are imported concurrently in worker threads, then registered in
sorted file order once every import has finished, so the resulting
table does not depend on which import happened to finish first.
"""

import importlib.util
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType

import anyio
import anyio.to_thread

from zing.errors import RouteLoadError
from zing.events import EventBus
from zing.routing.route import Handler, HttpMethod, RouteEntry, is_dynamic
from zing.routing.table import RouteTable

logger = logging.getLogger("zing.routing")

ROUTE_SUFFIX = ".py"

# Written to <routes>/index.py when the routes directory does not exist yet
DEFAULT_INDEX_ROUTE = '''\
"""Default route created on first run."""


def GET(request):
    return {"message": "Hello from zing dynamic route!"}
'''


@dataclass(frozen=True, slots=True)
class LoadedModule:
    """A route module that imported successfully."""

    file: Path
    path: str
    handlers: dict[HttpMethod, Handler]

    @property
    def dynamic(self) -> bool:
        return is_dynamic(self.path)


@dataclass(slots=True)
class LoadResult:
    """Outcome of one loader pass, in sorted file order."""

    modules: list[LoadedModule] = field(default_factory=list)
    failures: list[RouteLoadError] = field(default_factory=list)

    def register_into(self, table: RouteTable) -> None:
        """Register every loaded module into *table*."""
        for module in self.modules:
            if not module.handlers:
                continue
            if module.dynamic:
                table.register_dynamic(module.path, module.handlers)
            else:
                for method, handler in module.handlers.items():
                    table.register(RouteEntry(module.path, method, handler))


def route_path_for(file: Path, root: Path) -> str:
    """Derive the URL path of a route file relative to the routes root."""
    relative = file.relative_to(root).with_suffix("")
    return "/" + relative.as_posix()


def find_route_files(root: Path) -> list[Path]:
    """Recursively list route files under *root*, sorted by path."""
    found: list[Path] = []
    for item in sorted(root.iterdir()):
        if item.name.startswith(("_", ".")):
            continue
        if item.is_dir():
            found.extend(find_route_files(item))
        elif item.is_file() and item.suffix == ROUTE_SUFFIX:
            found.append(item)
    return found


def import_route_module(file: Path) -> ModuleType:
    """Execute a route file as a fresh, anonymous module."""
    module_name = f"_zing_route_{file.stem}_{id(file)}"
    spec = importlib.util.spec_from_file_location(module_name, file)
    if spec is None or spec.loader is None:
        msg = f"cannot create an import spec for {file}"
        raise ImportError(msg)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def extract_handlers(module: ModuleType, file: Path) -> dict[HttpMethod, Handler]:
    """Collect the HTTP handlers a route module exports.

    Entries of a ``handlers`` mapping take precedence over module-level
    functions named after the same method.
    """
    found: dict[HttpMethod, Handler] = {}

    mapping = getattr(module, "handlers", None)
    if isinstance(mapping, Mapping):
        for key, func in mapping.items():
            method = HttpMethod.parse(str(key))
            if method is None:
                logger.warning("Ignoring unknown method %r in %s", key, file)
                continue
            if not callable(func):
                logger.warning("Ignoring non-callable %s handler in %s", method, file)
                continue
            found[method] = func

    for method in HttpMethod:
        if method in found:
            continue
        for name in (method.value, method.value.lower()):
            func = getattr(module, name, None)
            if func is not None and callable(func):
                found[method] = func
                break

    return found


class RouteLoader:
    """Loads every route module under a root directory.

    Usage::

        loader = RouteLoader("routes")
        result = await loader.load()
        result.register_into(table)
    """

    __slots__ = ("_events", "root")

    def __init__(self, root: str | Path, *, events: EventBus | None = None) -> None:
        self.root = Path(root)
        self._events = events

    def ensure_root(self) -> bool:
        """Create the routes directory with a default index route if missing.

        Returns True if the directory had to be created.
        """
        if self.root.is_dir():
            return False
        self.root.mkdir(parents=True, exist_ok=True)
        (self.root / "index.py").write_text(DEFAULT_INDEX_ROUTE, encoding="utf-8")
        logger.info("Created routes directory %s", self.root)
        return True

    async def load(self) -> LoadResult:
        """Import all route modules and report what loaded and what failed.

        A module that fails to import is logged and skipped; it never
        prevents its siblings from loading.
        """
        self.ensure_root()
        root = self.root.resolve()
        files = find_route_files(root)
        outcomes: list[LoadedModule | RouteLoadError | None] = [None] * len(files)

        async def load_one(index: int, file: Path) -> None:
            try:
                module = await anyio.to_thread.run_sync(import_route_module, file)
                handlers = extract_handlers(module, file)
            except (Exception, SystemExit) as exc:
                # sys.exit() at import counts as a load failure
                outcomes[index] = RouteLoadError(file, exc)
                return
            outcomes[index] = LoadedModule(
                file=file,
                path=route_path_for(file, root),
                handlers=handlers,
            )

        async with anyio.create_task_group() as tg:
            for index, file in enumerate(files):
                tg.start_soon(load_one, index, file)

        result = LoadResult()
        for outcome in outcomes:
            if isinstance(outcome, RouteLoadError):
                result.failures.append(outcome)
                logger.error("Failed to load route %s: %s", outcome.file.name, outcome.cause)
                self._emit("route.failed", {"file": str(outcome.file), "error": outcome.cause})
            elif isinstance(outcome, LoadedModule):
                result.modules.append(outcome)
                if not outcome.handlers:
                    logger.warning("No handlers exported by %s", outcome.file.name)
                    continue
                logger.info("Loaded route: %s", outcome.path)
                self._emit(
                    "route.loaded",
                    {
                        "path": outcome.path,
                        "methods": sorted(outcome.handlers),
                        "file": str(outcome.file),
                    },
                )
        return result

    def _emit(self, event: str, data: object) -> None:
        if self._events is not None:
            self._events.emit(event, data)

"""Runtime registrar — load route modules and register them directly.

The alternative to code generation: at application startup, every route
module under the routes directory is imported and its handlers bound on
the host app, one isolated :class:`RouteGroup` per file::

    from chirp import App
    from fileroutes import register_routes

    app = App()
    register_routes(app, "src/routes")

Only ``GET`` and ``POST`` are recognised by default, and ``config``
middleware is not applied; use the generated module for both.
"""

import importlib.util
import logging
import re
import sys
from collections.abc import Callable
from pathlib import Path
from types import ModuleType
from typing import Any

from fileroutes._errors import RouteLoadError
from fileroutes._logging import configure_logging
from fileroutes._types import HandlerFunc, RouteTarget
from fileroutes.routes.group import RouteGroup, invoke
from fileroutes.routes.manifest import RouteEntry, check_unique, collect_routes
from fileroutes.routes.pattern import RoutePattern

logger = logging.getLogger("fileroutes.loader")

# Verbs bound by register_routes unless overridden
RUNTIME_METHODS: tuple[str, ...] = ("GET", "POST")

DEFAULT_ROUTES_DIR = "./src/routes"

_MODULE_PREFIX = "fileroutes_routes"
_UNSAFE_CHARS = re.compile(r"\W")


def register_routes(
    app: RouteTarget,
    routes_dir: str | Path = DEFAULT_ROUTES_DIR,
    *,
    methods: tuple[str, ...] = RUNTIME_METHODS,
    externals: tuple[str, ...] = (),
    verbose: bool = False,
) -> RouteTarget:
    """Load every route module under *routes_dir* and mount it on *app*.

    A missing directory registers nothing.  Registration is all-or-nothing
    from the caller's point of view: the first failure propagates.
    *verbose* logs each registered route to stderr.

    Raises:
        RouteLoadError: If a route module cannot be resolved or raises on import.
        RoutePatternError: If a file path cannot be translated.
        ConfigError: If two files map to the same route pattern.

    """
    if verbose:
        configure_logging(True)
    base = Path(routes_dir).resolve()
    entries = collect_routes(base, externals)

    groups: list[tuple[RoutePattern, RouteGroup]] = []
    bound: list[RouteEntry] = []
    for entry in entries:
        module = load_route_module(entry.file.path, base)
        group = RouteGroup()
        for method in methods:
            handler = getattr(module, method, None)
            if not callable(handler):
                continue
            if entry.pattern.catch_all is not None:
                handler = catch_all_endpoint(handler, entry.pattern)
            group.add("/", method, handler)

        if group.bindings:
            bound.append(entry)
            groups.append((entry.pattern, group))
        else:
            logger.debug("%s has no %s handlers, skipping", entry.file.relative, "/".join(methods))

    check_unique(bound)

    for pattern, group in groups:
        group.mount(app, pattern.to_chirp())
        logger.debug(
            "Registered %s %s",
            ",".join(b.method for b in group.bindings),
            pattern,
        )

    return app


def load_route_module(path: Path, routes_dir: Path) -> ModuleType:
    """Import a route file as a module without touching ``sys.path``.

    The module is registered in ``sys.modules`` under a name derived from
    its position in *routes_dir*, e.g. ``fileroutes_routes.users._id_``.

    Raises:
        RouteLoadError: If the file cannot be resolved or raises on import.

    """
    module_name = _module_name(Path(path), Path(routes_dir))
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        msg = f"Cannot resolve route module {path}"
        raise RouteLoadError(Path(path), msg)

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        msg = f"Failed to load route module {path}: {exc}"
        raise RouteLoadError(Path(path), msg) from exc
    return module


def catch_all_endpoint(handler: HandlerFunc, pattern: RoutePattern) -> Callable[..., Any]:
    """Wrap *handler* so it receives the catch-all suffix as a second argument."""

    async def endpoint(request: Any) -> Any:
        return await invoke(handler, request, pattern.catch_all_suffix(request.path))

    endpoint.__name__ = getattr(handler, "__name__", "endpoint")
    return endpoint


def _module_name(path: Path, routes_dir: Path) -> str:
    """``users/[id].py`` -> ``fileroutes_routes.users._id_``."""
    try:
        relative = path.resolve().relative_to(routes_dir.resolve())
    except ValueError:
        relative = Path(path.name)
    parts = [_UNSAFE_CHARS.sub("_", part) for part in relative.with_suffix("").parts]
    return ".".join([_MODULE_PREFIX, *parts])

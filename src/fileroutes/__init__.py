"""fileroutes — file-based routing for chirp apps.

Route modules under ``src/routes`` become routes without a hand-written
route table::

    src/routes/index.py              -> /
    src/routes/users/[id].py         -> /users/{id}
    src/routes/articles/[...slug].py -> /articles/{slug:path}

Each module defines handlers named after HTTP verbs (``def GET(request)``)
and optionally a ``config`` dict of per-verb middleware.

Two delivery modes::

    fileroutes.generate(config)             # ahead of time: write a module
    fileroutes.register_routes(app, dir)    # at startup: load and bind

"""

__version__ = "0.1.0"
__all__ = [
    "RoutesConfig",
    "__version__",
    "analyze_exports",
    "generate",
    "load_config",
    "load_virtual_module",
    "register_routes",
    "scan_routes",
    "translate",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import fileroutes`` cheap for generated modules, which only
    need ``fileroutes.runtime``.
    """
    if name == "RoutesConfig":
        from fileroutes.config import RoutesConfig

        return RoutesConfig

    if name == "load_config":
        from fileroutes.config_loader import load_config

        return load_config

    if name == "generate":
        from fileroutes.codegen.generator import generate

        return generate

    if name == "load_virtual_module":
        from fileroutes.codegen.virtual import load_virtual_module

        return load_virtual_module

    if name == "register_routes":
        from fileroutes.routes.loader import register_routes

        return register_routes

    if name == "analyze_exports":
        from fileroutes.routes.analyzer import analyze_exports

        return analyze_exports

    if name == "scan_routes":
        from fileroutes.routes.scanner import scan_routes

        return scan_routes

    if name == "translate":
        from fileroutes.routes.pattern import translate

        return translate

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)

"""Route discovery: scanning, path translation, export analysis, registration.

Public API::

    from fileroutes.routes import analyze_exports, register_routes, scan_routes, translate

    str(translate("users/[id].py"))               # "/users/:id"
    analyze_exports(Path("src/routes/users.py"))  # RouteExports(...)
    register_routes(app, "src/routes")
"""

from fileroutes.routes.analyzer import HTTP_METHODS, RouteExports, analyze_exports, analyze_source
from fileroutes.routes.group import RouteGroup, invoke
from fileroutes.routes.loader import RUNTIME_METHODS, load_route_module, register_routes
from fileroutes.routes.manifest import RouteEntry, collect_routes
from fileroutes.routes.pattern import RoutePattern, Segment, SegmentKind, translate
from fileroutes.routes.scanner import RouteFile, scan_routes

__all__ = [
    "HTTP_METHODS",
    "RUNTIME_METHODS",
    "RouteEntry",
    "RouteExports",
    "RouteFile",
    "RouteGroup",
    "RoutePattern",
    "Segment",
    "SegmentKind",
    "analyze_exports",
    "analyze_source",
    "collect_routes",
    "invoke",
    "load_route_module",
    "register_routes",
    "scan_routes",
    "translate",
]

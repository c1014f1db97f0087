"""Development loop: watch route files, regenerate, restart the server."""

from fileroutes.dev.reloader import ServerProcess
from fileroutes.dev.scaffold import ROUTE_TEMPLATE, render_template, scaffold_route
from fileroutes.dev.watcher import RouteChange, RouteWatcher, to_route_change

__all__ = [
    "ROUTE_TEMPLATE",
    "RouteChange",
    "RouteWatcher",
    "ServerProcess",
    "render_template",
    "scaffold_route",
    "to_route_change",
]

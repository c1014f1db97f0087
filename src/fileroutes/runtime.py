"""Runtime helpers imported by generated route modules.

Generated code depends only on the names re-exported here, so they stay
stable while internal modules move.
"""

from fileroutes.routes.group import RouteGroup, invoke
from fileroutes.routes.loader import load_route_module

__all__ = ["RouteGroup", "invoke", "load_route_module"]

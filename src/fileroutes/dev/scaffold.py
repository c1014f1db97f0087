"""Scaffolding for newly created, empty route files."""

import logging
from pathlib import Path

from fileroutes.routes.pattern import translate
from fileroutes.routes.scanner import is_private

logger = logging.getLogger("fileroutes.dev")

ROUTE_TEMPLATE = '''\
"""Handlers for {pattern}."""


def GET(request):
    return "Hello from {pattern}"
'''

CATCH_ALL_TEMPLATE = '''\
"""Handlers for {pattern}."""


def GET(request, parts):
    return "Hello from {pattern}: " + "/".join(parts)
'''


def render_template(relative: str) -> str:
    """Default body for the route file at *relative* (to the routes dir)."""
    pattern = translate(relative)
    template = CATCH_ALL_TEMPLATE if pattern.catch_all is not None else ROUTE_TEMPLATE
    return template.format(pattern=pattern)


def scaffold_route(path: Path, routes_dir: Path) -> bool:
    """Write the default template into *path* if it exists and is empty.

    Private modules (``__init__.py``, ``_helpers.py``) are never routes and
    are left alone.  Returns True when the file was scaffolded.

    """
    if is_private(path):
        return False
    try:
        if path.read_text(encoding="utf-8").strip():
            return False
    except FileNotFoundError:
        return False

    relative = path.relative_to(routes_dir).as_posix()
    path.write_text(render_template(relative), encoding="utf-8")
    logger.info("Scaffolded %s", relative)
    return True

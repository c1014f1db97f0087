"""Shared test fixtures for fileroutes."""

from __future__ import annotations

import inspect
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from fileroutes.config import RoutesConfig
from fileroutes.routes.group import invoke


@dataclass(frozen=True, slots=True)
class FakeRequest:
    """Just enough of a chirp Request for handlers and endpoints."""

    path: str
    method: str = "GET"
    path_params: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Registered:
    path: str
    methods: tuple[str, ...]
    name: str | None
    handler: Any


class RecordingApp:
    """Stands in for chirp's App: records ``app.route(...)(handler)`` calls."""

    def __init__(self) -> None:
        self.routes: list[Registered] = []

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Any:
        def decorator(func: Any) -> Any:
            self.routes.append(Registered(path, tuple(methods or ["GET"]), name, func))
            return func

        return decorator

    def handler_for(self, path: str, method: str = "GET") -> Any:
        for registered in self.routes:
            if registered.path == path and method in registered.methods:
                return registered.handler
        msg = f"No route registered for {method} {path}"
        raise KeyError(msg)

    @property
    def paths(self) -> list[tuple[str, str]]:
        return [(r.path, m) for r in self.routes for m in r.methods]


async def call_by_name(handler: Any, request: FakeRequest) -> Any:
    """Call *handler* the way chirp does: keyword arguments matched by name."""
    kwargs: dict[str, Any] = {}
    for name in inspect.signature(handler).parameters:
        if name == "request":
            kwargs[name] = request
        elif name in request.path_params:
            kwargs[name] = request.path_params[name]
    return await invoke(handler, **kwargs)


def write_route(routes_dir: Path, name: str, content: str) -> Path:
    """Write a route module and return its path."""
    p = routes_dir / name
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content)
    return p


@pytest.fixture
def routes_dir(tmp_path: Path) -> Path:
    """Create the default src/routes directory under a temp project root."""
    d = tmp_path / "src" / "routes"
    d.mkdir(parents=True)
    return d


@pytest.fixture
def config(tmp_path: Path, routes_dir: Path) -> RoutesConfig:
    """A RoutesConfig rooted at the temp project."""
    return RoutesConfig(root=tmp_path)


@pytest.fixture
def app() -> RecordingApp:
    return RecordingApp()


@pytest.fixture
def sample_routes(routes_dir: Path) -> Path:
    """A small routes tree covering index, params, catch-all and middleware."""
    write_route(routes_dir, "index.py", (
        "def GET(request):\n"
        "    return 'home'\n"
    ))
    write_route(routes_dir, "users/index.py", (
        "async def GET(request):\n"
        "    return 'users'\n"
        "\n"
        "async def POST(request):\n"
        "    return 'created'\n"
        "\n"
        "async def require_auth(request, next):\n"
        "    return 'auth:' + await next(request)\n"
        "\n"
        "config = {'POST': [require_auth]}\n"
    ))
    write_route(routes_dir, "users/[id].py", (
        "def GET(request):\n"
        "    return 'user ' + request.path_params['id']\n"
        "\n"
        "def DELETE(request):\n"
        "    return 'deleted ' + request.path_params['id']\n"
    ))
    write_route(routes_dir, "articles/[...slug].py", (
        "def GET(request, parts):\n"
        "    return parts\n"
    ))
    write_route(routes_dir, "helpers.py", (
        "CONSTANT = 42\n"
        "\n"
        "def helper():\n"
        "    return CONSTANT\n"
    ))
    return routes_dir


@pytest.fixture
def clean_modules():
    """Drop route and virtual modules registered in sys.modules by a test."""
    before = set(sys.modules)
    yield
    for name in set(sys.modules) - before:
        if name.startswith(("fileroutes_routes", "generated_routes", "test_generated")):
            del sys.modules[name]


@pytest.fixture
def restore_logging():
    """Undo changes a test makes to the ``fileroutes`` logger."""
    logger = logging.getLogger("fileroutes")
    handlers = list(logger.handlers)
    level = logger.level
    logger.handlers[:] = [h for h in handlers if h.get_name() != "fileroutes-stderr"]
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)

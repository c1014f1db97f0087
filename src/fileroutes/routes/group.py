"""Route groups — one isolated sub-router per route file.

A group collects method bindings relative to its own root and is then
mounted on the host app under the file's route pattern::

    group = RouteGroup()
    group.add("/", "GET", users.GET)
    group.add("/", "POST", users.POST, middleware=users.config["POST"])
    group.mount(app, "/users/{id}")

Middleware follows chirp's shape, ``async (request, next) -> response``, and
runs outermost first.
"""

import functools
import inspect
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from fileroutes._types import HandlerFunc, MiddlewareFunc, RouteTarget


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a sync or async handler and await the result if needed."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


@dataclass(frozen=True, slots=True)
class Binding:
    """A handler bound to a method and a path relative to its group."""

    path: str
    method: str
    handler: HandlerFunc
    middleware: tuple[MiddlewareFunc, ...] = ()


@dataclass(slots=True)
class RouteGroup:
    """Per-file sub-router. Mutable until mounted."""

    bindings: list[Binding] = field(default_factory=list)

    def add(
        self,
        path: str,
        method: str,
        handler: HandlerFunc,
        middleware: MiddlewareFunc | Sequence[MiddlewareFunc] | None = None,
    ) -> None:
        """Bind *handler* to *method* at *path* within this group."""
        if not callable(handler):
            msg = f"Handler for {method} {path} must be callable, got {type(handler).__name__}"
            raise TypeError(msg)
        self.bindings.append(
            Binding(path, method.upper(), handler, _as_chain(middleware))
        )

    def mount(self, app: RouteTarget, prefix: str) -> RouteTarget:
        """Register every binding on *app* beneath *prefix*; return *app*."""
        for binding in self.bindings:
            full_path = join_paths(prefix, binding.path)
            handler = binding.handler
            if binding.middleware:
                handler = with_middleware(handler, binding.middleware)
            app.route(
                full_path,
                methods=[binding.method],
                name=f"{full_path}:{binding.method}",
            )(handler)
        return app


def join_paths(prefix: str, path: str) -> str:
    """Join a mount prefix and a group-relative path.

    ``join_paths("/users", "/")`` -> ``/users``; ``join_paths("/", "/")`` -> ``/``.
    """
    return "/" + "/".join(p for p in (prefix.strip("/"), path.strip("/")) if p)


def with_middleware(
    handler: HandlerFunc, middleware: Sequence[MiddlewareFunc]
) -> Callable[..., Any]:
    """Wrap *handler* so *middleware* runs around it, first entry outermost.

    The endpoint reports *handler*'s signature, so a host that binds
    arguments by name (chirp passes path params as keywords) still sees
    ``id`` in ``GET(request, id)``.  Everything besides the request is
    forwarded to *handler* untouched.
    """
    request_param = _request_param(handler)

    @functools.wraps(handler)
    async def endpoint(*args: Any, **params: Any) -> Any:
        if request_param in params:
            request = params.pop(request_param)
        else:
            request, *args = args

        async def call(index: int, req: Any) -> Any:
            if index == len(middleware):
                return await invoke(handler, req, *args, **params)
            return await middleware[index](req, lambda r: call(index + 1, r))

        return await call(0, request)

    return endpoint


def _request_param(handler: HandlerFunc) -> str:
    """Name of *handler*'s first parameter, where the request goes."""
    try:
        params = inspect.signature(handler).parameters
    except (TypeError, ValueError):
        return "request"
    return next(iter(params), "request")


def _as_chain(
    middleware: MiddlewareFunc | Sequence[MiddlewareFunc] | None,
) -> tuple[MiddlewareFunc, ...]:
    if middleware is None:
        return ()
    if callable(middleware):
        return (middleware,)
    chain = tuple(middleware)
    for mw in chain:
        if not callable(mw):
            msg = f"Middleware must be callable, got {type(mw).__name__}"
            raise TypeError(msg)
    return chain

"""Shared type definitions for fileroutes."""

from collections.abc import Awaitable, Callable
from typing import Any, Literal, Protocol, TypeAlias

# HTTP verb name, e.g. "GET"
Method: TypeAlias = str

# Request handler exported by a route module (sync or async)
HandlerFunc: TypeAlias = Callable[..., Any]

# chirp-style middleware: async (request, next) -> response
MiddlewareFunc: TypeAlias = Callable[[Any, Callable[[Any], Awaitable[Any]]], Awaitable[Any]]

# Filesystem change kinds the dev watcher reacts to
ChangeKind: TypeAlias = Literal["created", "modified", "deleted"]


class RouteTarget(Protocol):
    """The narrow slice of a host app that fileroutes registers against.

    ``chirp.App`` satisfies it: ``app.route(path, methods=[...])(handler)``.
    """

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Callable[[HandlerFunc], HandlerFunc]: ...

"""Tests for fileroutes.routes.group — per-file sub-routers."""

import inspect

import pytest

from fileroutes.routes.group import RouteGroup, invoke, join_paths, with_middleware

from .conftest import FakeRequest, RecordingApp, call_by_name


def get_home(request):
    return "home"


async def get_async(request):
    return "async home"


class TestJoinPaths:
    """join_paths() never produces double or trailing slashes."""

    @pytest.mark.parametrize(
        ("prefix", "path", "expected"),
        [
            ("/", "/", "/"),
            ("/users", "/", "/users"),
            ("/users/", "/", "/users"),
            ("/users", "/edit", "/users/edit"),
            ("", "", "/"),
        ],
    )
    def test_join(self, prefix: str, path: str, expected: str) -> None:
        assert join_paths(prefix, path) == expected


class TestInvoke:
    """invoke() treats sync and async handlers alike."""

    @pytest.mark.asyncio
    async def test_sync(self) -> None:
        assert await invoke(get_home, FakeRequest("/")) == "home"

    @pytest.mark.asyncio
    async def test_async(self) -> None:
        assert await invoke(get_async, FakeRequest("/")) == "async home"

    @pytest.mark.asyncio
    async def test_extra_args(self) -> None:
        assert await invoke(lambda request, parts: parts, FakeRequest("/"), ["a"]) == ["a"]


class TestRouteGroup:
    """Binding and mounting."""

    def test_mount_registers_each_binding(self) -> None:
        app = RecordingApp()
        group = RouteGroup()
        group.add("/", "GET", get_home)
        group.add("/", "post", get_async)
        group.mount(app, "/users/{id}")
        assert app.paths == [("/users/{id}", "GET"), ("/users/{id}", "POST")]
        assert app.handler_for("/users/{id}", "GET") is get_home

    def test_route_names_unique_per_method(self) -> None:
        app = RecordingApp()
        group = RouteGroup()
        group.add("/", "GET", get_home)
        group.add("/", "POST", get_home)
        group.mount(app, "/")
        assert [r.name for r in app.routes] == ["/:GET", "/:POST"]

    def test_mount_returns_app(self) -> None:
        app = RecordingApp()
        assert RouteGroup().mount(app, "/x") is app
        assert app.routes == []

    def test_groups_are_isolated(self) -> None:
        app = RecordingApp()
        a, b = RouteGroup(), RouteGroup()
        a.add("/", "GET", get_home)
        b.add("/", "GET", get_async)
        a.mount(app, "/a")
        b.mount(app, "/b")
        assert app.handler_for("/a") is get_home
        assert app.handler_for("/b") is get_async

    def test_non_callable_handler(self) -> None:
        with pytest.raises(TypeError, match="must be callable"):
            RouteGroup().add("/", "GET", "not a handler")  # type: ignore[arg-type]

    def test_non_callable_middleware(self) -> None:
        with pytest.raises(TypeError, match="Middleware must be callable"):
            RouteGroup().add("/", "GET", get_home, middleware=[get_home, 42])  # type: ignore[list-item]


class TestMiddleware:
    """with_middleware() runs the chain outermost first."""

    @pytest.mark.asyncio
    async def test_order(self) -> None:
        calls: list[str] = []

        def tracer(label: str):
            async def mw(request, next):
                calls.append(f"{label}:before")
                response = await next(request)
                calls.append(f"{label}:after")
                return response

            return mw

        def handler(request):
            calls.append("handler")
            return "done"

        endpoint = with_middleware(handler, [tracer("outer"), tracer("inner")])
        assert await endpoint(FakeRequest("/")) == "done"
        assert calls == ["outer:before", "inner:before", "handler", "inner:after", "outer:after"]

    @pytest.mark.asyncio
    async def test_short_circuit(self) -> None:
        async def deny(request, next):
            return "forbidden"

        endpoint = with_middleware(get_home, [deny])
        assert await endpoint(FakeRequest("/")) == "forbidden"

    @pytest.mark.asyncio
    async def test_single_middleware_via_group(self) -> None:
        async def shout(request, next):
            return (await next(request)).upper()

        app = RecordingApp()
        group = RouteGroup()
        group.add("/", "GET", get_home, middleware=shout)
        group.mount(app, "/")
        handler = app.handler_for("/")
        assert handler is not get_home
        assert handler.__name__ == "get_home"
        assert await handler(FakeRequest("/")) == "HOME"


class TestMiddlewarePathParams:
    """Wrapped handlers still receive path params bound by name."""

    @staticmethod
    async def stamp(request, next):
        return "mw:" + await next(request)

    def test_signature_matches_handler(self) -> None:
        async def get_user(request, id):
            return id

        endpoint = with_middleware(get_user, [self.stamp])
        assert list(inspect.signature(endpoint).parameters) == ["request", "id"]

    @pytest.mark.asyncio
    async def test_param_passed_through(self) -> None:
        async def get_user(request, id):
            return "user " + id

        app = RecordingApp()
        group = RouteGroup()
        group.add("/", "GET", get_user, middleware=[self.stamp])
        group.mount(app, "/users/{id}")
        request = FakeRequest("/users/5", path_params={"id": "5"})
        assert await call_by_name(app.handler_for("/users/{id}"), request) == "mw:user 5"

    @pytest.mark.asyncio
    async def test_sync_handler_with_params(self) -> None:
        def get_file(request, owner, name):
            return f"{owner}/{name}"

        endpoint = with_middleware(get_file, [self.stamp])
        request = FakeRequest("/x", path_params={"owner": "me", "name": "a.txt"})
        assert await call_by_name(endpoint, request) == "mw:me/a.txt"

    @pytest.mark.asyncio
    async def test_request_param_with_other_name(self) -> None:
        async def get_user(req, id):
            return req.path + ":" + id

        endpoint = with_middleware(get_user, [self.stamp])
        assert await endpoint(req=FakeRequest("/u"), id="7") == "mw:/u:7"

    @pytest.mark.asyncio
    async def test_middleware_sees_replaced_request(self) -> None:
        async def rewrite(request, next):
            return await next(FakeRequest("/rewritten", path_params=request.path_params))

        async def get_user(request, id):
            return request.path + ":" + id

        endpoint = with_middleware(get_user, [rewrite])
        request = FakeRequest("/users/3", path_params={"id": "3"})
        assert await call_by_name(endpoint, request) == "/rewritten:3"

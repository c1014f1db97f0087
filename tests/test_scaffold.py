"""Tests for fileroutes.dev.scaffold — default content for new route files."""

from pathlib import Path

from fileroutes.dev.scaffold import render_template, scaffold_route
from fileroutes.routes.analyzer import analyze_source

from .conftest import write_route


class TestRenderTemplate:

    def test_plain_route(self) -> None:
        body = render_template("users/[id].py")
        assert '"""Handlers for /users/:id."""' in body
        assert "def GET(request):" in body
        assert analyze_source(body).exported == ("GET",)

    def test_catch_all_route(self) -> None:
        body = render_template("docs/[...path].py")
        assert "def GET(request, parts):" in body
        compile(body, "<template>", "exec")


class TestScaffoldRoute:

    def test_empty_file_filled(self, routes_dir: Path) -> None:
        path = write_route(routes_dir, "about.py", "")
        assert scaffold_route(path, routes_dir) is True
        assert "Hello from /about" in path.read_text()

    def test_whitespace_only_counts_as_empty(self, routes_dir: Path) -> None:
        path = write_route(routes_dir, "about.py", "\n  \n")
        assert scaffold_route(path, routes_dir) is True

    def test_existing_content_untouched(self, routes_dir: Path) -> None:
        path = write_route(routes_dir, "about.py", "def POST(request): ...\n")
        assert scaffold_route(path, routes_dir) is False
        assert path.read_text() == "def POST(request): ...\n"

    def test_vanished_file(self, routes_dir: Path) -> None:
        assert scaffold_route(routes_dir / "gone.py", routes_dir) is False
        assert not (routes_dir / "gone.py").exists()

    def test_private_modules_untouched(self, routes_dir: Path) -> None:
        for name in ("__init__.py", "users/__init__.py", "_helpers.py"):
            path = write_route(routes_dir, name, "")
            assert scaffold_route(path, routes_dir) is False
            assert path.read_text() == ""

"""Code generator — compile a routes directory into an importable module.

The generated module imports each route file, builds one isolated
:class:`~fileroutes.routes.group.RouteGroup` per file, and mounts it on the
app handed to ``register_generated_routes``::

    from generated_routes import register_generated_routes

    app = App()
    register_generated_routes(app)

Files are emitted in relative-path order, so regenerating an unchanged
routes directory produces byte-identical output.  Route files that fail to
parse are skipped (and logged); the rest of the module is still produced.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from fileroutes._errors import FileRoutesError, RouteParseError, RoutePatternError, RouteWriteError
from fileroutes._logging import configure_logging
from fileroutes.config import RoutesConfig
from fileroutes.routes.analyzer import CONFIG_NAME, HTTP_METHODS, analyze_exports
from fileroutes.routes.manifest import RouteEntry, check_unique
from fileroutes.routes.pattern import translate
from fileroutes.routes.scanner import scan_routes

logger = logging.getLogger("fileroutes.codegen")

REGISTER_FUNCTION = "register_generated_routes"

_HEADER = "# Generated by fileroutes from {source}. Do not edit: changes are overwritten."
_INDENT = "    "


@dataclass(frozen=True, slots=True)
class GeneratedModule:
    """One generation result.

    Attributes:
        source: Python source text of the module.
        routes: Route files included, in emission order.
        skipped: ``(relative path, error)`` for route files that could not
            be analysed.

    """

    source: str
    routes: tuple[RouteEntry, ...]
    skipped: tuple[tuple[str, FileRoutesError], ...] = ()


def generate(config: RoutesConfig) -> str:
    """Generate the routes module for *config* and return its source.

    When ``config.write`` is set the module is also written to
    ``config.output_path``, replacing whatever was there.

    Raises:
        RouteWriteError: If the output file cannot be written.
        ConfigError: If two route files map to the same pattern.

    """
    if config.verbose:
        configure_logging(True)
    module = build_module(config)
    if config.write:
        write_module(module, config.output_path)
    return module.source


def build_module(config: RoutesConfig) -> GeneratedModule:
    """Scan, translate and analyse the routes directory; render the module."""
    entries: list[RouteEntry] = []
    skipped: list[tuple[str, FileRoutesError]] = []

    output = config.output_path.resolve()

    for route_file in scan_routes(config.routes_path, config.externals):
        if route_file.path == output:
            continue
        try:
            pattern = translate(route_file.relative)
            exports = analyze_exports(route_file.path, HTTP_METHODS)
        except (RouteParseError, RoutePatternError) as exc:
            logger.error("Skipping %s: %s", route_file.relative, exc)
            skipped.append((route_file.relative, exc))
            continue

        if exports.is_empty:
            logger.debug("%s exports no handlers, skipping", route_file.relative)
            continue
        entries.append(RouteEntry(file=route_file, pattern=pattern, exports=exports))

    check_unique(entries)

    source = render_module(entries, config)
    logger.info("Generated %d route(s) from %s", len(entries), config.routes_path)
    return GeneratedModule(source=source, routes=tuple(entries), skipped=tuple(skipped))


def write_module(module: GeneratedModule, output_path: Path) -> None:
    """Overwrite *output_path* with the module source.

    Raises:
        RouteWriteError: On any filesystem error (permissions, missing parent).

    """
    try:
        output_path.write_text(module.source, encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot write generated routes to {output_path}: {exc}"
        raise RouteWriteError(output_path, msg) from exc
    logger.info("Wrote %s", output_path)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def render_module(entries: list[RouteEntry], config: RoutesConfig) -> str:
    """Render the generated module's source for *entries* (already ordered)."""
    needs_invoke = any(e.pattern.catch_all is not None for e in entries)

    runtime_names = ["RouteGroup", "load_route_module"]
    if needs_invoke:
        runtime_names.insert(1, "invoke")

    lines = [_HEADER.format(source=config.routes_dir), ""]
    if config.annotate:
        lines += ["from __future__ import annotations", ""]
    lines.append("from pathlib import Path")
    if config.annotate:
        lines.append("from typing import TYPE_CHECKING")
    lines += ["", f"from fileroutes.runtime import {', '.join(runtime_names)}", ""]
    if config.annotate:
        lines += ["if TYPE_CHECKING:", f"{_INDENT}from chirp import App", ""]

    lines += [f"ROUTES_DIR = {_routes_dir_expr(config)}", ""]
    for i, entry in enumerate(entries):
        lines.append(
            f"_route_{i} = load_route_module(ROUTES_DIR / {_quote(entry.file.relative)}, ROUTES_DIR)"
        )

    signature = f"def {REGISTER_FUNCTION}(app: App) -> App:" if config.annotate else (
        f"def {REGISTER_FUNCTION}(app):"
    )
    lines += ["", "", signature, f'{_INDENT}"""Mount every file-based route on *app* and return it."""']
    for i, entry in enumerate(entries):
        lines += _render_mount(i, entry)
        lines.append("")
    lines.append(f"{_INDENT}return app")

    return "\n".join(lines) + "\n"


def _render_mount(index: int, entry: RouteEntry) -> list[str]:
    assert entry.exports is not None
    module = f"_route_{index}"
    group = f"group_{index}"
    lines = [f"{_INDENT}{group} = RouteGroup()"]

    for method in entry.exports.exported:
        handler = f"{module}.{method}"
        if entry.pattern.catch_all is not None:
            endpoint = f"{module}_{method.lower()}"
            suffix = entry.pattern.suffix_source("request.path")
            lines += [
                "",
                f"{_INDENT}async def {endpoint}(request):",
                f"{_INDENT * 2}return await invoke({handler}, request, {suffix})",
                "",
            ]
            handler = endpoint

        args = f'"/", {_quote(method)}, {handler}'
        if entry.exports.has_middleware(method):
            args += f", middleware={module}.{CONFIG_NAME}[{_quote(method)}]"
        lines.append(f"{_INDENT}{group}.add({args})")

    lines.append(f"{_INDENT}{group}.mount(app, {_quote(entry.pattern.to_chirp())})")
    return lines


def _routes_dir_expr(config: RoutesConfig) -> str:
    """Relative to the generated file when written, absolute when virtual."""
    routes_path = config.routes_path.resolve()
    if not config.write:
        return f"Path({_quote(routes_path.as_posix())})"
    relative = Path(os.path.relpath(routes_path, config.output_path.resolve().parent)).as_posix()
    if relative == ".":
        return "Path(__file__).parent"
    return f"Path(__file__).parent / {_quote(relative)}"


def _quote(value: str) -> str:
    # JSON string literals are valid Python string literals.
    return json.dumps(value)

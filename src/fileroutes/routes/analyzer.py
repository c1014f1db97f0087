"""Export analyzer — find handler and middleware names without importing.

Route modules are parsed with :mod:`ast`; they are never executed, so a
module whose imports are unavailable at generation time still analyses.

Recognised at module top level only::

    def GET(request): ...              # function definition
    async def POST(request): ...       # async function definition
    DELETE = make_handler("delete")    # plain assignment to a bare name
    PUT: Handler = update              # annotated assignment

    config = {"GET": [auth], "POST": rate_limit}   # middleware keys

Imports (``from .x import GET``), names bound inside ``if``/``try`` blocks,
tuple unpacking and ``config = dict(...)`` are deliberately ignored.
"""

import ast
import logging
from dataclasses import dataclass
from pathlib import Path

from fileroutes._errors import RouteParseError

logger = logging.getLogger("fileroutes.analyzer")

# Verbs the code generator recognises
HTTP_METHODS: tuple[str, ...] = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS")

# Module-level name holding per-method middleware
CONFIG_NAME = "config"


@dataclass(frozen=True, slots=True)
class RouteExports:
    """Which verbs a route module defines handlers and middleware for.

    Attributes:
        methods: Verb -> handler presence, for every verb analysed.
        middleware: Verb -> presence of a ``config`` entry, for every verb.

    """

    methods: dict[str, bool]
    middleware: dict[str, bool]

    @property
    def exported(self) -> tuple[str, ...]:
        """Verbs with a handler, in analysis order."""
        return tuple(m for m, present in self.methods.items() if present)

    @property
    def is_empty(self) -> bool:
        return not any(self.methods.values())

    def has_middleware(self, method: str) -> bool:
        return self.middleware.get(method, False)


def analyze_exports(path: Path, methods: tuple[str, ...] = HTTP_METHODS) -> RouteExports:
    """Read and analyse the route module at *path*.

    Raises:
        RouteParseError: If the file cannot be read, decoded, or parsed.

    """
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Cannot read route module {path}: {exc}"
        raise RouteParseError(path, msg) from exc
    return analyze_source(source, path, methods)


def analyze_source(
    source: str,
    filename: Path | str = "<route>",
    methods: tuple[str, ...] = HTTP_METHODS,
) -> RouteExports:
    """Analyse route module *source* text.

    Raises:
        RouteParseError: If *source* is not valid Python.

    """
    try:
        tree = ast.parse(source, filename=str(filename))
    except (SyntaxError, ValueError) as exc:
        msg = f"Cannot parse route module {filename}: {exc}"
        raise RouteParseError(Path(filename), msg) from exc

    found: set[str] = set()
    config_keys: set[str] = set()

    for node in tree.body:
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
            found.add(node.name)
            continue

        for target, value in _assignments(node):
            found.add(target)
            if target == CONFIG_NAME and isinstance(value, ast.Dict):
                config_keys.update(_literal_keys(value))

    exports = RouteExports(
        methods={m: m in found for m in methods},
        middleware={m: m in config_keys for m in methods},
    )
    logger.debug(
        "%s exports %s (middleware: %s)",
        filename,
        ", ".join(exports.exported) or "nothing",
        ", ".join(m for m, v in exports.middleware.items() if v) or "none",
    )
    return exports


def _assignments(node: ast.stmt) -> list[tuple[str, ast.expr]]:
    """Bare-name targets bound by an assignment statement."""
    if isinstance(node, ast.Assign):
        return [(t.id, node.value) for t in node.targets if isinstance(t, ast.Name)]
    if isinstance(node, ast.AnnAssign) and isinstance(node.target, ast.Name):
        # ``GET: Handler`` without a value binds nothing
        if node.value is None:
            return []
        return [(node.target.id, node.value)]
    return []


def _literal_keys(node: ast.Dict) -> set[str]:
    # ``**spread`` entries have a None key
    return {
        key.value
        for key in node.keys
        if isinstance(key, ast.Constant) and isinstance(key.value, str)
    }

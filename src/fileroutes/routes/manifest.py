"""Route manifest — the scan + translate core shared by both delivery modes.

The code generator emits source from manifest entries; the runtime
registrar loads and binds them directly.  Both start here.
"""

from dataclasses import dataclass
from pathlib import Path

from fileroutes._errors import ConfigError
from fileroutes.routes.analyzer import RouteExports
from fileroutes.routes.pattern import RoutePattern, translate
from fileroutes.routes.scanner import RouteFile, scan_routes


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """A route file paired with its pattern and, once analysed, its exports."""

    file: RouteFile
    pattern: RoutePattern
    exports: RouteExports | None = None


def collect_routes(routes_dir: Path, externals: tuple[str, ...] = ()) -> list[RouteEntry]:
    """Scan *routes_dir* and translate every file, in relative-path order.

    Raises:
        RoutePatternError: If a file path cannot be translated.

    """
    base = routes_dir.resolve()
    return [
        RouteEntry(file=f, pattern=translate(f.relative))
        for f in scan_routes(base, externals)
    ]


def check_unique(entries: list[RouteEntry]) -> None:
    """Reject two files mapping to the same route pattern.

    Raises:
        ConfigError: On a duplicate pattern, e.g. ``users.py`` and
            ``users/index.py``.

    """
    seen: dict[str, RouteFile] = {}
    for entry in entries:
        key = str(entry.pattern)
        if key in seen:
            msg = (
                f"Duplicate route path {key!r}: "
                f"defined in {seen[key].path} and {entry.file.path}"
            )
            raise ConfigError(msg)
        seen[key] = entry.file

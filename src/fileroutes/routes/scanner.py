"""Route scanner — find route modules under a routes directory.

Skips ``__pycache__`` directories and files whose names start with ``_``
(``__init__.py``, private helpers).  Caller-supplied ``externals`` glob
patterns exclude further files.
"""

import logging
from dataclasses import dataclass, field
from fnmatch import fnmatch
from pathlib import Path

from fileroutes.routes.pattern import ROUTE_SUFFIXES

logger = logging.getLogger("fileroutes.scanner")


@dataclass(frozen=True, slots=True, order=True)
class RouteFile:
    """A discovered route module.

    Attributes:
        relative: POSIX path relative to the scan root; identity and sort key.
        path: Absolute filesystem path.

    """

    relative: str
    path: Path = field(compare=False)


def scan_routes(base_dir: Path, externals: tuple[str, ...] = ()) -> tuple[RouteFile, ...]:
    """Return every route module under *base_dir*, sorted by relative path.

    Returns an empty tuple when *base_dir* does not exist.

    """
    base_dir = base_dir.resolve()
    if not base_dir.is_dir():
        logger.debug("Routes directory %s not found, no routes to scan", base_dir)
        return ()

    files: list[RouteFile] = []
    for suffix in ROUTE_SUFFIXES:
        for path in base_dir.rglob(f"*{suffix}"):
            if not path.is_file():
                continue
            if is_private(path):
                continue
            if "__pycache__" in path.parts:
                continue
            relative = path.relative_to(base_dir).as_posix()
            if is_external(relative, externals):
                logger.debug("Excluding %s (externals)", relative)
                continue
            files.append(RouteFile(relative=relative, path=path))

    files.sort()
    logger.debug("Found %d route file(s) in %s", len(files), base_dir)
    return tuple(files)


def is_private(path: Path) -> bool:
    """Whether *path* names a private module (``__init__.py``, ``_helpers.py``)."""
    return path.name.startswith("_")


def is_external(relative: str, externals: tuple[str, ...]) -> bool:
    """Whether *relative* matches any exclusion glob (path or file name)."""
    name = relative.rsplit("/", maxsplit=1)[-1]
    return any(fnmatch(relative, pat) or fnmatch(name, pat) for pat in externals)

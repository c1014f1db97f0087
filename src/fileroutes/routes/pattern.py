"""Path translator — route file path to route pattern.

File-path convention::

    routes/index.py              -> /
    routes/users/index.py        -> /users
    routes/users/[id].py         -> /users/:id
    routes/articles/[...slug].py -> /articles/*
    routes/a/[x]/[y].py          -> /a/:x/:y

``str(pattern)`` gives the canonical form above; :meth:`RoutePattern.to_chirp`
gives the host router's syntax (``/users/{id}``, ``/articles/{slug:path}``).
"""

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath

from fileroutes._errors import RoutePatternError

# Source suffixes recognised as route modules
ROUTE_SUFFIXES: tuple[str, ...] = (".py",)

_CATCH_ALL_RE = re.compile(r"^\[\.\.\.(\w+)\]$")
_PARAM_RE = re.compile(r"^\[(\w+)\]$")
_INDEX = "index"


class SegmentKind(Enum):
    """Kind of a single route pattern segment."""

    STATIC = "static"
    PARAM = "param"
    CATCH_ALL = "catch_all"


@dataclass(frozen=True, slots=True)
class Segment:
    """One path segment: a literal, a named parameter, or a catch-all."""

    kind: SegmentKind
    value: str

    def render(self) -> str:
        if self.kind is SegmentKind.PARAM:
            return f":{self.value}"
        if self.kind is SegmentKind.CATCH_ALL:
            return "*"
        return self.value

    def render_chirp(self) -> str:
        if self.kind is SegmentKind.PARAM:
            return "{" + self.value + "}"
        if self.kind is SegmentKind.CATCH_ALL:
            return "{" + self.value + ":path}"
        return self.value


@dataclass(frozen=True, slots=True)
class RoutePattern:
    """An ordered sequence of segments derived from a route file.

    Invariant: at most one catch-all segment, and only in final position.
    An empty segment tuple is the root pattern ``/``.

    """

    segments: tuple[Segment, ...] = ()

    def __post_init__(self) -> None:
        for i, seg in enumerate(self.segments):
            if seg.kind is SegmentKind.CATCH_ALL and i != len(self.segments) - 1:
                msg = (
                    f"Catch-all segment [...{seg.value}] must be the last "
                    f"segment of a route, got {self}"
                )
                raise RoutePatternError(msg)

    def __str__(self) -> str:
        return "/" + "/".join(seg.render() for seg in self.segments)

    @property
    def is_root(self) -> bool:
        return not self.segments

    @property
    def catch_all(self) -> Segment | None:
        """The trailing catch-all segment, if any."""
        if self.segments and self.segments[-1].kind is SegmentKind.CATCH_ALL:
            return self.segments[-1]
        return None

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(
            seg.value for seg in self.segments if seg.kind is not SegmentKind.STATIC
        )

    def to_chirp(self) -> str:
        """Render in chirp's ``{param}`` / ``{name:path}`` syntax."""
        return "/" + "/".join(seg.render_chirp() for seg in self.segments)

    # -- Catch-all suffix ------------------------------------------------

    def _prefix(self) -> tuple[Segment, ...]:
        return self.segments[:-1] if self.catch_all is not None else self.segments

    def static_prefix(self) -> str | None:
        """Literal path before the catch-all, or None if it contains params.

        ``/articles/*`` -> ``/articles``; ``/`` -> ``""``.
        """
        prefix = self._prefix()
        if any(seg.kind is not SegmentKind.STATIC for seg in prefix):
            return None
        return "".join("/" + seg.value for seg in prefix)

    def catch_all_suffix(self, request_path: str) -> list[str]:
        """Split the part of *request_path* captured by the catch-all.

        ``/articles/*`` with ``/articles/a/b/c`` -> ``["a", "b", "c"]``.

        """
        literal = self.static_prefix()
        if literal is not None:
            return request_path[len(literal) + 1:].split("/")
        return request_path.split("/")[len(self._prefix()) + 1:]

    def suffix_source(self, path_expr: str) -> str:
        """Python source computing :meth:`catch_all_suffix` on *path_expr*."""
        literal = self.static_prefix()
        if literal is not None:
            return f'{path_expr}[{len(literal) + 1}:].split("/")'
        return f'{path_expr}.split("/")[{len(self._prefix()) + 1}:]'


def translate(file_path: str | PurePath, base_dir: str | PurePath | None = None) -> RoutePattern:
    """Translate a route file path into its route pattern.

    *file_path* may be absolute (made relative to *base_dir*) or already
    relative to the scan root.

    Raises:
        RoutePatternError: If the file is outside *base_dir* or places a
            catch-all before another segment.

    """
    path = PurePath(file_path)
    if base_dir is not None and path.is_absolute():
        try:
            path = path.relative_to(base_dir)
        except ValueError as exc:
            msg = f"Route file {file_path} is not under {base_dir}"
            raise RoutePatternError(msg) from exc

    if path.suffix in ROUTE_SUFFIXES:
        path = path.with_suffix("")

    segments = [_rewrite(part) for part in path.parts]

    if len(segments) == 1 and segments[0] == Segment(SegmentKind.STATIC, _INDEX):
        return RoutePattern()
    if segments and segments[-1] == Segment(SegmentKind.STATIC, _INDEX):
        segments.pop()

    return RoutePattern(tuple(segments))


def _rewrite(part: str) -> Segment:
    match = _CATCH_ALL_RE.match(part)
    if match:
        return Segment(SegmentKind.CATCH_ALL, match.group(1))
    match = _PARAM_RE.match(part)
    if match:
        return Segment(SegmentKind.PARAM, match.group(1))
    return Segment(SegmentKind.STATIC, part)

"""Route watcher — regenerate the routes module when route files change.

Watches the project root with watchfiles and reacts to route-file changes:

- file created empty -> write the default template (scaffold)
- any change         -> regenerate the module, then signal a reload

Regenerations never overlap.  Changes that arrive while one is running are
batched by watchfiles and handled once it finishes.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, TypeAlias

from watchfiles import Change

from fileroutes._errors import FileRoutesError, RouteWriteError
from fileroutes._logging import configure_logging
from fileroutes.codegen.generator import generate
from fileroutes.dev.scaffold import scaffold_route
from fileroutes.routes.pattern import ROUTE_SUFFIXES
from fileroutes.routes.scanner import is_external

if TYPE_CHECKING:
    import threading

    from fileroutes._types import ChangeKind
    from fileroutes.config import RoutesConfig

logger = logging.getLogger("fileroutes.dev")

ReloadCallback: TypeAlias = Callable[[], Awaitable[None] | None]


@dataclass(frozen=True, slots=True)
class RouteChange:
    """A filesystem change to a route file.

    Attributes:
        path: Absolute path to the changed file.
        kind: Type of filesystem change.

    """

    path: Path
    kind: ChangeKind


_CHANGE_KIND_MAP: dict[Change, ChangeKind] = {
    Change.added: "created",
    Change.modified: "modified",
    Change.deleted: "deleted",
}


def to_route_change(change: Change, path_str: str, config: RoutesConfig) -> RouteChange | None:
    """Map a raw watchfiles change to a RouteChange, or None if irrelevant.

    Only source files under the routes directory count; the generated
    module itself, ``__pycache__`` and externals are ignored.

    """
    path = Path(path_str)
    if path.suffix not in ROUTE_SUFFIXES:
        return None
    if path == config.output_path:
        return None
    try:
        rel = path.relative_to(config.routes_path)
    except ValueError:
        return None
    if "__pycache__" in rel.parts or is_external(rel.as_posix(), config.externals):
        return None
    return RouteChange(path=path, kind=_CHANGE_KIND_MAP.get(change, "modified"))


class RouteWatcher:
    """Keeps the generated routes module in step with the routes directory.

    States: idle, scaffolding (only for newly created empty files), and
    generating.  ``regenerate`` holds an asyncio lock, so two generations
    never write the output file at the same time.

    """

    def __init__(self, config: RoutesConfig, *, on_reload: ReloadCallback | None = None) -> None:
        self._config = config
        self._on_reload = on_reload
        self._lock = asyncio.Lock()
        self.generation_count = 0

    @property
    def is_generating(self) -> bool:
        return self._lock.locked()

    async def regenerate(self) -> str:
        """Run one generation to completion (including the disk write)."""
        async with self._lock:
            source = await asyncio.to_thread(generate, self._config)
            self.generation_count += 1
            return source

    async def handle_changes(self, raw_changes: Iterable[tuple[Change, str]]) -> bool:
        """Process one batch of raw changes; return True if a reload was signalled.

        Raises:
            RouteWriteError: If the generated module cannot be written.

        """
        events = [
            event
            for change, path_str in raw_changes
            if (event := to_route_change(change, path_str, self._config)) is not None
        ]
        if not events:
            return False

        try:
            for event in sorted(events, key=lambda e: str(e.path)):
                logger.info("%s %s", event.kind, event.path.relative_to(self._config.routes_path))
                if event.kind == "created":
                    scaffold_route(event.path, self._config.routes_path)
            await self.regenerate()
        except RouteWriteError:
            raise
        except FileRoutesError as exc:
            logger.error("Route generation failed: %s", exc)
            return False

        await self._signal_reload()
        return True

    async def run(
        self,
        stop_event: asyncio.Event | threading.Event | None = None,
        *,
        initial: bool = True,
    ) -> None:
        """Watch until *stop_event* is set (or the task is cancelled)."""
        from watchfiles import awatch

        if self._config.verbose:
            configure_logging(True)
        if initial:
            await self.regenerate()
            await self._signal_reload()

        logger.info("Watching %s", self._config.routes_path)
        async for raw_changes in awatch(
            self._config.root,
            stop_event=stop_event,
            debounce=self._config.debounce_ms,
            step=100,
        ):
            await self.handle_changes(raw_changes)

    async def _signal_reload(self) -> None:
        if self._on_reload is None:
            return
        # Sync callbacks (ServerProcess.restart) block; keep them off the loop.
        if inspect.iscoroutinefunction(self._on_reload):
            await self._on_reload()
            return
        result = await asyncio.to_thread(self._on_reload)
        if inspect.isawaitable(result):
            await result
